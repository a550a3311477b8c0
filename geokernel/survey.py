"""
Batch intersection survey.

Runs the dispatcher over many entity pairs, optionally perturbed by random
translations, and tabulates the outcome of every call for statistical
inspection of how robust a configuration is near the tolerance.
"""

from typing import List, Dict, Optional, Any
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
import logging
import numpy as np
import pandas as pd

from .config import EPSILON
from .dispatch import intersect, classify
from .errors import GeometryError
from .geometry import EntityBase

logger = logging.getLogger(__name__)

COLUMNS = ['pair_id', 'name', 'kind_a', 'kind_b', 'branch', 'result', 'detail', 'error']


@dataclass
class IntersectionPair:
    """
    A named pair of entities to intersect.
    """
    name: str
    entity_a: EntityBase
    entity_b: EntityBase
    description: str = ""

    def __post_init__(self):
        if not self.description:
            self.description = f"{self.entity_a.type_name} against {self.entity_b.type_name}"


class IntersectionSurvey:
    """
    Intersects a collection of pairs and collects the outcomes in a DataFrame.

    Entities are never mutated: perturbed samples work on copies, and the
    dispatcher is free of shared state so pairs can run on a thread pool.
    """

    def __init__(self, strict:bool=False, tolerance:float=EPSILON):
        self.strict = strict
        self.tolerance = tolerance
        self.pairs: List[IntersectionPair] = []
        self.results_history: List[Dict] = []

    def add_pair(self, name:str, entity_a:EntityBase, entity_b:EntityBase, description:str=""):
        if any(p.name == name for p in self.pairs):
            raise ValueError(f"Pair '{name}' already added")
        self.pairs.append(IntersectionPair(name, entity_a, entity_b, description))

    def sample_pairs(self, n_samples:int=100, sigma:float=1e-3, seed:Optional[int]=None)->List[IntersectionPair]:
        """
        Generate perturbed copies of every pair.

        Each sample translates the second entity by a normally distributed
        offset with standard deviation `sigma` per axis.
        """
        rng = np.random.default_rng(seed)
        samples = []
        for i in range(n_samples):
            for pair in self.pairs:
                moved = pair.entity_b.copy()
                moved.translate(rng.normal(0.0, sigma, 3))
                samples.append(IntersectionPair(f"{pair.name}#{i}", pair.entity_a.copy(), moved, pair.description))
        return samples

    def _evaluate(self, pair_id:int, pair:IntersectionPair)->Dict[str, Any]:
        row = {
            'pair_id': pair_id,
            'name': pair.name,
            'kind_a': pair.entity_a.type_name,
            'kind_b': pair.entity_b.type_name,
            'branch': None,
            'result': None,
            'detail': None,
            'error': None,
        }
        try:
            row['branch'] = classify(pair.entity_a, pair.entity_b, self.tolerance)
            result = intersect(pair.entity_a, pair.entity_b, strict=self.strict, tolerance=self.tolerance)
            row['result'] = result.type_name
            row['detail'] = repr(result)
        except GeometryError as e:
            logger.warning(f"Failed to intersect {pair.name}: {e}")
            row['error'] = f"{type(e).__name__}: {e}"
        return row

    def run(self, pairs:Optional[List[IntersectionPair]]=None, max_workers:Optional[int]=None)->pd.DataFrame:
        """
        Intersect every pair (the registered ones unless `pairs` is given).

        With max_workers set, pairs are spread over a thread pool; rows keep
        the order of the input pairs either way.
        """
        pairs = self.pairs if pairs is None else pairs
        logger.info(f"Running intersection survey over {len(pairs)} pairs...")

        if max_workers:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                rows = list(executor.map(self._evaluate, range(len(pairs)), pairs))
        else:
            rows = [self._evaluate(i, pair) for i, pair in enumerate(pairs)]

        df = pd.DataFrame(rows, columns=COLUMNS)
        self.results_history.append({
            'n_pairs': len(pairs),
            'results': df,
        })
        logger.info(f"Intersection survey complete. Evaluated {len(df)} pairs.")
        return df

    def export_results(self, df:pd.DataFrame, filename:str):
        """Export survey results to CSV, plus a per result kind summary"""
        filepath = Path(filename)
        df.to_csv(filepath, index=False)
        logger.info(f"Results exported to {filepath}")

        summary_file = filepath.with_suffix('.summary.csv')
        summary = self.summarize(df)
        summary.to_csv(summary_file, index=False)
        logger.info(f"Summary exported to {summary_file}")

    @staticmethod
    def summarize(df:pd.DataFrame)->pd.DataFrame:
        """
        count of calls per (kind_a, kind_b, result) with failures reported
        under the result 'error'
        """
        table = df.assign(result=df['result'].fillna('error'))
        return table.groupby(['kind_a', 'kind_b', 'result']).size().reset_index(name='count')

    def analyze_results(self, df:pd.DataFrame)->Dict[str, Any]:
        """
        Overall statistics of a survey run.
        """
        hits = df['result'].notna() & (df['result'] != 'none')
        analysis = {
            'n_pairs': len(df),
            'n_hits': int(hits.sum()),
            'n_errors': int(df['error'].notna().sum()),
            'result_counts': df['result'].value_counts().to_dict(),
            'branch_counts': df['branch'].value_counts().to_dict(),
        }
        return analysis
