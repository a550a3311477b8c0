#!/usr/bin/env python3
"""
Intersection survey example: how stable are a few reference configurations
when the second entity is jittered around the tolerance?
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import logging
from geokernel import (IntersectionSurvey, Line, Ray, Plane, Segment, Triangle, Circle,
                       Aabb, intersect)

def main():
    logging.basicConfig(level=logging.INFO)
    print("=== Intersection Survey ===\n")

    # Single calls first
    ray = Ray([0, 0, 0], [0, 0, 1])
    plane = Plane([0, 0, 5], [0, 0, 1])
    print(f"{ray} x {plane} -> {intersect(ray, plane)}")

    disk = Circle([0, 0, 0], [0, 0, 1], 1.0)
    line = Line([-2, 0, 0], [1, 0, 0])
    print(f"{line} x {disk} -> {intersect(line, disk)}")

    box0 = Aabb([0, 0, 0], [1, 1, 1])
    box1 = Aabb([0.5, 0.5, 0.5], [2, 2, 2])
    print(f"{box0} x {box1} -> {intersect(box0, box1)}")
    print(f"merged -> {Aabb.from_boxes([box0, box1])}\n")

    survey = IntersectionSurvey()
    survey.add_pair("ray_plane", ray, plane)
    survey.add_pair("line_disk", line, disk)
    survey.add_pair("overlap", Segment([0, 0, 0], [2, 0, 0]), Segment([1, 0, 0], [3, 0, 0]))
    survey.add_pair("crossing", Triangle([0, 0, 0], [2, 0, 0], [0, 2, 0]),
                    Triangle([0.5, -1, -1], [0.5, 3, -1], [0.5, 1, 1]))

    # Jitter of 1e-6 knocks coplanar and collinear pairs into general position
    samples = survey.sample_pairs(n_samples=200, sigma=1e-6, seed=0)
    results = survey.run(samples, max_workers=4)

    print(f"\nResults shape: {results.shape}")
    print(IntersectionSurvey.summarize(results).to_string(index=False))

    analysis = survey.analyze_results(results)
    print(f"\nHits: {analysis['n_hits']} / {analysis['n_pairs']}")
    print(f"Branches: {analysis['branch_counts']}")

if __name__ == "__main__":
    main()
