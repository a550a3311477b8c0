"""
Process-wide numeric settings.

EPSILON is the tolerance below which floating point quantities are treated as
zero or equal. It is read once at import; set GEOKERNEL_EPSILON in the
environment to override it. GEOKERNEL_STRICT switches the dispatcher default
from "log and return none" to raising on unhandled combinations.
"""

import os

DEFAULT_EPSILON = 1e-10


def _read_epsilon() -> float:
    raw = os.getenv("GEOKERNEL_EPSILON")
    if raw is None or raw.strip() == "":
        return DEFAULT_EPSILON
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"GEOKERNEL_EPSILON must be a number, got {raw!r}")
    if not value > 0:
        raise ValueError(f"GEOKERNEL_EPSILON must be positive, got {value}")
    return value


def _read_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


EPSILON: float = _read_epsilon()
STRICT: bool = _read_flag("GEOKERNEL_STRICT")

__all__ = ["EPSILON", "STRICT", "DEFAULT_EPSILON"]
