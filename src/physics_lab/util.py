# MIT License (see LICENSE)
"""
Utility functions for numeric guarding and small vector operations.

Every Stepper in the package funnels divisions and user-supplied numbers
through these helpers so that no ``NaN``/``Infinity`` is ever produced at
the source. Vectors are numpy arrays of shape (2,).
"""
from __future__ import annotations
import math
import os

import numpy as np

from .constants import MIN_DISTANCE


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Allows tuple/list inputs for positions and velocities.
    """
    return np.array(x, dtype=np.float64)


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 2D vector."""
    return float(math.hypot(v[0], v[1]))


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp x into the closed interval [lo, hi]."""
    return lo if x < lo else hi if x > hi else x


def safe_div(num: float, den: float, eps: float = MIN_DISTANCE) -> float:
    """
    Divide with the denominator floored at ``eps`` in magnitude.

    The sign of the denominator is kept, so ``safe_div(1, -0.0)`` is large
    and negative rather than a ZeroDivisionError.
    """
    if abs(den) < eps:
        den = -eps if den < 0 else eps
    return num / den


def finite_or(x: float, fallback: float) -> float:
    """Return x if it is a finite float, otherwise ``fallback``."""
    try:
        value = float(x)
    except (TypeError, ValueError):
        return fallback
    return value if math.isfinite(value) else fallback


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between a and b."""
    return a + (b - a) * t


def smoothstep(t: float) -> float:
    """
    Cubic Hermite ease, t²(3 − 2t), for t in [0, 1].

    Reference: https://en.wikipedia.org/wiki/Smoothstep
    """
    t = clamp(t, 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


def log_level_from_env(default: str = "WARNING") -> str:
    """Log level requested through the PHYSICS_LAB_LOG_LEVEL environment variable."""
    return os.environ.get("PHYSICS_LAB_LOG_LEVEL", default).upper()
