"""
Vector helpers shared by the steering controller and the bodies it drives.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np

ORIGIN = np.zeros(3, dtype=float)


def as_vector(values: Iterable[float]) -> np.ndarray:
    """Coerce a 2- or 3-element iterable into a float vector of shape (3,)."""
    vec = np.array(list(values), dtype=float)
    if vec.shape == (2,):
        vec = np.append(vec, 0.0)
    if vec.shape != (3,):
        raise ValueError("points must have 2 or 3 components")
    return vec


def normalized_direction(start: np.ndarray, end: np.ndarray) -> np.ndarray:
    """
    Unit vector pointing from ``start`` to ``end``.

    Collocated points yield the zero vector instead of NaN, so a body sitting
    on its waypoint (or at rest) never poisons later state.
    """
    offset = np.asarray(end, dtype=float) - np.asarray(start, dtype=float)
    length = np.linalg.norm(offset)
    if length == 0:
        return np.zeros(3, dtype=float)
    return offset / length


def distance(a: np.ndarray, b: np.ndarray) -> float:
    """Return the Euclidean distance between two points."""
    return float(np.linalg.norm(np.asarray(b, dtype=float) - np.asarray(a, dtype=float)))
