"""
Path provider contract consumed by the navigator, plus a straight-line
provider for scenes that have no navmesh attached.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Protocol, Sequence, Tuple

import numpy as np

from .constants import DEFAULT_SEGMENTS
from .errors import PathUnavailable
from .vector import as_vector


class QueryMode(str, Enum):
    ACCURACY = "accuracy"
    MIDPOINTS = "midpoints"


class NavmeshProvider(Protocol):
    def find_path(
        self, start: np.ndarray, goal: np.ndarray, query_mode: QueryMode
    ) -> Sequence[np.ndarray]:
        """Return ordered waypoints from start to goal or raise PathUnavailable."""
        ...


class StraightLineProvider:
    """
    Routes every query along the segment joining start and goal.

    When ``bounds`` is given as ``(min_corner, max_corner)`` any goal outside
    that box is unreachable. MIDPOINTS mode cuts the segment into
    ``segments`` pieces and returns every cut point after ``start``.
    """

    def __init__(
        self,
        bounds: Optional[Tuple[Sequence[float], Sequence[float]]] = None,
        segments: int = DEFAULT_SEGMENTS,
    ) -> None:
        if segments < 1:
            raise ValueError("segments must be at least 1")
        self.segments = int(segments)
        self.bounds = None
        if bounds is not None:
            lo, hi = as_vector(bounds[0]), as_vector(bounds[1])
            self.bounds = (np.minimum(lo, hi), np.maximum(lo, hi))

    def contains(self, point: np.ndarray) -> bool:
        if self.bounds is None:
            return True
        lo, hi = self.bounds
        return bool(np.all(point >= lo) and np.all(point <= hi))

    def find_path(
        self, start: np.ndarray, goal: np.ndarray, query_mode: QueryMode = QueryMode.ACCURACY
    ) -> List[np.ndarray]:
        start = as_vector(start)
        goal = as_vector(goal)
        if not self.contains(start):
            raise PathUnavailable(start, goal, "start lies outside the navigable area")
        if not self.contains(goal):
            raise PathUnavailable(start, goal, "goal lies outside the navigable area")

        if QueryMode(query_mode) is QueryMode.MIDPOINTS:
            fractions = np.linspace(0.0, 1.0, self.segments + 1)
            return [start + (goal - start) * f for f in fractions[1:]]
        return [goal]
