"""
Waypoint queue and the navigation state machine that guards it.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, List, Optional, Tuple

import numpy as np

from .constants import DEFAULT_QUERY_MODE
from .errors import PathUnavailable
from .providers import NavmeshProvider, QueryMode
from .vector import as_vector

logger = logging.getLogger(__name__)


class NavigationState(str, Enum):
    IDLE = "idle"
    PLANNING = "planning"
    FOLLOWING = "following"


@dataclass
class NavigationEvent:
    kind: str
    waypoint: Optional[Tuple[float, float, float]] = None


def _as_tuple(point: np.ndarray) -> Tuple[float, float, float]:
    return (float(point[0]), float(point[1]), float(point[2]))


class Navigator:
    """
    Owns one body's waypoint queue. The queue is empty exactly when the state
    is IDLE; PLANNING only exists for the duration of ``set_waypoint``.
    """

    def __init__(self) -> None:
        self._queue: Deque[np.ndarray] = deque()
        self.state = NavigationState.IDLE
        self._events: List[NavigationEvent] = []

    def __len__(self) -> int:
        return len(self._queue)

    @property
    def head(self) -> Optional[np.ndarray]:
        return self._queue[0] if self._queue else None

    @property
    def waypoints(self) -> Tuple[Tuple[float, float, float], ...]:
        return tuple(_as_tuple(p) for p in self._queue)

    def set_waypoint(
        self,
        provider: NavmeshProvider,
        start: np.ndarray,
        goal: np.ndarray,
        query_mode: QueryMode = QueryMode(DEFAULT_QUERY_MODE),
    ) -> bool:
        """
        Replace the queue with a fresh plan from ``start`` to ``goal``.

        Returns False when the provider cannot route; the navigator is then
        IDLE with an empty queue. Invalid arguments raise ValueError before
        the current plan is touched; any other provider error leaves the
        navigator IDLE and propagates.
        """
        start = as_vector(start)
        goal = as_vector(goal)
        query_mode = QueryMode(query_mode)

        self._queue.clear()
        self.state = NavigationState.PLANNING
        try:
            plan = [as_vector(p) for p in provider.find_path(start, goal, query_mode)]
        except PathUnavailable as exc:
            logger.warning("Path planning failed: %s", exc)
            plan = []
        finally:
            if self.state is NavigationState.PLANNING:
                self.state = NavigationState.IDLE

        if not plan:
            self.state = NavigationState.IDLE
            self._events.append(NavigationEvent("path_unavailable", _as_tuple(goal)))
            return False

        self._queue.extend(plan)
        self.state = NavigationState.FOLLOWING
        self._events.append(NavigationEvent("path_set", _as_tuple(goal)))
        logger.debug("Following %d waypoints toward %s", len(plan), goal.tolist())
        return True

    def clear_waypoint(self) -> None:
        """Drop any plan in flight and go IDLE."""
        had_plan = bool(self._queue)
        self._queue.clear()
        self.state = NavigationState.IDLE
        if had_plan:
            self._events.append(NavigationEvent("cleared"))

    def pop(self) -> np.ndarray:
        """Remove the head waypoint; an emptied queue means the body arrived."""
        if not self._queue:
            raise IndexError("pop from an empty waypoint queue")
        reached = self._queue.popleft()
        self._events.append(NavigationEvent("waypoint_reached", _as_tuple(reached)))
        if not self._queue:
            self.state = NavigationState.IDLE
            self._events.append(NavigationEvent("arrived", _as_tuple(reached)))
            logger.debug("Arrived at %s", reached.tolist())
        return reached

    def drain_events(self) -> List[NavigationEvent]:
        events, self._events = self._events, []
        return events
