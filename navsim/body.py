"""
A simulated body that follows waypoints handed out by a path provider.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple

import numpy as np

from .constants import DEFAULT_MAX_SPEED, DEFAULT_QUERY_MODE, IDENTITY_ORIENTATION
from .navigation import NavigationEvent, NavigationState, Navigator
from .providers import NavmeshProvider, QueryMode
from .render import DrawState, RenderDescriptor, Renderer
from .steering import SteeringController
from .vector import as_vector


class Body:
    """
    Point mass with a waypoint queue. Kinematics only change through
    ``update``; the queue only through ``set_waypoint``, ``clear_waypoint``
    and the steering controller popping reached waypoints.
    """

    def __init__(
        self,
        name: str,
        mass: float,
        descriptor: RenderDescriptor,
        position: Iterable[float] = (0.0, 0.0, 0.0),
        velocity: Iterable[float] = (0.0, 0.0, 0.0),
        orientation: Iterable[float] = IDENTITY_ORIENTATION,
        max_speed: float = DEFAULT_MAX_SPEED,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        if mass <= 0:
            raise ValueError("mass must be positive")
        self.name = name
        self.mass = float(mass)
        self.position = as_vector(position)
        self.velocity = as_vector(velocity)
        self.orientation = np.array(list(orientation), dtype=float)
        if self.orientation.shape != (4,):
            raise ValueError("orientation must be a 4-element quaternion")
        self.descriptor = descriptor
        self.controller = SteeringController(max_speed)
        self.navigator = Navigator()
        self.last_acceleration = np.zeros(3, dtype=float)
        self.metadata: Dict[str, Any] = dict(metadata or {})

    @property
    def state(self) -> NavigationState:
        return self.navigator.state

    @property
    def waypoints(self) -> Tuple[Tuple[float, float, float], ...]:
        return self.navigator.waypoints

    @property
    def is_navigating(self) -> bool:
        return self.navigator.state is NavigationState.FOLLOWING

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))

    @property
    def max_speed(self) -> float:
        return self.controller.max_speed

    def set_waypoint(
        self,
        provider: NavmeshProvider,
        goal: Iterable[float],
        query_mode: QueryMode = QueryMode(DEFAULT_QUERY_MODE),
    ) -> bool:
        """Plan from the current position to ``goal``; False if unreachable."""
        return self.navigator.set_waypoint(
            provider, self.position.copy(), as_vector(goal), query_mode
        )

    def clear_waypoint(self) -> None:
        self.navigator.clear_waypoint()

    def update(self, dt: float) -> None:
        """Steer, then advance velocity and position by one fixed step."""
        if dt <= 0:
            raise ValueError("dt must be positive")
        acceleration = self.controller.steer(
            self.navigator, self.position, self.velocity, dt
        )
        self.last_acceleration = acceleration
        self.velocity += acceleration * dt
        self.position += self.velocity * dt

    def drain_events(self) -> List[NavigationEvent]:
        return self.navigator.drain_events()

    def draw(self, renderer: Renderer, draw_state: DrawState) -> None:
        renderer.draw(
            self.position,
            self.orientation,
            self.descriptor.scale,
            self.descriptor.object_key,
            self.descriptor.texture_key,
            draw_state,
        )
