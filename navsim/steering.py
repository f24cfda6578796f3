"""
Per-tick steering: turns a body's kinematic state and the head of its
waypoint queue into a bounded acceleration, and pops waypoints the body is
about to reach or pass.
"""

from __future__ import annotations

import numpy as np

from .constants import DEFAULT_MAX_SPEED
from .navigation import NavigationState, Navigator
from .vector import ORIGIN, distance, normalized_direction


class SteeringController:
    def __init__(self, max_speed: float = DEFAULT_MAX_SPEED) -> None:
        if max_speed <= 0:
            raise ValueError("max_speed must be positive")
        self.max_speed = float(max_speed)

    def braking(self, velocity: np.ndarray) -> np.ndarray:
        """Acceleration that bleeds speed off toward rest."""
        speed = float(np.linalg.norm(velocity))
        velocity_correction = normalized_direction(ORIGIN, velocity)
        return -velocity_correction * min(speed, self.max_speed)

    def steer(
        self,
        navigator: Navigator,
        position: np.ndarray,
        velocity: np.ndarray,
        dt: float,
    ) -> np.ndarray:
        """
        Return the acceleration for this tick.

        Under the cap the body is pushed toward the waypoint with whatever
        speed budget remains, while the current speed is damped, so speed
        settles below ``max_speed`` aimed at the waypoint. When the predicted
        move covers the distance to the waypoint it is popped.
        """
        waypoint = navigator.head
        if navigator.state is not NavigationState.FOLLOWING or waypoint is None:
            return self.braking(velocity)

        speed = float(np.linalg.norm(velocity))
        velocity_correction = normalized_direction(ORIGIN, velocity)
        desired = normalized_direction(position, waypoint)

        throttle = max(self.max_speed - speed, 0.0)
        damping = min(speed, self.max_speed)
        acceleration = desired * throttle - velocity_correction * damping

        future = position + velocity * dt
        predicted = future + acceleration * dt
        if distance(position, predicted) >= distance(position, waypoint):
            navigator.pop()

        return acceleration
