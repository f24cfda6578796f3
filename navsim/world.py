"""
Owning simulation loop for a set of bodies.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .body import Body
from .constants import DEFAULT_MAX_SPEED, DEFAULT_QUERY_MODE, FIXED_TIMESTEP, IDENTITY_ORIENTATION
from .providers import NavmeshProvider, QueryMode
from .render import DrawState, RenderDescriptor, Renderer

logger = logging.getLogger(__name__)


class World:
    """
    Container that owns Body instances and steps them on a fixed timestep.
    Navigation events raised while stepping are collected with the
    simulation time they happened at.
    """

    def __init__(
        self,
        name: str = "Unnamed world",
        fixed_dt: float = FIXED_TIMESTEP,
        initial_bodies: Optional[Sequence[dict]] = None,
    ):
        if fixed_dt <= 0:
            raise ValueError("fixed_dt must be positive")
        self.name = name
        self.fixed_dt = float(fixed_dt)
        self.time = 0.0
        self._lag = 0.0
        self.bodies: List[Body] = []
        self.events: List[Dict[str, Any]] = []
        if initial_bodies:
            self.add_bodies(initial_bodies)

    def add_body(
        self,
        name: str,
        mass: float,
        descriptor: RenderDescriptor,
        position: Iterable[float] = (0.0, 0.0, 0.0),
        velocity: Iterable[float] = (0.0, 0.0, 0.0),
        orientation: Iterable[float] = IDENTITY_ORIENTATION,
        max_speed: float = DEFAULT_MAX_SPEED,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Body:
        if self.get_body(name) is not None:
            raise ValueError(f"duplicate body name: {name}")
        body = Body(
            name,
            mass,
            descriptor,
            position=position,
            velocity=velocity,
            orientation=orientation,
            max_speed=max_speed,
            metadata=metadata,
        )
        self.bodies.append(body)
        return body

    def add_bodies(self, configs: Sequence[dict]) -> List[Body]:
        created = []
        for cfg in configs:
            created.append(
                self.add_body(
                    name=cfg["name"],
                    mass=cfg["mass"],
                    descriptor=cfg["descriptor"],
                    position=cfg.get("position", (0.0, 0.0, 0.0)),
                    velocity=cfg.get("velocity", (0.0, 0.0, 0.0)),
                    orientation=cfg.get("orientation", IDENTITY_ORIENTATION),
                    max_speed=cfg.get("max_speed", DEFAULT_MAX_SPEED),
                    metadata=cfg.get("metadata"),
                )
            )
        return created

    def remove_body(self, name: str) -> None:
        self.bodies = [b for b in self.bodies if b.name != name]

    def get_body(self, name: str) -> Optional[Body]:
        return next((b for b in self.bodies if b.name == name), None)

    def _require_body(self, name: str) -> Body:
        body = self.get_body(name)
        if body is None:
            raise KeyError(f"unknown body: {name}")
        return body

    def set_waypoint(
        self,
        name: str,
        provider: NavmeshProvider,
        goal: Iterable[float],
        query_mode: QueryMode = QueryMode(DEFAULT_QUERY_MODE),
    ) -> bool:
        body = self._require_body(name)
        reachable = body.set_waypoint(provider, goal, query_mode)
        self._collect_events(body)
        return reachable

    def clear_waypoint(self, name: str) -> None:
        body = self._require_body(name)
        body.clear_waypoint()
        self._collect_events(body)

    def _collect_events(self, body: Body) -> None:
        for event in body.drain_events():
            self.events.append(
                {
                    "t": self.time,
                    "type": event.kind,
                    "body": body.name,
                    "waypoint": list(event.waypoint) if event.waypoint else None,
                }
            )

    def drain_events(self) -> List[Dict[str, Any]]:
        """Hand over the events collected so far and start a fresh list."""
        events, self.events = self.events, []
        return events

    def step(self, dt: float) -> None:
        """
        Update every body once, then advance the clock by dt seconds.
        """
        if dt <= 0:
            raise ValueError("dt must be positive")
        self.time += dt
        for body in self.bodies:
            body.update(dt)
            self._collect_events(body)

    def advance(self, elapsed: float) -> int:
        """
        Feed wall-clock time into the accumulator and drain it in fixed steps.
        Returns the number of steps taken; the remainder carries over.
        """
        if elapsed < 0:
            raise ValueError("elapsed must not be negative")
        self._lag += elapsed
        steps = 0
        # tolerance keeps exact multiples of fixed_dt from losing a step to rounding
        while self._lag >= self.fixed_dt - 1e-12:
            self.step(self.fixed_dt)
            self._lag -= self.fixed_dt
            steps += 1
        self._lag = max(self._lag, 0.0)
        return steps

    def draw(self, renderer: Renderer, draw_state: Optional[DrawState] = None) -> None:
        draw_state = draw_state or DrawState()
        for body in self.bodies:
            body.draw(renderer, draw_state)

    def sample_positions(
        self,
        duration_seconds: float = 30.0,
        sample_rate_hz: float = 60.0,
    ) -> List[dict]:
        """
        Step the live world for the requested duration and return one sample
        per step, plus the starting state at t = 0.
        """
        if sample_rate_hz <= 0:
            raise ValueError("sample_rate_hz must be positive")
        if duration_seconds <= 0:
            raise ValueError("duration_seconds must be positive")
        if not self.bodies:
            return []

        dt = 1.0 / sample_rate_hz
        steps = max(1, math.ceil(duration_seconds * sample_rate_hz))

        def capture_sample(t: float) -> dict:
            bodies = []
            for body in self.bodies:
                bodies.append(
                    {
                        "name": body.name,
                        "position": body.position.copy().tolist(),
                        "velocity": body.velocity.copy().tolist(),
                        "state": body.state.value,
                    }
                )
            return {"t": t, "bodies": bodies}

        samples: List[dict] = [capture_sample(0.0)]
        for idx in range(1, steps + 1):
            self.step(dt)
            samples.append(capture_sample(idx * dt))
        logger.debug("Sampled %d steps of %s", steps, self.name)
        return samples
