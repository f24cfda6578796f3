"""
Utilities for constructing a World from a request payload and sampling its
trajectories for the frontend.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from .constants import DEFAULT_MAX_SPEED, DEFAULT_QUERY_MODE, DEFAULT_SEGMENTS
from .providers import QueryMode, StraightLineProvider
from .render import RenderDescriptor
from .vector import as_vector
from .world import World


def _vector3(values: Any) -> List[float]:
    vec = list(values)
    if len(vec) < 3:
        vec.extend([0.0] * (3 - len(vec)))
    return [float(v) for v in vec[:3]]


def _build_initial_bodies(scenario_cfg: Dict[str, Any]) -> List[Dict[str, Any]]:
    bodies: List[Dict[str, Any]] = []
    for body in scenario_cfg["bodies"]:
        bodies.append(
            {
                "name": body["name"],
                "mass": body["mass"] if body.get("mass") is not None else 1.0,
                "descriptor": RenderDescriptor(
                    object_key=body.get("objectKey") or "default",
                    texture_key=body.get("textureKey") or "default",
                    scale=float(body.get("scale") or 1.0),
                ),
                "position": _vector3(body.get("position") or [0.0, 0.0, 0.0]),
                "velocity": _vector3(body.get("velocity") or [0.0, 0.0, 0.0]),
                "max_speed": body["maxSpeed"] if body.get("maxSpeed") is not None else DEFAULT_MAX_SPEED,
                "metadata": {"goal": body.get("goal")},
            }
        )
    return bodies


def _build_provider(scenario_cfg: Dict[str, Any]) -> StraightLineProvider:
    bounds = scenario_cfg.get("bounds")
    if bounds is not None and len(bounds) != 2:
        raise ValueError("bounds must be [minCorner, maxCorner]")
    segments = scenario_cfg.get("segments")
    return StraightLineProvider(
        bounds=(_vector3(bounds[0]), _vector3(bounds[1])) if bounds else None,
        segments=segments if segments is not None else DEFAULT_SEGMENTS,
    )


def _extract_metadata(world: World) -> Tuple[List[Dict[str, Any]], List[str]]:
    """
    Shared, static per-body data, in the order positions are reported.
    """
    body_metadata: List[Dict[str, Any]] = []
    ordered_names: List[str] = []
    for body in world.bodies:
        goal = body.metadata.get("goal")
        body_metadata.append(
            {
                "name": body.name,
                "mass": body.mass,
                "maxSpeed": body.max_speed,
                "objectKey": body.descriptor.object_key,
                "textureKey": body.descriptor.texture_key,
                "scale": body.descriptor.scale,
                "goal": as_vector(goal).tolist() if goal is not None else None,
            }
        )
        ordered_names.append(body.name)
    return body_metadata, ordered_names


def samples_for_scenario(scenario_cfg: Dict[str, Any], duration_sec: float, dt_sec: float):
    if dt_sec <= 0:
        raise ValueError("dtSec must be positive")
    if duration_sec <= 0:
        raise ValueError("durationSec must be positive")

    world = World(
        name="User scenario",
        fixed_dt=dt_sec,
        initial_bodies=_build_initial_bodies(scenario_cfg),
    )
    provider = _build_provider(scenario_cfg)
    query_mode = QueryMode(scenario_cfg.get("queryMode") or DEFAULT_QUERY_MODE)

    for body in world.bodies:
        goal = body.metadata.get("goal")
        if goal is not None:
            world.set_waypoint(body.name, provider, _vector3(goal), query_mode)

    body_metadata, ordered_names = _extract_metadata(world)
    raw_samples = world.sample_positions(
        duration_seconds=duration_sec, sample_rate_hz=1.0 / dt_sec
    )

    samples: List[Dict[str, Any]] = []
    for sample in raw_samples:
        by_name = {body["name"]: body for body in sample.get("bodies", [])}
        positions: List[List[float]] = []
        states: List[str] = []
        for name in ordered_names:
            body = by_name[name]
            positions.append([float(v) for v in body["position"]])
            states.append(body["state"])
        samples.append({"t": float(sample["t"]), "positions": positions, "states": states})

    return {"bodyMetadata": body_metadata, "samples": samples, "events": list(world.events)}
