import numpy as np
import pytest

from navsim.errors import PathUnavailable
from navsim.render import RenderDescriptor


class FixedRouteProvider:
    """Hands back the same route for every query."""

    def __init__(self, route):
        self.route = [np.array(p, dtype=float) for p in route]
        self.queries = []

    def find_path(self, start, goal, query_mode):
        self.queries.append((np.array(start), np.array(goal), query_mode))
        return [p.copy() for p in self.route]


class UnreachableProvider:
    def find_path(self, start, goal, query_mode):
        raise PathUnavailable(start, goal)


class RecordingRenderer:
    def __init__(self):
        self.calls = []

    def draw(self, position, orientation, scale, object_key, texture_key, draw_state):
        self.calls.append(
            {
                "position": np.array(position),
                "orientation": np.array(orientation),
                "scale": scale,
                "object_key": object_key,
                "texture_key": texture_key,
                "draw_state": draw_state,
            }
        )


@pytest.fixture
def descriptor():
    return RenderDescriptor(object_key="crate", texture_key="wood", scale=0.5)


@pytest.fixture
def route_provider():
    return FixedRouteProvider


@pytest.fixture
def unreachable_provider():
    return UnreachableProvider()


@pytest.fixture
def renderer():
    return RecordingRenderer()
