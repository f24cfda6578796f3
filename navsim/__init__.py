from .body import Body
from .errors import NavigationError, PathUnavailable
from .navigation import NavigationState, Navigator
from .providers import NavmeshProvider, QueryMode, StraightLineProvider
from .render import DrawState, RenderDescriptor, Renderer
from .steering import SteeringController
from .vector import distance, normalized_direction
from .world import World

__all__ = [
    "Body",
    "DrawState",
    "NavigationError",
    "NavigationState",
    "Navigator",
    "NavmeshProvider",
    "PathUnavailable",
    "QueryMode",
    "RenderDescriptor",
    "Renderer",
    "SteeringController",
    "StraightLineProvider",
    "World",
    "distance",
    "normalized_direction",
]
