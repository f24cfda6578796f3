"""
What a body hands to the renderer each frame. Mesh and texture lookup,
matrices and shaders all live on the renderer side.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol, Sequence

import numpy as np


@dataclass(frozen=True)
class RenderDescriptor:
    object_key: str
    texture_key: str
    scale: float = 1.0


@dataclass
class DrawState:
    """Camera, light and backend parameters, passed through untouched."""

    view: Optional[Sequence[Sequence[float]]] = None
    projection: Optional[Sequence[Sequence[float]]] = None
    light: Optional[Sequence[float]] = None
    extras: Dict[str, Any] = field(default_factory=dict)


class Renderer(Protocol):
    def draw(
        self,
        position: np.ndarray,
        orientation: np.ndarray,
        scale: float,
        object_key: str,
        texture_key: str,
        draw_state: DrawState,
    ) -> None:
        ...
