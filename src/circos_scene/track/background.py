"""BackgroundTrack: a filled ring behind the data tracks."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..config.defaults import DEFAULT_MAX_RADIUS, DEFAULT_MIN_RADIUS
from ..core.mapping import AngleMapper
from ..layout.geometry import GeometryResult, Ring
from .base import Track


class BackgroundTrack(Track):
    """Fills its radial band over the whole circle.

    Background layers are always placed beneath the other layers of a
    scene, whatever their position in the tracklist.
    """

    kind = "background"

    def __init__(
        self,
        name: str,
        min_radius: float = DEFAULT_MIN_RADIUS,
        max_radius: float = DEFAULT_MAX_RADIUS,
        **style: Any,
    ) -> None:
        super().__init__(name, min_radius, max_radius, style)

    def compute_geometry(self, mapper: AngleMapper, style: Mapping[str, Any]) -> GeometryResult:
        return GeometryResult(primitives=(Ring(self._min_radius, self._max_radius),))
