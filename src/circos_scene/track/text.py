"""TextTrack: free text placed in normalized plot space."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..core.mapping import AngleMapper
from ..layout.geometry import GeometryResult, TextLabel
from .base import Track


class TextTrack(Track):
    """A text label anchored at ``(x, y)``, where the plot center is (0, 0)
    and the genome ring's inner radius is 1.

    Usage::

        TextTrack("title", "Tumor sample 12", x=-0.3, y=0.0, size=14)
    """

    kind = "text"

    def __init__(
        self,
        name: str,
        text: str,
        x: float = -0.3,
        y: float = 0.0,
        min_radius: float = 0.0,
        max_radius: float = 1.0,
        **style: Any,
    ) -> None:
        if not isinstance(text, str):
            raise TypeError(f"text must be a string, got {type(text).__name__}.")
        self._text = text
        self._x = float(x)
        self._y = float(y)
        super().__init__(name, min_radius, max_radius, style)

    @property
    def text(self) -> str:
        return self._text

    @property
    def anchor(self) -> tuple[float, float]:
        return (self._x, self._y)

    def compute_geometry(self, mapper: AngleMapper, style: Mapping[str, Any]) -> GeometryResult:
        return GeometryResult(primitives=(TextLabel(self._x, self._y, self._text),))
