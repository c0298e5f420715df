"""Scene: the immutable, renderer-ready result of a build."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ..core.errors import LayerWarning


def _style_to_dict(style: Mapping[str, Any]) -> dict:
    out = {}
    for key, value in style.items():
        head, *rest = key.split("_")
        camel = head + "".join(part.capitalize() for part in rest)
        out[camel] = list(value) if isinstance(value, tuple) else value
    return out


@dataclass(frozen=True)
class SegmentArc:
    """One segment of the genome ring."""

    name: str
    start_angle: float
    end_angle: float
    length: float
    fill_color: str

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "startAngle": self.start_angle,
            "endAngle": self.end_angle,
            "length": self.length,
            "fillColor": self.fill_color,
        }


@dataclass(frozen=True)
class Tick:
    """A scale tick on the genome ring."""

    segment: str
    position: float
    angle: float
    label: str

    def to_dict(self) -> dict:
        return {
            "segment": self.segment,
            "position": self.position,
            "angle": self.angle,
            "label": self.label,
        }


@dataclass(frozen=True)
class GenomeLayout:
    """Angular layout of the genome ring plus its resolved style."""

    segments: tuple[SegmentArc, ...]
    ticks: tuple[Tick, ...] = ()
    style: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def segment(self, name: str) -> SegmentArc:
        for seg in self.segments:
            if seg.name == name:
                return seg
        raise KeyError(f"Segment '{name}' not found in genome layout.")

    def to_dict(self) -> dict:
        return {
            "segments": [s.to_dict() for s in self.segments],
            "ticks": [t.to_dict() for t in self.ticks],
            "style": _style_to_dict(self.style),
        }


@dataclass(frozen=True)
class Layer:
    """One resolved track: geometry primitives plus final style."""

    name: str
    kind: str
    min_radius: float
    max_radius: float
    primitives: tuple = ()
    style: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    value_range: tuple[float, float] | None = None
    warnings: tuple[LayerWarning, ...] = ()
    legend: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def is_background(self) -> bool:
        return self.kind == "background"

    @property
    def is_empty(self) -> bool:
        return len(self.primitives) == 0

    def overlaps(self, other: Layer) -> bool:
        """True if the two layers' radius bands intersect."""
        return self.min_radius < other.max_radius and other.min_radius < self.max_radius

    def to_dict(self) -> dict:
        d = {
            "name": self.name,
            "kind": self.kind,
            "minRadius": self.min_radius,
            "maxRadius": self.max_radius,
            "style": _style_to_dict(self.style),
            "primitives": [p.to_dict() for p in self.primitives],
            "warnings": [w.to_dict() for w in self.warnings],
        }
        if self.value_range is not None:
            d["valueRange"] = list(self.value_range)
        if self.legend:
            d["legend"] = dict(self.legend)
        return d


@dataclass(frozen=True)
class Scene:
    """Genome layout plus ordered layers, handed to the rendering widget.

    Layers are ordered background-first, then in tracklist order.
    """

    genome: GenomeLayout
    layers: tuple[Layer, ...]

    @property
    def names(self) -> list[str]:
        return [layer.name for layer in self.layers]

    @property
    def warnings(self) -> list[tuple[str, LayerWarning]]:
        """All layer warnings as (layer name, warning) pairs."""
        return [(layer.name, w) for layer in self.layers for w in layer.warnings]

    def layer(self, name: str) -> Layer:
        for layer in self.layers:
            if layer.name == name:
                return layer
        raise KeyError(f"Layer '{name}' not found. Available: {self.names}")

    def to_dict(self) -> dict:
        return {
            "genome": self.genome.to_dict(),
            "layers": [layer.to_dict() for layer in self.layers],
            "warnings": [
                {"layer": name, **w.to_dict()} for name, w in self.warnings
            ],
        }
