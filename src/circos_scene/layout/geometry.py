"""Geometric primitives in polar render space.

Angles are radians from the start of the first segment; radii are in
units of the genome ring's inner radius.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from ..core.errors import LayerWarning


def _optional(d: dict, **extra) -> dict:
    d.update({k: v for k, v in extra.items() if v is not None})
    return d


@dataclass(frozen=True)
class PointMark:
    """A single point (SNP-like datum)."""

    angle: float
    radius: float
    color: str | None = None
    size: float | None = None
    opacity: float | None = None
    value: float | None = None
    label: str | None = None

    def to_dict(self) -> dict:
        return _optional(
            {"type": "point", "angle": self.angle, "radius": self.radius},
            color=self.color, size=self.size, opacity=self.opacity,
            value=self.value, label=self.label,
        )


@dataclass(frozen=True)
class ArcSpan:
    """An annular sector between two angles and two radii."""

    start_angle: float
    end_angle: float
    inner_radius: float
    outer_radius: float
    color: str | None = None
    opacity: float | None = None
    value: float | None = None
    label: str | None = None

    @property
    def sweep(self) -> float:
        return self.end_angle - self.start_angle

    def to_dict(self) -> dict:
        return _optional(
            {
                "type": "arc",
                "startAngle": self.start_angle,
                "endAngle": self.end_angle,
                "innerRadius": self.inner_radius,
                "outerRadius": self.outer_radius,
            },
            color=self.color, opacity=self.opacity, value=self.value, label=self.label,
        )


@dataclass(frozen=True)
class Chord:
    """A link between two angles, anchored at one radius."""

    source_angle: float
    target_angle: float
    radius: float
    color: str | None = None
    opacity: float | None = None
    label: str | None = None

    def to_dict(self) -> dict:
        return _optional(
            {
                "type": "chord",
                "sourceAngle": self.source_angle,
                "targetAngle": self.target_angle,
                "radius": self.radius,
            },
            color=self.color, opacity=self.opacity, label=self.label,
        )


@dataclass(frozen=True)
class Polyline:
    """Connected vertices lying on one segment."""

    segment: str
    angles: tuple[float, ...]
    radii: tuple[float, ...]

    def __len__(self) -> int:
        return len(self.angles)

    def to_dict(self) -> dict:
        return {
            "type": "polyline",
            "segment": self.segment,
            "angles": list(self.angles),
            "radii": list(self.radii),
        }


@dataclass(frozen=True)
class Ring:
    """A full (or partial) annulus, used by background tracks."""

    inner_radius: float
    outer_radius: float
    start_angle: float = 0.0
    end_angle: float = 2.0 * math.pi

    def to_dict(self) -> dict:
        return {
            "type": "ring",
            "innerRadius": self.inner_radius,
            "outerRadius": self.outer_radius,
            "startAngle": self.start_angle,
            "endAngle": self.end_angle,
        }


@dataclass(frozen=True)
class TextLabel:
    """Free text anchored in normalized plot space (not genomic)."""

    x: float
    y: float
    text: str

    def to_dict(self) -> dict:
        return {"type": "text", "x": self.x, "y": self.y, "text": self.text}


@dataclass(frozen=True)
class GeometryResult:
    """Primitives computed for one track, plus anything worth reporting."""

    primitives: tuple = ()
    warnings: tuple[LayerWarning, ...] = ()
    value_range: tuple[float, float] | None = None
    legend: dict = field(default_factory=dict)
