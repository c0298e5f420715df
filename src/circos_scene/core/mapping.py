"""Angle and radius mapping: genomic positions -> angles, values -> radii.

Angles are in radians, measured from 0 at the start of the first segment
and increasing in genome order up to 2*pi.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

import numpy as np

from .errors import DEGENERATE_RANGE, LayerWarning, UnknownSegment
from .genome import CoordinateSystem
from .validation import preview_items, validate_value_range

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi


@dataclass(frozen=True)
class AngleResult:
    """Vectorized angle lookup result.

    ``clamped`` marks positions that fell outside ``[0, segment length]``
    and were pulled back onto the segment.
    """

    angles: np.ndarray
    clamped: np.ndarray

    @property
    def n_clamped(self) -> int:
        return int(self.clamped.sum())


class AngleMapper:
    """Maps (segment, position) pairs onto the circle.

    With ``chr_padding`` p (radians) and n segments, a gap of width p
    follows every segment and each segment's span is compressed by
    ``(2*pi - n*p) / (2*pi)``, so the circle is still covered exactly.
    """

    __slots__ = ("_cs", "_chr_padding", "_scale")

    def __init__(self, cs: CoordinateSystem, chr_padding: float = 0.0) -> None:
        chr_padding = float(chr_padding)
        if not np.isfinite(chr_padding) or chr_padding < 0:
            raise ValueError(f"chr_padding must be a non-negative number, got {chr_padding}.")
        if chr_padding * len(cs) >= TWO_PI:
            raise ValueError(
                f"chr_padding={chr_padding} leaves no room for {len(cs)} segments; "
                f"total padding must stay below 2*pi."
            )
        self._cs = cs
        self._chr_padding = chr_padding
        self._scale = (TWO_PI - chr_padding * len(cs)) / TWO_PI

    @property
    def coordinate_system(self) -> CoordinateSystem:
        return self._cs

    @property
    def chr_padding(self) -> float:
        return self._chr_padding

    def _angle(self, index: int, position: float) -> float:
        base = TWO_PI * (self._cs.offsets[index] + position) / self._cs.total_length()
        return index * self._chr_padding + base * self._scale

    def angle_of(self, segment: str, position: float) -> float:
        """Angle of one position. Out-of-segment positions are clamped with a warning."""
        index = self._cs.index_of(segment)
        length = float(self._cs.lengths[index])
        clamped = min(max(float(position), 0.0), length)
        if clamped != position:
            logger.warning(
                "Position %s is outside segment '%s' [0, %g]; clamped to %g",
                position, segment, length, clamped,
            )
        return float(self._angle(index, clamped))

    def angles(self, segments: np.ndarray, positions: np.ndarray) -> AngleResult:
        """Vectorized angle lookup for parallel segment/position arrays."""
        missing = self._cs.missing(segments)
        if missing:
            raise UnknownSegment(
                f"Segments not present in the genome: {preview_items(missing)}"
            )
        positions = np.asarray(positions, dtype=np.float64)
        if len(positions) == 0:
            return AngleResult(np.empty(0), np.zeros(0, dtype=bool))
        index = np.array([self._cs.index_of(s) for s in segments], dtype=np.int64)
        lengths = self._cs.lengths[index]
        clipped = np.clip(np.nan_to_num(positions, nan=0.0), 0.0, lengths)
        clamped = (clipped != positions)
        base = TWO_PI * (self._cs.offsets[index] + clipped) / self._cs.total_length()
        angles = index * self._chr_padding + base * self._scale
        return AngleResult(angles, clamped)

    def segment_span(self, segment: str) -> tuple[float, float]:
        """(start_angle, end_angle) covered by a segment, excluding its trailing gap."""
        index = self._cs.index_of(segment)
        return (
            float(self._angle(index, 0.0)),
            float(self._angle(index, float(self._cs.lengths[index]))),
        )


def angle_of(
    cs: CoordinateSystem,
    segment: str,
    position: float,
    chr_padding: float = 0.0,
) -> float:
    """Functional form of :meth:`AngleMapper.angle_of`."""
    return AngleMapper(cs, chr_padding).angle_of(segment, position)


@dataclass(frozen=True)
class NormalizeResult:
    """Normalized values plus the range actually used."""

    values: np.ndarray
    value_range: tuple[float, float]
    warning: LayerWarning | None = None

    @property
    def degenerate(self) -> bool:
        return self.warning is not None


def resolve_value_range(values: np.ndarray, value_range: Any = "auto") -> tuple[float, float]:
    """Return ``(lo, hi)``: the explicit range, or min/max of the finite values."""
    value_range = validate_value_range(value_range)
    if value_range != "auto":
        return value_range
    values = np.asarray(values, dtype=np.float64)
    finite = values[np.isfinite(values)]
    if len(finite) == 0:
        return (0.0, 0.0)
    return (float(finite.min()), float(finite.max()))


def normalize_unit(values: Any, value_range: Any = "auto") -> NormalizeResult:
    """Linearly map values onto [0, 1], clamping to the range.

    A degenerate range (lo == hi) places every value at 0.5 and reports a
    ``DegenerateRange`` warning instead of failing.
    """
    values = np.asarray(values, dtype=np.float64)
    lo, hi = resolve_value_range(values, value_range)
    if lo == hi:
        warning = LayerWarning(
            DEGENERATE_RANGE,
            f"Value range [{lo:g}, {hi:g}] is degenerate; values placed at the band midpoint.",
        )
        return NormalizeResult(np.full(len(values), 0.5), (lo, hi), warning)
    unit = (values - lo) / (hi - lo)
    unit = np.clip(np.nan_to_num(unit, nan=0.0), 0.0, 1.0)
    return NormalizeResult(unit, (lo, hi))


def normalize(
    values: Any,
    value_range: Any,
    band: tuple[float, float],
) -> NormalizeResult:
    """Map values linearly into a radius band.

    ``radius = band_min + (value - lo) / (hi - lo) * (band_max - band_min)``
    """
    band_min, band_max = band
    unit = normalize_unit(values, value_range)
    radii = band_min + unit.values * (band_max - band_min)
    return NormalizeResult(radii, unit.value_range, unit.warning)
