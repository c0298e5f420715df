"""Interval tracks: arcs, bars, copy-number and heatmap cells.

All four take parallel (chromosome, start, end) columns and emit one
annular sector per interval. They differ in what the value encodes:
nothing (arc), radius (bar) or color (cnv, heatmap).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import numpy as np

from ..config.defaults import DEFAULT_MAX_RADIUS, DEFAULT_MIN_RADIUS
from ..core.color_scale import ColorScale
from ..core.mapping import AngleMapper, AngleResult, normalize, normalize_unit
from ..core.validation import preview_items, numeric_array, validate_value_range
from ..layout.geometry import ArcSpan, GeometryResult
from .base import PositionalTrack, clamp_warnings, per_datum


def validate_intervals(track_name: str, starts: np.ndarray, ends: np.ndarray) -> None:
    inverted = np.flatnonzero(starts > ends).tolist()
    if inverted:
        raise ValueError(
            f"Track '{track_name}': interval starts must not exceed ends. "
            f"Offending indices: {preview_items(inverted)}"
        )


class IntervalTrack(PositionalTrack):
    """Shared handling of (chromosome, start, end[, value]) columns."""

    data_fields = ("chromosomes", "starts", "ends")
    has_values = False

    def __init__(
        self,
        name: str,
        chromosomes: Any,
        starts: Any,
        ends: Any,
        values: Any = None,
        labels: Any = None,
        range: Any = "auto",
        min_radius: float = DEFAULT_MIN_RADIUS,
        max_radius: float = DEFAULT_MAX_RADIUS,
        **style: Any,
    ) -> None:
        columns = {
            "chromosomes": self._segments(chromosomes, "chromosomes"),
            "starts": numeric_array(starts, "starts"),
            "ends": numeric_array(ends, "ends"),
        }
        if self.has_values:
            if values is None:
                raise TypeError(f"{type(self).__name__} requires 'values'.")
            columns["values"] = numeric_array(values, "values")
        n = self._init_columns(name, labels=labels, **columns)
        validate_intervals(name, self._starts, self._ends)
        self._range = validate_value_range(range)
        super().__init__(name, min_radius, max_radius, style, n_data=n)

    @property
    def chromosomes(self):
        return self._chromosomes

    @property
    def starts(self):
        return self._starts

    @property
    def ends(self):
        return self._ends

    @property
    def value_range(self):
        return self._range

    def _spans(self, mapper: AngleMapper) -> tuple[AngleResult, AngleResult, list]:
        start = mapper.angles(self._chromosomes, self._starts)
        end = mapper.angles(self._chromosomes, self._ends)
        clamped = AngleResult(start.angles, start.clamped | end.clamped)
        return start, end, clamp_warnings(clamped, "interval bounds")


class ArcTrack(IntervalTrack):
    """Angular sweeps covering the whole band; value-free.

    Style options: ``colors``, ``opacity`` (single or per arc) and
    ``display_labels``.
    """

    kind = "arc"

    def __init__(
        self,
        name: str,
        chromosomes: Any,
        starts: Any,
        ends: Any,
        labels: Any = None,
        min_radius: float = DEFAULT_MIN_RADIUS,
        max_radius: float = DEFAULT_MAX_RADIUS,
        **style: Any,
    ) -> None:
        super().__init__(name, chromosomes, starts, ends, labels=labels,
                         min_radius=min_radius, max_radius=max_radius, **style)

    def compute_geometry(self, mapper: AngleMapper, style: Mapping[str, Any]) -> GeometryResult:
        start, end, warnings = self._spans(mapper)
        n = len(self)
        colors = per_datum(style["colors"], n)
        opacities = per_datum(style["opacity"], n)
        labels = self._label_list(style)
        arcs = tuple(
            ArcSpan(
                float(start.angles[i]), float(end.angles[i]),
                self._min_radius, self._max_radius,
                color=colors[i], opacity=opacities[i], label=labels[i],
            )
            for i in range(n)
        )
        return GeometryResult(arcs, tuple(warnings))


class BarTrack(IntervalTrack):
    """Bars rising from ``min_radius`` to a radius proportional to the value.

    ``range`` is ``"auto"`` (min/max over this track's values) or
    ``(lo, hi)``. Style options: ``color`` and ``opacity`` (single or per
    bar), ``border_color``, ``border_size``, ``display_labels``.
    """

    kind = "bar"
    data_fields = ("chromosomes", "starts", "ends", "values")
    has_values = True

    @property
    def values(self):
        return self._values

    def compute_geometry(self, mapper: AngleMapper, style: Mapping[str, Any]) -> GeometryResult:
        start, end, warnings = self._spans(mapper)
        radii = normalize(self._values, self._range, self.band)
        n = len(self)
        colors = per_datum(style["color"], n)
        opacities = per_datum(style["opacity"], n)
        labels = self._label_list(style)
        bars = tuple(
            ArcSpan(
                float(start.angles[i]), float(end.angles[i]),
                self._min_radius, float(radii.values[i]),
                color=colors[i], opacity=opacities[i],
                value=float(self._values[i]), label=labels[i],
            )
            for i in range(n)
        )
        if radii.warning is not None:
            warnings.append(radii.warning)
        return GeometryResult(bars, tuple(warnings), radii.value_range)


class _GradientTrack(IntervalTrack):
    """Interval track whose value picks a color along a gradient."""

    data_fields = ("chromosomes", "starts", "ends", "values")
    has_values = True

    @property
    def values(self):
        return self._values

    def compute_geometry(self, mapper: AngleMapper, style: Mapping[str, Any]) -> GeometryResult:
        start, end, warnings = self._spans(mapper)
        unit = normalize_unit(self._values, self._range)
        scale = ColorScale.from_spec(style["colors"])
        colors = scale.unit_to_hex(unit.values)
        opacities = per_datum(style["opacity"], len(self))
        labels = self._label_list(style)
        cells = tuple(
            ArcSpan(
                float(start.angles[i]), float(end.angles[i]),
                self._min_radius, self._max_radius,
                color=colors[i], opacity=opacities[i],
                value=float(self._values[i]), label=labels[i],
            )
            for i in range(len(self))
        )
        if unit.warning is not None:
            warnings.append(unit.warning)
        legend = {"gradient": scale.unit_to_hex(np.linspace(0.0, 1.0, 5))}
        return GeometryResult(cells, tuple(warnings), unit.value_range, legend)


class CNVTrack(_GradientTrack):
    """Copy-number segments colored by value over the whole band.

    Style options: ``colors`` (gradient stops or a colormap name),
    ``width``, ``opacity``.
    """

    kind = "cnv"


class HeatmapTrack(_GradientTrack):
    """Heatmap cells: value encodes color only, never radius.

    Several heatmap tracks stack by giving each its own radius band.
    Style options: ``colors`` (gradient stops or a colormap name),
    ``border_size``, ``opacity``, ``display_labels``.
    """

    kind = "heatmap"
