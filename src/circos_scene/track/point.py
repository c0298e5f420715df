"""SNPTrack: one point per (segment, position, value)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..config.defaults import DEFAULT_MAX_RADIUS, DEFAULT_MIN_RADIUS
from ..core.mapping import AngleMapper, normalize
from ..core.validation import numeric_array, validate_value_range
from ..layout.geometry import GeometryResult, PointMark
from .base import PositionalTrack, clamp_warnings, per_datum


class SNPTrack(PositionalTrack):
    """Points whose radius encodes their value.

    Usage::

        SNPTrack("snps", ["1", "1", "2"], [1.2e6, 3.4e6, 5e5], [0.1, 0.9, 0.4],
                 colors=["#ff0000", "#00ff00", "#0000ff"], range=(0, 1))

    Style options: ``colors``, ``size``, ``opacity`` (each a single value
    or one per point), ``shape`` and ``display_labels``.
    ``range`` is ``"auto"`` (min/max of ``values``) or an explicit
    ``(lo, hi)`` pair.
    """

    kind = "snp"
    data_fields = ("chromosomes", "positions", "values")

    def __init__(
        self,
        name: str,
        chromosomes: Any,
        positions: Any,
        values: Any,
        labels: Any = None,
        range: Any = "auto",
        min_radius: float = DEFAULT_MIN_RADIUS,
        max_radius: float = DEFAULT_MAX_RADIUS,
        **style: Any,
    ) -> None:
        n = self._init_columns(
            name,
            labels=labels,
            chromosomes=self._segments(chromosomes, "chromosomes"),
            positions=numeric_array(positions, "positions"),
            values=numeric_array(values, "values"),
        )
        self._range = validate_value_range(range)
        super().__init__(name, min_radius, max_radius, style, n_data=n)

    @property
    def chromosomes(self):
        return self._chromosomes

    @property
    def positions(self):
        return self._positions

    @property
    def values(self):
        return self._values

    @property
    def value_range(self):
        return self._range

    def compute_geometry(self, mapper: AngleMapper, style: Mapping[str, Any]) -> GeometryResult:
        angles = mapper.angles(self._chromosomes, self._positions)
        radii = normalize(self._values, self._range, self.band)
        n = len(self)
        colors = per_datum(style["colors"], n)
        sizes = per_datum(style["size"], n)
        opacities = per_datum(style["opacity"], n)
        labels = self._label_list(style)

        points = tuple(
            PointMark(
                angle=float(angles.angles[i]),
                radius=float(radii.values[i]),
                color=colors[i],
                size=sizes[i],
                opacity=opacities[i],
                value=float(self._values[i]),
                label=labels[i],
            )
            for i in range(n)
        )
        warnings = clamp_warnings(angles)
        if radii.warning is not None:
            warnings.append(radii.warning)
        return GeometryResult(points, tuple(warnings), radii.value_range)
