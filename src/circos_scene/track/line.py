"""LineTrack: a value profile drawn as polylines along the genome."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import numpy as np

from ..config.defaults import DEFAULT_MAX_RADIUS, DEFAULT_MIN_RADIUS
from ..core.mapping import AngleMapper, normalize
from ..core.validation import numeric_array, validate_value_range
from ..layout.geometry import GeometryResult, Polyline
from .base import PositionalTrack, clamp_warnings


def segment_runs(segments: np.ndarray) -> list[tuple[int, int]]:
    """Split vertex indices into [start, stop) runs of equal segment name.

    Consecutive vertices on different segments are never joined, so each
    run becomes its own polyline.
    """
    if len(segments) == 0:
        return []
    breaks = [i for i in range(1, len(segments)) if segments[i] != segments[i - 1]]
    bounds = [0] + breaks + [len(segments)]
    return list(zip(bounds[:-1], bounds[1:]))


class LineTrack(PositionalTrack):
    """Ordered vertices (chromosome, position, value) joined by lines.

    The edge between two consecutive vertices on different segments is
    dropped: lines never interpolate across a segment boundary.

    Style options: ``color``, ``width``, ``opacity``.
    """

    kind = "line"
    data_fields = ("chromosomes", "positions", "values")

    def __init__(
        self,
        name: str,
        chromosomes: Any,
        positions: Any,
        values: Any,
        range: Any = "auto",
        min_radius: float = DEFAULT_MIN_RADIUS,
        max_radius: float = DEFAULT_MAX_RADIUS,
        **style: Any,
    ) -> None:
        n = self._init_columns(
            name,
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

    def edges(self) -> list[tuple[int, int]]:
        """Index pairs of the vertices that are joined."""
        return [
            (i, i + 1)
            for start, stop in segment_runs(self._chromosomes)
            for i in range(start, stop - 1)
        ]

    def compute_geometry(self, mapper: AngleMapper, style: Mapping[str, Any]) -> GeometryResult:
        angles = mapper.angles(self._chromosomes, self._positions)
        radii = normalize(self._values, self._range, self.band)
        lines = tuple(
            Polyline(
                segment=str(self._chromosomes[start]),
                angles=tuple(float(a) for a in angles.angles[start:stop]),
                radii=tuple(float(r) for r in radii.values[start:stop]),
            )
            for start, stop in segment_runs(self._chromosomes)
        )
        warnings = clamp_warnings(angles, "vertices")
        if radii.warning is not None:
            warnings.append(radii.warning)
        return GeometryResult(lines, tuple(warnings), radii.value_range)
