"""LinkTrack: chords joining two genomic loci."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..config.defaults import DEFAULT_LINK_RADIUS
from ..core.mapping import AngleMapper, AngleResult
from ..core.validation import numeric_array
from ..layout.geometry import Chord, GeometryResult
from .base import PositionalTrack, clamp_warnings, per_datum
from .interval import validate_intervals


class LinkTrack(PositionalTrack):
    """Chords from the midpoint of locus A to the midpoint of locus B.

    Each link is given as two (chromosome, start, end) triples. Chords are
    anchored at ``max_radius`` and bow toward the center.

    Usage::

        LinkTrack("fusions",
                  gene1_chromosomes=["1"], gene1_starts=[1e6], gene1_ends=[1.1e6],
                  gene2_chromosomes=["9"], gene2_starts=[2e6], gene2_ends=[2.2e6],
                  labels=["BCR-ABL1"])

    Style options: ``color`` and ``opacity`` (single or per link),
    ``width``, ``display_labels``, ``label_size``.
    """

    kind = "link"
    data_fields = (
        "gene1_chromosomes", "gene1_starts", "gene1_ends",
        "gene2_chromosomes", "gene2_starts", "gene2_ends",
    )
    segment_fields = ("gene1_chromosomes", "gene2_chromosomes")

    def __init__(
        self,
        name: str,
        gene1_chromosomes: Any,
        gene1_starts: Any,
        gene1_ends: Any,
        gene2_chromosomes: Any,
        gene2_starts: Any,
        gene2_ends: Any,
        labels: Any = None,
        min_radius: float = 0.0,
        max_radius: float = DEFAULT_LINK_RADIUS,
        **style: Any,
    ) -> None:
        n = self._init_columns(
            name,
            labels=labels,
            gene1_chromosomes=self._segments(gene1_chromosomes, "gene1_chromosomes"),
            gene1_starts=numeric_array(gene1_starts, "gene1_starts"),
            gene1_ends=numeric_array(gene1_ends, "gene1_ends"),
            gene2_chromosomes=self._segments(gene2_chromosomes, "gene2_chromosomes"),
            gene2_starts=numeric_array(gene2_starts, "gene2_starts"),
            gene2_ends=numeric_array(gene2_ends, "gene2_ends"),
        )
        validate_intervals(name, self._gene1_starts, self._gene1_ends)
        validate_intervals(name, self._gene2_starts, self._gene2_ends)
        super().__init__(name, min_radius, max_radius, style, n_data=n)

    def midpoints(self) -> tuple:
        """Midpoint positions of locus A and locus B."""
        return (
            (self._gene1_starts + self._gene1_ends) / 2.0,
            (self._gene2_starts + self._gene2_ends) / 2.0,
        )

    def compute_geometry(self, mapper: AngleMapper, style: Mapping[str, Any]) -> GeometryResult:
        mid1, mid2 = self.midpoints()
        source = mapper.angles(self._gene1_chromosomes, mid1)
        target = mapper.angles(self._gene2_chromosomes, mid2)
        n = len(self)
        colors = per_datum(style["color"], n)
        opacities = per_datum(style["opacity"], n)
        labels = self._label_list(style)
        chords = tuple(
            Chord(
                float(source.angles[i]), float(target.angles[i]), self._max_radius,
                color=colors[i], opacity=opacities[i], label=labels[i],
            )
            for i in range(n)
        )
        clamped = AngleResult(source.angles, source.clamped | target.clamped)
        return GeometryResult(chords, tuple(clamp_warnings(clamped, "link anchors")))
