"""SceneBuilder: resolves a tracklist against a genome into a Scene."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from types import MappingProxyType
from typing import Any

import numpy as np

from ..compose.tracklist import Tracklist
from ..core.color_scale import Palette
from ..core.errors import GEOMETRY_ERROR, LayerWarning, UnknownSegment
from ..core.genome import CoordinateSystem
from ..core.mapping import AngleMapper
from ..config.resolver import ConfigResolver, SceneConfig
from ..track.base import Track
from .geometry import GeometryResult
from .scene import GenomeLayout, Layer, Scene, SegmentArc, Tick

logger = logging.getLogger(__name__)

# Upper bound on ticks emitted per segment
MAX_TICKS_PER_SEGMENT = 1000


def format_tick(position: float) -> str:
    """Compact tick label: 0, 500, 30K, 120M, 1.5G."""
    for factor, suffix in ((1e9, "G"), (1e6, "M"), (1e3, "K")):
        if position >= factor:
            return f"{position / factor:g}{suffix}"
    return f"{position:g}"


class SceneBuilder:
    """Builds an immutable Scene from a genome, a tracklist and a config.

    Steps:

    1. every referenced segment must exist (all offenders are reported
       together in one ``UnknownSegment``),
    2. styles are resolved and geometry is computed per track,
       optionally on a thread pool; a failure in either degrades that
       layer to empty geometry with a warning,
    3. background layers are moved in front, otherwise tracklist order.
    """

    def __init__(
        self,
        config: SceneConfig | None = None,
        palette: Palette | None = None,
        max_workers: int | None = None,
    ) -> None:
        self._resolver = ConfigResolver(config, palette)
        self._max_workers = max_workers

    @property
    def resolver(self) -> ConfigResolver:
        return self._resolver

    def build(self, cs: CoordinateSystem, tracklist: Tracklist) -> Scene:
        genome_style = self._resolver.resolve_genome()
        if genome_style["exclude"]:
            cs = CoordinateSystem.build(cs.to_dict(), exclude=genome_style["exclude"])

        self._check_segments(cs, tracklist)
        mapper = AngleMapper(cs, genome_style["chr_padding"])

        tracks = list(tracklist)
        if self._max_workers is not None and self._max_workers > 1 and len(tracks) > 1:
            with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
                layers = list(pool.map(lambda track: self._layer(mapper, track), tracks))
        else:
            layers = [self._layer(mapper, track) for track in tracks]

        ordered = tuple(
            [layer for layer in layers if layer.is_background]
            + [layer for layer in layers if not layer.is_background]
        )
        genome = self._genome_layout(mapper, genome_style)
        logger.debug(
            "Built scene with %d layers over %d segments", len(ordered), len(cs),
        )
        return Scene(genome=genome, layers=ordered)

    @staticmethod
    def _check_segments(cs: CoordinateSystem, tracklist: Tracklist) -> None:
        missing: dict[str, list[str]] = {}
        for track in tracklist:
            absent = cs.missing(sorted(track.segments()))
            if absent:
                missing[track.name] = absent
        if missing:
            detail = "; ".join(f"'{name}': {segs}" for name, segs in missing.items())
            raise UnknownSegment(
                f"{len(missing)} track(s) reference segments absent from the genome: {detail}",
                missing=missing,
            )

    def _layer(self, mapper: AngleMapper, track: Track) -> Layer:
        style = track.style
        try:
            style = self._resolver.resolve(track)
            result = track.compute_geometry(mapper, style)
        except Exception as exc:
            logger.warning(
                "Style or geometry for track '%s' failed; rendering it empty", track.name,
                exc_info=True,
            )
            result = GeometryResult(warnings=(
                LayerWarning(GEOMETRY_ERROR, f"{type(exc).__name__}: {exc}"),
            ))
        for warning in result.warnings:
            logger.warning("Track '%s': %s", track.name, warning.message)
        return Layer(
            name=track.name,
            kind=track.kind,
            min_radius=track.min_radius,
            max_radius=track.max_radius,
            primitives=tuple(result.primitives),
            style=style,
            value_range=result.value_range,
            warnings=tuple(result.warnings),
            legend=MappingProxyType(dict(result.legend)),
        )

    @staticmethod
    def _genome_layout(mapper: AngleMapper, style: Mapping[str, Any]) -> GenomeLayout:
        cs = mapper.coordinate_system
        fills = style["fill_colors"]
        segments = []
        ticks = []
        for i, name in enumerate(cs.names):
            start, end = mapper.segment_span(name)
            length = cs.length_of(name)
            segments.append(SegmentArc(name, start, end, length, fills[i % len(fills)]))
            if not style["display_ticks"]:
                continue
            scale = float(style["ticks_scale"])
            n_ticks = min(int(length // scale) + 1, MAX_TICKS_PER_SEGMENT)
            for position in np.arange(n_ticks) * scale:
                ticks.append(Tick(
                    segment=name,
                    position=float(position),
                    angle=mapper.angle_of(name, float(position)),
                    label=format_tick(float(position)),
                ))
        return GenomeLayout(tuple(segments), tuple(ticks), style)


def build_scene(
    cs: CoordinateSystem,
    tracklist: Tracklist,
    config: SceneConfig | None = None,
    *,
    palette: Palette | None = None,
    max_workers: int | None = None,
) -> Scene:
    """Build a Scene. See :class:`SceneBuilder`."""
    return SceneBuilder(config, palette=palette, max_workers=max_workers).build(cs, tracklist)
