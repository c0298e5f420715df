"""Circos: the main user-facing API (builder pattern)."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .compose.tracklist import Tracklist
from .config.resolver import SceneConfig
from .core.color_scale import Palette
from .core.genome import CoordinateSystem
from .export.serializers import scene_to_dict, serialize_scene
from .layout.builder import build_scene
from .layout.scene import Scene
from .track.base import Track


class Circos:
    """Circular plot builder.

    Usage::

        import circos_scene as cs

        plot = cs.Circos("hg19", y_chr=False, chr_padding=0.02)
        plot.add_track(cs.BackgroundTrack("bg", 0.5, 0.9))
        plot.add_track(cs.SNPTrack("snps", chroms, positions, values))
        plot.configure(tracks={"snp": {"size": 3}})
        scene = plot.build()
        payload = plot.to_json()

    Genome options (``chr_padding``, ``display_ticks``, ...) may be passed
    as keyword arguments; unknown names raise ``UnknownOption``.
    """

    def __init__(
        self,
        genome: Any = "hg19",
        tracks: Tracklist | Iterable[Track] | None = None,
        *,
        y_chr: bool = True,
        exclude: Iterable[str] = (),
        config: SceneConfig | None = None,
        palette: Palette | None = None,
        **genome_options: Any,
    ) -> None:
        exclude = list(exclude)
        if not y_chr:
            exclude.append("Y")
        if isinstance(genome, CoordinateSystem):
            genome = genome.to_dict()
        self._genome = CoordinateSystem.build(genome, exclude=exclude)
        self._tracklist = tracks if isinstance(tracks, Tracklist) else Tracklist(tracks or ())
        self._config = (config or SceneConfig()).merged(SceneConfig(genome=genome_options))
        self._palette = palette
        self._scene: Scene | None = None

    # --- Tracks ---

    def add_track(self, track: Track | Tracklist) -> Circos:
        """Add a track (or tracklist); an existing name is replaced in place."""
        self._tracklist = self._tracklist + track
        self._scene = None
        return self

    def remove_track(self, name: str | Iterable[str]) -> Circos:
        self._tracklist = self._tracklist - name
        self._scene = None
        return self

    @property
    def tracklist(self) -> Tracklist:
        return self._tracklist

    @property
    def genome(self) -> CoordinateSystem:
        return self._genome

    # --- Configuration ---

    def configure(
        self,
        genome: Mapping[str, Any] | None = None,
        tracks: Mapping[str, Mapping[str, Any]] | None = None,
        common: Mapping[str, Any] | None = None,
    ) -> Circos:
        """Layer more global options over the current configuration."""
        update = SceneConfig(genome=genome or {}, tracks=tracks or {}, common=common or {})
        self._config = self._config.merged(update)
        self._scene = None
        return self

    @property
    def config(self) -> SceneConfig:
        return self._config

    # --- Output ---

    def build(self, max_workers: int | None = None) -> Scene:
        """Build (and cache) the scene."""
        if self._scene is None:
            self._scene = build_scene(
                self._genome, self._tracklist, self._config,
                palette=self._palette, max_workers=max_workers,
            )
        return self._scene

    def to_dict(self) -> dict:
        return scene_to_dict(self.build())

    def to_json(self, indent: int | None = None) -> str:
        return serialize_scene(self.build(), indent=indent)
