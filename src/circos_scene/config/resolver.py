"""SceneConfig and ConfigResolver: three-level style merge.

Precedence, lowest to highest: built-in defaults -> global configuration
-> per-track overrides. Merging is per option, so a track overriding only
``border_size`` still inherits the global ``fill_colors``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ..core.color_scale import Palette, matplotlib_palette, resolve_colors
from ..core.errors import UnknownOption
from .defaults import (
    COLOR_OPTIONS,
    GENOME_DEFAULTS,
    GRADIENT_KINDS,
    TRACK_DEFAULTS,
    TRACK_KINDS,
)

logger = logging.getLogger(__name__)

_EMPTY = MappingProxyType({})

# Every option name defined by at least one track kind
_COMMON_OPTIONS = frozenset(key for opts in TRACK_DEFAULTS.values() for key in opts)


def validate_track_options(kind: str, options: Mapping[str, Any]) -> None:
    """Raise UnknownOption for any key the track kind does not define."""
    if kind not in TRACK_DEFAULTS:
        raise UnknownOption(kind, TRACK_KINDS, context="track kinds")
    allowed = TRACK_DEFAULTS[kind]
    for key in options:
        if key not in allowed:
            raise UnknownOption(key, allowed, context=f"'{kind}' tracks")


def _validate_genome_options(options: Mapping[str, Any]) -> None:
    for key in options:
        if key not in GENOME_DEFAULTS:
            raise UnknownOption(key, GENOME_DEFAULTS, context="the genome")
    scale = options.get("ticks_scale")
    if scale is not None and not scale > 0:
        raise ValueError(f"ticks_scale must be positive, got {scale}.")
    padding = options.get("chr_padding")
    if padding is not None and not padding >= 0:
        raise ValueError(f"chr_padding must be non-negative, got {padding}.")


@dataclass(frozen=True)
class SceneConfig:
    """Immutable global configuration for one scene build.

    Usage::

        config = SceneConfig(
            genome={"chr_padding": 0.02, "display_ticks": False},
            tracks={"bar": {"color": "#F8B100"}},
            common={"opacity": 0.8},
        )

    ``genome`` shapes the genome ring, ``tracks`` holds options for one
    kind, and ``common`` applies to every kind that defines the option.
    """

    genome: Mapping[str, Any] = field(default_factory=dict)
    tracks: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    common: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        genome = dict(self.genome or {})
        _validate_genome_options(genome)

        tracks = {}
        for kind, options in (self.tracks or {}).items():
            options = dict(options)
            validate_track_options(kind, options)
            tracks[kind] = MappingProxyType(options)

        common = dict(self.common or {})
        for key in common:
            if key not in _COMMON_OPTIONS:
                raise UnknownOption(key, _COMMON_OPTIONS, context="all tracks")

        object.__setattr__(self, "genome", MappingProxyType(genome))
        object.__setattr__(self, "tracks", MappingProxyType(tracks))
        object.__setattr__(self, "common", MappingProxyType(common))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SceneConfig:
        """Build from ``{"genome": ..., "tracks": ..., "common": ...}``."""
        for key in data:
            if key not in ("genome", "tracks", "common"):
                raise UnknownOption(key, ("genome", "tracks", "common"), context="scene config")
        return cls(
            genome=data.get("genome", {}),
            tracks=data.get("tracks", {}),
            common=data.get("common", {}),
        )

    def merged(self, other: SceneConfig) -> SceneConfig:
        """Return a config where ``other`` takes precedence over ``self``."""
        tracks = {kind: dict(opts) for kind, opts in self.tracks.items()}
        for kind, opts in other.tracks.items():
            tracks.setdefault(kind, {}).update(opts)
        return SceneConfig(
            genome={**self.genome, **other.genome},
            tracks=tracks,
            common={**self.common, **other.common},
        )

    def to_dict(self) -> dict:
        return {
            "genome": dict(self.genome),
            "tracks": {kind: dict(opts) for kind, opts in self.tracks.items()},
            "common": dict(self.common),
        }


class ConfigResolver:
    """Resolves the final style record of every track and of the genome.

    Color options that name a palette (e.g. ``"Spectral"``) are expanded
    through ``palette`` into a tuple of hex colors.
    """

    def __init__(
        self,
        config: SceneConfig | None = None,
        palette: Palette | None = None,
    ) -> None:
        self._config = config or SceneConfig()
        self._palette = palette or matplotlib_palette

    @property
    def config(self) -> SceneConfig:
        return self._config

    def _expand_colors(self, kind: str, style: dict[str, Any]) -> dict[str, Any]:
        for key in COLOR_OPTIONS & style.keys():
            if kind in GRADIENT_KINDS and key == "colors":
                continue
            value = style[key]
            if isinstance(value, str):
                colors = resolve_colors(value, self._palette)
                style[key] = colors[0] if len(colors) == 1 else tuple(colors)
        return style

    def resolve_options(self, kind: str, overrides: Mapping[str, Any] = _EMPTY) -> Mapping[str, Any]:
        """Merge defaults, global options and overrides for one kind."""
        validate_track_options(kind, overrides)
        defaults = TRACK_DEFAULTS[kind]
        style = dict(defaults)
        style.update({k: v for k, v in self._config.common.items() if k in defaults})
        style.update(self._config.tracks.get(kind, _EMPTY))
        style.update(overrides)
        return MappingProxyType(self._expand_colors(kind, style))

    def resolve(self, track) -> Mapping[str, Any]:
        """Final style record for a track."""
        return self.resolve_options(track.kind, track.style)

    def resolve_genome(self) -> Mapping[str, Any]:
        style = dict(GENOME_DEFAULTS)
        style.update(self._config.genome)
        fill = resolve_colors(style["fill_colors"], self._palette)
        style["fill_colors"] = tuple(fill)
        logger.debug("Resolved genome options: %s", style)
        return MappingProxyType(style)
