"""circos-scene: coordinate mapping and track composition for circular genome plots."""

from ._version import __version__
from .api import Circos
from .core.errors import (
    CircosError,
    InvalidGenome,
    UnknownSegment,
    MismatchedLength,
    UnknownOption,
    LayerWarning,
)
from .core.genome import CoordinateSystem, GENOMES
from .core.mapping import AngleMapper, angle_of, normalize
from .compose import Tracklist, add, remove
from .config.resolver import SceneConfig
from .layout.builder import SceneBuilder, build_scene
from .layout.scene import Scene, Layer
from .track import (
    TextTrack,
    BackgroundTrack,
    SNPTrack,
    ArcTrack,
    LinkTrack,
    BarTrack,
    CNVTrack,
    HeatmapTrack,
    LineTrack,
)

__all__ = [
    "__version__",
    "Circos",
    "CircosError",
    "InvalidGenome",
    "UnknownSegment",
    "MismatchedLength",
    "UnknownOption",
    "LayerWarning",
    "CoordinateSystem",
    "GENOMES",
    "AngleMapper",
    "angle_of",
    "normalize",
    "Tracklist",
    "add",
    "remove",
    "SceneConfig",
    "SceneBuilder",
    "build_scene",
    "Scene",
    "Layer",
    "TextTrack",
    "BackgroundTrack",
    "SNPTrack",
    "ArcTrack",
    "LinkTrack",
    "BarTrack",
    "CNVTrack",
    "HeatmapTrack",
    "LineTrack",
]
