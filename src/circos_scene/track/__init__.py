"""Track types for circular plots."""

from .base import Track, PositionalTrack
from .text import TextTrack
from .background import BackgroundTrack
from .point import SNPTrack
from .interval import ArcTrack, BarTrack, CNVTrack, HeatmapTrack
from .link import LinkTrack
from .line import LineTrack

__all__ = [
    "Track",
    "PositionalTrack",
    "TextTrack",
    "BackgroundTrack",
    "SNPTrack",
    "ArcTrack",
    "BarTrack",
    "CNVTrack",
    "HeatmapTrack",
    "LinkTrack",
    "LineTrack",
]
