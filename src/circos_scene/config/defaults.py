"""Built-in defaults for every track kind and for the genome ring.

These are the lowest-precedence level of style resolution. They are
read-only; callers override them through ``SceneConfig`` or per track.
"""

from __future__ import annotations

from types import MappingProxyType

# Default colors
DEFAULT_COLOR = "#40B9D4"
DEFAULT_GRADIENT = ("#40B9D4", "#F8B100")
DEFAULT_BORDER_COLOR = "#000000"

# Default radius band for data tracks, relative to the genome's inner radius
DEFAULT_MIN_RADIUS = 0.5
DEFAULT_MAX_RADIUS = 0.9
DEFAULT_LINK_RADIUS = 0.4

TRACK_DEFAULTS = MappingProxyType({
    "text": MappingProxyType({
        "color": "#000000",
        "size": 12.0,
        "weight": "normal",
        "opacity": 1.0,
        "rotation": 0.0,
    }),
    "background": MappingProxyType({
        "fill_colors": "#EEEEFF",
        "border_colors": DEFAULT_BORDER_COLOR,
        "border_size": 0.3,
        "opacity": 1.0,
    }),
    "snp": MappingProxyType({
        "colors": DEFAULT_COLOR,
        "size": 2.0,
        "shape": "circle",
        "opacity": 1.0,
        "display_labels": True,
    }),
    "arc": MappingProxyType({
        "colors": DEFAULT_COLOR,
        "opacity": 1.0,
        "display_labels": True,
    }),
    "link": MappingProxyType({
        "color": DEFAULT_COLOR,
        "width": 1.0,
        "opacity": 1.0,
        "display_labels": True,
        "label_size": 8.0,
    }),
    "bar": MappingProxyType({
        "color": DEFAULT_COLOR,
        "border_color": DEFAULT_BORDER_COLOR,
        "border_size": 0.5,
        "opacity": 1.0,
        "display_labels": True,
    }),
    "cnv": MappingProxyType({
        "colors": DEFAULT_GRADIENT,
        "width": 1.0,
        "opacity": 1.0,
    }),
    "heatmap": MappingProxyType({
        "colors": DEFAULT_GRADIENT,
        "border_size": 0.0,
        "opacity": 1.0,
        "display_labels": True,
    }),
    "line": MappingProxyType({
        "color": DEFAULT_COLOR,
        "width": 2.0,
        "opacity": 1.0,
    }),
})

# Every track kind, in a fixed order
TRACK_KINDS = tuple(TRACK_DEFAULTS)

# Kinds whose "colors" option is a value gradient, not a per-datum palette
GRADIENT_KINDS = frozenset({"cnv", "heatmap"})

# Options that may be given per datum (one value per data point), by kind
PER_DATUM_OPTIONS = MappingProxyType({
    "snp": frozenset({"colors", "size", "opacity"}),
    "arc": frozenset({"colors", "opacity"}),
    "bar": frozenset({"color", "opacity"}),
    "link": frozenset({"color", "opacity"}),
    "cnv": frozenset({"opacity"}),
    "heatmap": frozenset({"opacity"}),
})

# Options whose value may be a list of colors without being per datum
COLOR_LIST_OPTIONS = frozenset({"fill_colors", "border_colors"})

# Options holding a color, a list of colors, or a palette name
COLOR_OPTIONS = frozenset({"color", "colors", "fill_colors", "border_colors", "border_color"})

GENOME_DEFAULTS = MappingProxyType({
    "chr_padding": 0.04,
    "exclude": (),
    "fill_colors": "Spectral",
    "border_color": DEFAULT_BORDER_COLOR,
    "border_size": 0.5,
    "display_border": True,
    "display_labels": True,
    "label_size": 10.0,
    "label_dy": 0.0,
    "display_ticks": True,
    "ticks_scale": 30_000_000,
    "ticks_length": 5.0,
    "ticks_text_size": 8.0,
    "ticks_color": "#000000",
    "inner_radius": 1.0,
    "outer_radius": 1.08,
})
