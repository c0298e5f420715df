"""ColorScale and palettes: matplotlib colormaps -> hex colors for the renderer."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

import numpy as np

from .validation import is_sequence, preview_items, validate_colormap_name

# Palette lookup: name -> ordered list of colors
Palette = Callable[[str], list[str]]

DEFAULT_PALETTE_SIZE = 8


def is_color(value: Any) -> bool:
    """True if matplotlib understands ``value`` as a single color."""
    from matplotlib.colors import is_color_like

    return isinstance(value, (str, tuple)) and is_color_like(value)


def to_hex(color: Any) -> str:
    from matplotlib.colors import to_hex as mpl_to_hex

    return mpl_to_hex(color, keep_alpha=False)


def matplotlib_palette(name: str, n: int = DEFAULT_PALETTE_SIZE) -> list[str]:
    """Default palette lookup backed by matplotlib colormaps.

    Qualitative (listed) colormaps return their own colors; continuous
    colormaps are sampled at ``n`` evenly spaced points.
    """
    import matplotlib.pyplot as plt
    from matplotlib.colors import ListedColormap

    validate_colormap_name(name)
    cmap = plt.get_cmap(name)
    if isinstance(cmap, ListedColormap) and cmap.N <= 20:
        return [to_hex(c) for c in cmap.colors]
    return [to_hex(cmap(x)) for x in np.linspace(0.0, 1.0, n)]


def resolve_colors(spec: Any, palette: Palette = matplotlib_palette) -> list[str]:
    """Expand a color spec into a list of hex colors.

    ``spec`` is a single color, a palette name understood by ``palette``,
    or a sequence of colors.
    """
    if is_color(spec):
        return [to_hex(spec)]
    if isinstance(spec, str):
        return [to_hex(c) for c in palette(spec)]
    if isinstance(spec, Sequence) and all(is_color(c) for c in spec):
        return [to_hex(c) for c in spec]
    raise ValueError(
        f"Expected a color, a palette name or a list of colors, got {spec!r}."
    )


def validate_color_option(value: Any, field: str, gradient: bool = False) -> None:
    """Reject a color option that cannot describe colors.

    Strings pass here: they are either a color or a palette name, and
    palette names are looked up only when the scene is built. Lists must
    hold colors only; a gradient needs at least two stops.
    """
    if isinstance(value, str):
        return
    if not gradient and is_color(value):
        return
    if not is_sequence(value):
        raise ValueError(
            f"Style '{field}' must be a color, a palette name or a list of colors, "
            f"got {value!r}."
        )
    bad = [c for c in value if not is_color(c)]
    if bad:
        raise ValueError(f"Style '{field}' contains invalid colors: {preview_items(bad)}")
    if gradient and len(value) < 2:
        raise ValueError(f"Style '{field}' needs at least two gradient colors, got {len(value)}.")


class ColorScale:
    """Maps values normalized to [0, 1] to colors via a 256-entry RGBA lookup table.

    Built either from a matplotlib colormap name or from a list of colors
    interpolated linearly (``ColorScale.from_colors(["#40B9D4", "#F8B100"])``).
    """

    __slots__ = ("_lut", "_cmap_name", "_cmap")

    LUT_SIZE = 256

    def __init__(self, cmap_name: str = "viridis", _cmap: Any = None) -> None:
        import matplotlib.pyplot as plt

        if _cmap is None:
            validate_colormap_name(cmap_name)
            _cmap = plt.get_cmap(cmap_name)
        self._cmap_name = cmap_name
        self._cmap = _cmap
        self._lut = self._build_lut()

    @classmethod
    def from_colors(cls, colors: Sequence[Any]) -> ColorScale:
        """Gradient through ``colors`` (at least two), evenly spaced."""
        from matplotlib.colors import LinearSegmentedColormap

        colors = [to_hex(c) for c in resolve_colors(list(colors))]
        if len(colors) < 2:
            raise ValueError("A color gradient needs at least two colors.")
        cmap = LinearSegmentedColormap.from_list("custom", colors)
        return cls("custom", _cmap=cmap)

    @classmethod
    def from_spec(cls, spec: Any) -> ColorScale:
        """A colormap name or a list of gradient stops."""
        if isinstance(spec, str):
            return cls(spec)
        return cls.from_colors(spec)

    def _build_lut(self) -> np.ndarray:
        """Build a (256, 4) uint8 RGBA lookup table from the colormap."""
        positions = np.linspace(0.0, 1.0, self.LUT_SIZE)
        rgba_float = self._cmap(positions)
        return (rgba_float * 255).astype(np.uint8)

    @property
    def lut(self) -> np.ndarray:
        """(256, 4) uint8 RGBA lookup table."""
        return self._lut

    @property
    def cmap_name(self) -> str:
        return self._cmap_name

    def unit_to_hex(self, unit: np.ndarray) -> list[str]:
        """Colors for values already normalized to [0, 1]; out-of-range values are clamped."""
        idx = (np.clip(np.asarray(unit, dtype=np.float64), 0.0, 1.0) * 255).astype(int)
        return ["#{:02x}{:02x}{:02x}".format(*self._lut[i, :3]) for i in idx]
