"""Input validation with clear error messages for track constructors."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np
import pandas as pd

from .errors import MismatchedLength


def preview_items(items: list) -> str:
    """Render at most five offending items, noting how many were left out."""
    text = str(items[:5])
    if len(items) > 5:
        text += f" (and {len(items) - 5} more)"
    return text


def validate_name(name: Any, what: str = "Track name") -> str:
    if not isinstance(name, str) or not name:
        raise ValueError(f"{what} must be a non-empty string, got {name!r}.")
    return name


def validate_radius_band(min_radius: float, max_radius: float) -> tuple[float, float]:
    """Validate a ``[min_radius, max_radius]`` band: 0 <= min < max."""
    lo = float(min_radius)
    hi = float(max_radius)
    if not (np.isfinite(lo) and np.isfinite(hi)):
        raise ValueError(f"Radius band must be finite, got [{min_radius}, {max_radius}].")
    if lo < 0:
        raise ValueError(f"min_radius must be >= 0, got {min_radius}.")
    if lo >= hi:
        raise ValueError(
            f"min_radius must be smaller than max_radius, got [{min_radius}, {max_radius}]."
        )
    return lo, hi


def _to_list(values: Any, field: str) -> list:
    if isinstance(values, (pd.Series, pd.Index)):
        return values.tolist()
    if isinstance(values, np.ndarray):
        return values.ravel().tolist()
    if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
        raise TypeError(
            f"'{field}' must be a sequence (list, tuple, numpy array or pandas Series), "
            f"got {type(values).__name__}."
        )
    return list(values)


def _readonly(arr: np.ndarray) -> np.ndarray:
    arr.flags.writeable = False
    return arr


def segment_array(values: Any, field: str = "chromosomes") -> np.ndarray:
    """Coerce segment names to a read-only object array of non-empty strings.

    Integer chromosome names (``1``, ``2``, ...) are accepted and stored
    as their string form so they match genomes keyed by ``"1"``, ``"2"``.
    """
    items = _to_list(values, field)
    names = []
    bad = []
    for item in items:
        if isinstance(item, (bool, np.bool_)) or item is None:
            bad.append(item)
            continue
        if isinstance(item, (float, np.floating)):
            if not np.isfinite(item) or not float(item).is_integer():
                bad.append(item)
                continue
            item = int(item)
        text = str(item)
        if not text:
            bad.append(item)
            continue
        names.append(text)
    if bad:
        raise ValueError(
            f"'{field}' must contain non-empty segment names. Invalid entries: {preview_items(bad)}"
        )
    return _readonly(np.array(names, dtype=object))


def numeric_array(values: Any, field: str) -> np.ndarray:
    """Coerce values to a read-only float64 array."""
    items = _to_list(values, field)
    try:
        arr = np.asarray(items, dtype=np.float64)
    except (TypeError, ValueError):
        raise TypeError(f"'{field}' must contain only numbers.") from None
    return _readonly(arr.reshape(-1))


def label_array(values: Any, n: int, field: str = "labels") -> np.ndarray | None:
    """Optional per-datum labels; a single string is broadcast."""
    if values is None:
        return None
    if isinstance(values, str):
        return _readonly(np.array([values] * n, dtype=object))
    items = ["" if v is None else str(v) for v in _to_list(values, field)]
    if len(items) != n:
        raise MismatchedLength(
            f"'{field}' has {len(items)} entries but the track has {n} data points."
        )
    return _readonly(np.array(items, dtype=object))


def check_equal_lengths(track_name: str, **columns: np.ndarray) -> int:
    """Ensure all parallel columns have the same length; return it."""
    lengths = {key: len(col) for key, col in columns.items()}
    if len(set(lengths.values())) > 1:
        detail = ", ".join(f"{key}={n}" for key, n in lengths.items())
        raise MismatchedLength(
            f"Track '{track_name}': parallel columns must have equal length. Got {detail}."
        )
    return next(iter(lengths.values()), 0)


def is_sequence(value: Any) -> bool:
    """True for lists, tuples, arrays and Series; strings are scalars."""
    if isinstance(value, (str, bytes)):
        return False
    return isinstance(value, (Sequence, np.ndarray, pd.Series))


def broadcast_style(value: Any, n: int, field: str) -> Any:
    """Accept a scalar style value or a per-datum sequence of length ``n``.

    Scalars (strings included) are returned unchanged and broadcast by the
    renderer; sequences are returned as tuples.
    """
    if value is None or isinstance(value, (str, bytes, int, float, np.number)):
        return value
    if isinstance(value, (Sequence, np.ndarray, pd.Series)):
        items = _to_list(value, field)
        if len(items) != n:
            raise MismatchedLength(
                f"Style '{field}' has {len(items)} entries but the track has {n} data points. "
                "Pass a single value or one value per data point."
            )
        return tuple(v.item() if isinstance(v, np.generic) else v for v in items)
    return value


def validate_value_range(value_range: Any) -> str | tuple[float, float]:
    """Normalize a value range argument: ``"auto"``/None or ``(lo, hi)``."""
    if value_range is None or (isinstance(value_range, str) and value_range == "auto"):
        return "auto"
    if isinstance(value_range, str):
        raise ValueError(f"range must be 'auto' or a (lo, hi) pair, got '{value_range}'.")
    try:
        lo, hi = value_range
        lo, hi = float(lo), float(hi)
    except (TypeError, ValueError):
        raise ValueError(
            f"range must be 'auto' or a (lo, hi) pair of numbers, got {value_range!r}."
        ) from None
    if not (np.isfinite(lo) and np.isfinite(hi)):
        raise ValueError(f"range bounds must be finite, got ({lo}, {hi}).")
    if lo > hi:
        raise ValueError(f"range lower bound must not exceed upper bound, got ({lo}, {hi}).")
    return (lo, hi)


def validate_colormap_name(name: str) -> str:
    """Validate that a matplotlib colormap name exists."""
    import matplotlib.pyplot as plt

    try:
        plt.get_cmap(name)
    except ValueError:
        raise ValueError(
            f"Unknown colormap '{name}'. Use a matplotlib colormap name "
            f"like 'viridis', 'Spectral', 'RdBu_r', etc."
        ) from None
    return name
