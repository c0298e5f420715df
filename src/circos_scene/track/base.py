"""Track: base class for all data layers of a circular plot."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from collections.abc import Mapping
from itertools import cycle, islice
from types import MappingProxyType
from typing import Any, ClassVar

import numpy as np
import pandas as pd

from ..config.defaults import (
    COLOR_LIST_OPTIONS,
    COLOR_OPTIONS,
    DEFAULT_MAX_RADIUS,
    DEFAULT_MIN_RADIUS,
    GRADIENT_KINDS,
    PER_DATUM_OPTIONS,
)
from ..config.resolver import validate_track_options
from ..core.color_scale import is_color, to_hex, validate_color_option
from ..core.errors import POSITION_CLAMPED, LayerWarning
from ..core.mapping import AngleMapper, AngleResult
from ..core.validation import (
    broadcast_style,
    check_equal_lengths,
    is_sequence,
    label_array,
    segment_array,
    validate_name,
    validate_radius_band,
)
from ..layout.geometry import GeometryResult


def per_datum(value: Any, n: int) -> list:
    """Expand a resolved style value to one entry per datum.

    Tuples (per-datum values or palette colors) are cycled; anything else
    is repeated.
    """
    if isinstance(value, tuple) and value:
        return list(islice(cycle(value), n))
    return [value] * n


def clamp_warnings(result: AngleResult, what: str = "positions") -> list[LayerWarning]:
    if result.n_clamped == 0:
        return []
    return [LayerWarning(
        POSITION_CLAMPED,
        f"{result.n_clamped} {what} fell outside their segment and were clamped.",
    )]


class Track(ABC):
    """Base class for one data layer.

    Every track has a name (unique within its Tracklist), a radial band
    ``[min_radius, max_radius]`` and a record of style overrides that take
    precedence over global configuration. Tracks are immutable: the
    ``with_style`` and ``renamed`` helpers return modified copies.
    """

    kind: ClassVar[str] = ""

    def __init__(
        self,
        name: str,
        min_radius: float = DEFAULT_MIN_RADIUS,
        max_radius: float = DEFAULT_MAX_RADIUS,
        style: Mapping[str, Any] | None = None,
        n_data: int = 1,
    ) -> None:
        self._name = validate_name(name)
        self._min_radius, self._max_radius = validate_radius_band(min_radius, max_radius)
        self._n_data = n_data
        self._style = self._validate_style(style or {})

    def _validate_style(self, style: Mapping[str, Any]) -> Mapping[str, Any]:
        validate_track_options(self.kind, style)
        per_datum_options = PER_DATUM_OPTIONS.get(self.kind, frozenset())
        checked = {}
        for key, value in style.items():
            gradient = key == "colors" and self.kind in GRADIENT_KINDS
            if key in COLOR_OPTIONS and isinstance(value, tuple) and is_color(value):
                value = to_hex(value)
            if key in per_datum_options:
                value = broadcast_style(value, self._n_data, key)
            elif is_sequence(value) and not (gradient or key in COLOR_LIST_OPTIONS):
                raise ValueError(
                    f"Style '{key}' of '{self.kind}' tracks takes a single value, got {value!r}."
                )
            if key in COLOR_OPTIONS:
                validate_color_option(value, key, gradient=gradient)
            checked[key] = value
        return MappingProxyType(checked)

    @property
    def name(self) -> str:
        return self._name

    @property
    def min_radius(self) -> float:
        return self._min_radius

    @property
    def max_radius(self) -> float:
        return self._max_radius

    @property
    def band(self) -> tuple[float, float]:
        return (self._min_radius, self._max_radius)

    @property
    def style(self) -> Mapping[str, Any]:
        """Per-track style overrides (not the resolved style)."""
        return self._style

    def segments(self) -> set[str]:
        """Segment names referenced by this track's data."""
        return set()

    @abstractmethod
    def compute_geometry(self, mapper: AngleMapper, style: Mapping[str, Any]) -> GeometryResult:
        """Resolve this track's primitives against a genome.

        Parameters
        ----------
        mapper : angle mapper for the scene's coordinate system
        style : fully resolved style record for this track
        """
        ...

    def with_style(self, **overrides: Any) -> Track:
        """Copy of this track with ``overrides`` merged into its style."""
        clone = copy.copy(self)
        clone._style = self._validate_style({**self._style, **overrides})
        return clone

    def renamed(self, name: str) -> Track:
        clone = copy.copy(self)
        clone._name = validate_name(name)
        return clone

    def __add__(self, other):
        from ..compose.tracklist import Tracklist

        return Tracklist([self]) + other

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self._name!r}, "
            f"band=[{self._min_radius:g}, {self._max_radius:g}])"
        )


class PositionalTrack(Track):
    """Track whose data are parallel columns keyed by segment name.

    Subclasses list their parallel columns in ``data_fields``; the first
    one is always the segment column.
    """

    data_fields: ClassVar[tuple[str, ...]] = ("chromosomes",)
    segment_fields: ClassVar[tuple[str, ...]] = ("chromosomes",)

    def _init_columns(self, name: str, labels: Any = None, **columns: np.ndarray) -> int:
        n = check_equal_lengths(name, **columns)
        for key, col in columns.items():
            setattr(self, f"_{key}", col)
        self._labels = label_array(labels, n)
        return n

    @property
    def labels(self) -> np.ndarray | None:
        return self._labels

    def __len__(self) -> int:
        return self._n_data

    def segments(self) -> set[str]:
        names: set[str] = set()
        for key in self.segment_fields:
            names.update(getattr(self, f"_{key}").tolist())
        return names

    def _label_list(self, style: Mapping[str, Any]) -> list:
        if self._labels is None or not style.get("display_labels", True):
            return [None] * self._n_data
        return self._labels.tolist()

    @staticmethod
    def _segments(values: Any, field: str) -> np.ndarray:
        return segment_array(values, field)

    @classmethod
    def from_dataframe(cls, name: str, df: pd.DataFrame, **kwargs: Any) -> PositionalTrack:
        """Build a track from DataFrame columns.

        Data arguments (and ``labels``) given as strings are column names;
        omitted data arguments default to a column of the same name. All
        other keyword arguments are passed to the constructor.

        Usage::

            SNPTrack.from_dataframe("snps", df, chromosomes="chrom", positions="pos")
        """
        if not isinstance(df, pd.DataFrame):
            raise TypeError(f"Expected a pandas DataFrame, got {type(df).__name__}.")
        for key in cls.data_fields + ("labels",):
            column = kwargs.get(key, key if key in cls.data_fields else None)
            if column is None:
                continue
            if isinstance(column, str):
                if column not in df.columns:
                    raise KeyError(
                        f"Column '{column}' for '{key}' not found in DataFrame. "
                        f"Available: {list(df.columns)}"
                    )
                kwargs[key] = df[column]
        return cls(name, **kwargs)
