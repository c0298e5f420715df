"""CoordinateSystem: ordered, immutable set of named reference segments."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

import numpy as np
import pandas as pd

from .errors import InvalidGenome, UnknownSegment
from .validation import preview_items


# Chromosome lengths of the bundled reference assemblies
GENOMES: dict[str, dict[str, int]] = {
    "hg19": {
        "1": 249250621, "2": 243199373, "3": 198022430, "4": 191154276,
        "5": 180915260, "6": 171115067, "7": 159138663, "8": 146364022,
        "9": 141213431, "10": 135534747, "11": 135006516, "12": 133851895,
        "13": 115169878, "14": 107349540, "15": 102531392, "16": 90354753,
        "17": 81195210, "18": 78077248, "19": 59128983, "20": 63025520,
        "21": 48129895, "22": 51304566, "X": 155270560, "Y": 59373566,
    },
    "hg38": {
        "1": 248956422, "2": 242193529, "3": 198295559, "4": 190214555,
        "5": 181538259, "6": 170805979, "7": 159345973, "8": 145138636,
        "9": 138394717, "10": 133797422, "11": 135086622, "12": 133275309,
        "13": 114364328, "14": 107043718, "15": 101991189, "16": 90338345,
        "17": 83257441, "18": 80373285, "19": 58617616, "20": 64444167,
        "21": 46709983, "22": 50818468, "X": 156040895, "Y": 57227415,
    },
}


def _segment_pairs(segments: Any) -> list[tuple[Any, Any]]:
    if isinstance(segments, str):
        if segments not in GENOMES:
            raise InvalidGenome(
                f"Unknown genome preset '{segments}'. "
                f"Available presets: {sorted(GENOMES)}"
            )
        return list(GENOMES[segments].items())
    if isinstance(segments, pd.Series):
        return list(segments.items())
    if isinstance(segments, Mapping):
        return list(segments.items())
    if isinstance(segments, Iterable):
        pairs = []
        for item in segments:
            try:
                name, length = item
            except (TypeError, ValueError):
                raise InvalidGenome(
                    f"Genome entries must be (name, length) pairs, got {item!r}."
                ) from None
            pairs.append((name, length))
        return pairs
    raise TypeError(
        "Genome must be a preset name, a mapping of name -> length, a pandas Series "
        f"or a sequence of (name, length) pairs, got {type(segments).__name__}."
    )


class CoordinateSystem:
    """Ordered mapping of segment name to length.

    Insertion order is angular order: the first segment starts at angle 0
    and the others follow clockwise. Offsets are the cumulative length of
    all preceding segments.

    Usage::

        cs = CoordinateSystem.build({"A": 10, "B": 20})
        cs.offset_of("B")   # 10.0
        cs.total_length()   # 30.0
    """

    __slots__ = ("_names", "_lengths", "_offsets", "_index")

    def __init__(self, names: Iterable[str], lengths: Iterable[float]) -> None:
        names = [str(n) for n in names]
        lengths_arr = np.asarray(list(lengths), dtype=np.float64)

        if len(names) == 0:
            raise InvalidGenome("Genome is empty. Provide at least one segment.")
        if len(names) != len(lengths_arr):
            raise InvalidGenome(
                f"Got {len(names)} segment names but {len(lengths_arr)} lengths."
            )
        if any(not n for n in names):
            raise InvalidGenome("Segment names must be non-empty strings.")
        index = pd.Index(names)
        if index.has_duplicates:
            dupes = index[index.duplicated()].unique().tolist()
            raise InvalidGenome(f"Segment names must be unique. Found duplicates: {preview_items(dupes)}")
        bad = [n for n, length in zip(names, lengths_arr) if not np.isfinite(length) or length <= 0]
        if bad:
            raise InvalidGenome(
                f"Segment lengths must be positive. Invalid segments: {preview_items(bad)}"
            )

        self._names: tuple[str, ...] = tuple(names)
        self._lengths = lengths_arr
        self._lengths.flags.writeable = False
        self._offsets = np.concatenate(([0.0], np.cumsum(lengths_arr)[:-1]))
        self._offsets.flags.writeable = False
        self._index = {name: i for i, name in enumerate(self._names)}

    @classmethod
    def build(cls, segments: Any, exclude: Iterable[str] = ()) -> CoordinateSystem:
        """Build from a preset name, mapping, Series or (name, length) pairs.

        Segments named in ``exclude`` are dropped before building; names
        that are not present are ignored.
        """
        pairs = _segment_pairs(segments)
        excluded = {str(name) for name in exclude}
        kept = [(str(name), length) for name, length in pairs if str(name) not in excluded]
        try:
            lengths = [float(length) for _, length in kept]
        except (TypeError, ValueError):
            raise InvalidGenome("Segment lengths must be numbers.") from None
        return cls([name for name, _ in kept], lengths)

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    @property
    def lengths(self) -> np.ndarray:
        """Segment lengths in insertion order, read-only."""
        return self._lengths

    @property
    def offsets(self) -> np.ndarray:
        """Cumulative offset of every segment, read-only."""
        return self._offsets

    def index_of(self, name: str) -> int:
        try:
            return self._index[name]
        except KeyError:
            raise UnknownSegment(
                f"Segment '{name}' is not part of the genome. "
                f"Known segments: {preview_items(list(self._names))}"
            ) from None

    def offset_of(self, name: str) -> float:
        return float(self._offsets[self.index_of(name)])

    def length_of(self, name: str) -> float:
        return float(self._lengths[self.index_of(name)])

    def total_length(self) -> float:
        return float(self._lengths.sum())

    def missing(self, names: Iterable[str]) -> list[str]:
        """Return the distinct names not present in this genome, in first-seen order."""
        return list(dict.fromkeys(n for n in names if n not in self._index))

    def to_dict(self) -> dict:
        return {name: float(length) for name, length in zip(self._names, self._lengths)}

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CoordinateSystem):
            return NotImplemented
        return self._names == other._names and np.array_equal(self._lengths, other._lengths)

    def __hash__(self) -> int:
        return hash((self._names, self._lengths.tobytes()))

    def __repr__(self) -> str:
        return f"CoordinateSystem({len(self)} segments, total_length={self.total_length():g})"
