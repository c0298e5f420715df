"""Tracklist: ordered, name-unique, persistent collection of tracks."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Union

from ..track.base import Track


class Tracklist:
    """Ordered collection of tracks keyed by name.

    Immutable: ``add`` and ``remove`` return new Tracklists, so a list can
    be shared and extended in several directions safely.

    Usage::

        tracks = Tracklist() + background + snps + links
        tracks = tracks - "links"

    Adding a track whose name is already present replaces the old track
    in place (last write wins; the order of the other tracks is kept).
    Removing an absent name is a no-op.
    """

    __slots__ = ("_tracks", "_index")

    def __init__(self, tracks: Iterable[Track] = ()) -> None:
        self._tracks: tuple[Track, ...] = ()
        self._index: dict[str, int] = {}
        for track in tracks:
            self._tracks, self._index = self._with(track)

    def _with(self, track: Track) -> tuple[tuple[Track, ...], dict[str, int]]:
        if not isinstance(track, Track):
            raise TypeError(
                f"Tracklist entries must be tracks, got {type(track).__name__}."
            )
        position = self._index.get(track.name)
        if position is not None:
            tracks = self._tracks[:position] + (track,) + self._tracks[position + 1:]
            return tracks, dict(self._index)
        index = dict(self._index)
        index[track.name] = len(self._tracks)
        return self._tracks + (track,), index

    @classmethod
    def _from_parts(cls, tracks: tuple[Track, ...], index: dict[str, int]) -> Tracklist:
        obj = object.__new__(cls)
        obj._tracks = tracks
        obj._index = index
        return obj

    def add(self, item: Union[Track, Tracklist, Iterable[Track]]) -> Tracklist:
        """Return a new Tracklist with ``item`` (a track or tracks) appended."""
        if isinstance(item, Track):
            return self._from_parts(*self._with(item))
        result = self
        for track in item:
            result = result._from_parts(*result._with(track))
        return result

    def remove(self, names: Union[str, Iterable[str]]) -> Tracklist:
        """Return a new Tracklist without the named track(s)."""
        if isinstance(names, str):
            names = [names]
        drop = {name for name in names if name in self._index}
        if not drop:
            return self
        kept = tuple(t for t in self._tracks if t.name not in drop)
        return self._from_parts(kept, {t.name: i for i, t in enumerate(kept)})

    @property
    def names(self) -> list[str]:
        return [t.name for t in self._tracks]

    @property
    def tracks(self) -> tuple[Track, ...]:
        return self._tracks

    def index_of(self, name: str) -> int:
        try:
            return self._index[name]
        except KeyError:
            raise KeyError(
                f"Track '{name}' not found. Available: {self.names}"
            ) from None

    def __getitem__(self, name: str) -> Track:
        return self._tracks[self.index_of(name)]

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[Track]:
        return iter(self._tracks)

    def __len__(self) -> int:
        return len(self._tracks)

    def __add__(self, other: Union[Track, Tracklist]) -> Tracklist:
        if not isinstance(other, (Track, Tracklist)):
            return NotImplemented
        return self.add(other)

    def __sub__(self, names: Union[str, Iterable[str]]) -> Tracklist:
        return self.remove(names)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tracklist):
            return NotImplemented
        return self._tracks == other._tracks

    def __hash__(self) -> int:
        return hash(self._tracks)

    def __repr__(self) -> str:
        return f"Tracklist({self.names})"


def add(tracklist: Tracklist, item: Union[Track, Tracklist, Iterable[Track]]) -> Tracklist:
    """Functional form of :meth:`Tracklist.add`."""
    return tracklist.add(item)


def remove(tracklist: Tracklist, names: Union[str, Iterable[str]]) -> Tracklist:
    """Functional form of :meth:`Tracklist.remove`."""
    return tracklist.remove(names)
