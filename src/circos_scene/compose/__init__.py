"""Track composition: ordered, name-keyed tracklists."""

from .tracklist import Tracklist, add, remove

__all__ = [
    "Tracklist",
    "add",
    "remove",
]
