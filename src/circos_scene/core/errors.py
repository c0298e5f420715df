"""Error and warning types raised or reported while building a scene."""

from __future__ import annotations

from dataclasses import dataclass


class CircosError(Exception):
    """Base class for all circos-scene errors."""


class InvalidGenome(CircosError, ValueError):
    """Coordinate system is empty or has a non-positive segment length."""


class UnknownSegment(CircosError, LookupError):
    """A track or angle query references a segment absent from the genome.

    When raised by the scene builder, ``missing`` maps each offending
    track name to the segment names it referenced but the genome lacks.
    """

    def __init__(self, message: str, missing: dict[str, list[str]] | None = None) -> None:
        super().__init__(message)
        self.missing = dict(missing or {})


class MismatchedLength(CircosError, ValueError):
    """Parallel data columns of one track have different lengths."""


class UnknownOption(CircosError, ValueError):
    """A configuration key is not recognized."""

    def __init__(self, option: str, allowed, context: str = "") -> None:
        self.option = option
        self.allowed = sorted(allowed)
        where = f" for {context}" if context else ""
        super().__init__(
            f"Unknown option '{option}'{where}. "
            f"Valid options: {', '.join(self.allowed)}"
        )


# Non-fatal warning kinds attached to scene layers
DEGENERATE_RANGE = "DegenerateRange"
POSITION_CLAMPED = "PositionClamped"
GEOMETRY_ERROR = "GeometryError"


@dataclass(frozen=True)
class LayerWarning:
    """A non-fatal problem found while resolving one layer."""

    kind: str
    message: str

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}
