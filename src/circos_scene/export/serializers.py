"""Serializers: convert scenes to JSON for the rendering widget."""

from __future__ import annotations

import json
import math
from typing import Any

from ..core.genome import CoordinateSystem
from ..layout.scene import Scene


def _finite(obj: Any) -> Any:
    """Replace NaN/inf (not valid JSON) with None, recursively."""
    if isinstance(obj, float):
        return obj if math.isfinite(obj) else None
    if isinstance(obj, dict):
        return {k: _finite(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_finite(v) for v in obj]
    return obj


def scene_to_dict(scene: Scene) -> dict:
    """Scene payload with non-finite numbers replaced by None."""
    return _finite(scene.to_dict())


def serialize_scene(scene: Scene, indent: int | None = None) -> str:
    """Serialize a scene as a JSON string."""
    return json.dumps(scene_to_dict(scene), indent=indent, allow_nan=False)


def serialize_genome(cs: CoordinateSystem) -> str:
    """Serialize a coordinate system as ``{"segments": [{name, length}...]}``."""
    return json.dumps({
        "segments": [
            {"name": name, "length": float(length)}
            for name, length in zip(cs.names, cs.lengths)
        ],
    })
