# extpack/core/jsonutils.py
from __future__ import annotations

import json
from collections.abc import Mapping, Iterable
from dataclasses import is_dataclass, asdict
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel

__all__ = ["safeJsonDumps", "tryJSONify"]



# ------------------------------------------------
#                JSON serialization
# ------------------------------------------------

def safeJsonDumps(obj: object) -> str:
    """
    Serializes an object or pydantic model to a compact JSON string.
    Uses deterministic separators (",", ":") and disallows NaN/infinity.
    If direct JSON encoding fails, falls back to tryJSONify (circular/depth-safe) and retries.
    """
    payload: Any
    if isinstance(obj, BaseModel):
        payload = obj.model_dump(mode="json", exclude_none=True)
    else:
        payload = obj

    try:
        return json.dumps(payload, ensure_ascii=False, allow_nan=False, separators=(",", ":"))
    except (TypeError, ValueError):
        safePayload = tryJSONify(payload, _maxDepth=None)
        return json.dumps(safePayload, ensure_ascii=False, allow_nan=False, separators=(",", ":"))



# ------------------------------------------------
#              Generic JSON safety
# ------------------------------------------------

def tryJSONify(obj: Any, *, _seen: set[int] | None = None, _depth: int = 0, _maxDepth: int | None = 10) -> Any:
    """
    Attempts to make any object JSON-serializable.

    Rules:
      • Basic scalars (None, bool, int, float, str) are preserved.
      • Exceptions → {"type": ..., "message": ...}.
      • pydantic models → model_dump(mode="json").
      • Enum → its value. Path → string path.
      • sets/tuples/iterables → list.
      • Mappings → dict with str keys.
      • fallback → repr(obj)

    Recursion guards:
      • _seen prevents cycles.
      • _maxDepth stops deep recursion; when explicitly set to None, recursion guard is turned off.
    """
    if _seen is None:
        _seen = set()

    oid = id(obj)
    if oid in _seen:
        return f"<circular_ref {type(obj).__name__}>"
    if isinstance(_maxDepth, int) and _depth > _maxDepth:
        return f"<max_depth_exceeded {type(obj).__name__}>"

    # Primitives
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    _seen.add(oid)

    if isinstance(obj, BaseException):
        return {"type": obj.__class__.__name__, "message": str(obj)}

    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", exclude_none=True)

    if isinstance(obj, Enum):
        return tryJSONify(obj.value, _seen=_seen, _depth=_depth + 1, _maxDepth=_maxDepth)

    # Dataclass instance
    if is_dataclass(obj) and not isinstance(obj, type):
        return tryJSONify(asdict(obj), _seen=_seen, _depth=_depth + 1, _maxDepth=_maxDepth)

    if isinstance(obj, Path):
        return str(obj)

    if isinstance(obj, (set, frozenset, tuple)):
        return [tryJSONify(value, _seen=_seen, _depth=_depth + 1, _maxDepth=_maxDepth) for value in obj]

    if isinstance(obj, Mapping):
        return {
            str(key): tryJSONify(value, _seen=_seen, _depth=_depth + 1, _maxDepth=_maxDepth) for key, value in obj.items()
        }

    # Iterables which are not handled above
    if isinstance(obj, Iterable) and not isinstance(obj, (bytes, bytearray)):
        return [tryJSONify(value, _seen=_seen, _depth=_depth + 1, _maxDepth=_maxDepth) for value in obj]

    # Last-ditch representation (avoid raising during logging)
    return repr(obj)
