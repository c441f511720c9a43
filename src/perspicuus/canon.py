"""
Canonical JSON Serialization

Deterministic JSON for hashing: sorted keys, no whitespace, UTF-8.
The same registry pack always produces the same hash, which exports carry
as provenance for the tables a result was scored against.
"""
from __future__ import annotations

import hashlib
import json
from datetime import date
from enum import Enum
from typing import Any


def _default_serializer(obj: Any) -> Any:
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=str)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def canonical_json(obj: Any) -> str:
    """
    Serialize object to canonical JSON string.

    Example:
        >>> canonical_json({"b": 1, "a": 2})
        '{"a":2,"b":1}'
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        default=_default_serializer,
        ensure_ascii=False,
    )


def content_hash(obj: Any) -> str:
    """Hex-encoded SHA-256 of the canonical JSON representation."""
    return hashlib.sha256(canonical_json(obj).encode("utf-8")).hexdigest()
