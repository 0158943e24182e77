"""
Result fingerprints.

Cost results carry `inputs_hash`, a sha256 over the canonical JSON of
every record and setting that fed them. Callers compare hashes to decide
whether a line needs recomputing after a catalog or settings change.
"""

import hashlib
import json
from enum import Enum
from typing import Any

# Bookkeeping fields that change without affecting a cost
VOLATILE_FIELDS = frozenset([
    "created_at",
    "updated_at",
    "computed_at",
    "image_url",
    "stock_qty",
    "sample_qty",
])

FLOAT_DIGITS = 10


def _plain(value: Any, exclude_volatile: bool) -> Any:
    """Reduce models, enums and containers to sorted JSON-ready values."""
    if hasattr(value, "model_dump"):
        value = value.model_dump(mode="json")
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {
            str(key): _plain(item, exclude_volatile)
            for key, item in value.items()
            if not (exclude_volatile and key in VOLATILE_FIELDS)
        }
    if isinstance(value, (set, frozenset)):
        return sorted(_plain(item, exclude_volatile) for item in value)
    if isinstance(value, (list, tuple)):
        return [_plain(item, exclude_volatile) for item in value]
    if isinstance(value, float):
        return round(value, FLOAT_DIGITS)
    return value


def canonicalize(obj: Any, exclude_volatile: bool = True) -> str:
    """Deterministic JSON: sorted keys, no whitespace, ASCII only."""
    return json.dumps(
        _plain(obj, exclude_volatile),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=True,
    )


def canonicalize_and_hash(obj: Any, exclude_volatile: bool = True) -> str:
    """Returns "sha256:<hex digest>" of canonicalize(obj)."""
    digest = hashlib.sha256(canonicalize(obj, exclude_volatile).encode("utf-8"))
    return f"sha256:{digest.hexdigest()}"


def verify_hash(obj: Any, expected_hash: str, exclude_volatile: bool = True) -> bool:
    return canonicalize_and_hash(obj, exclude_volatile) == expected_hash
