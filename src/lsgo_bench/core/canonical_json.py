"""
Canonical JSON Serialization

Deterministic JSON with sorted keys and SHA-256 hashing, used to
fingerprint loaded auxiliary data and harness runs so two
implementations can confirm they evaluated the same inputs.
"""

import json
import hashlib
from typing import Any

import numpy as np


def _default(obj: Any) -> Any:
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.generic):
        return obj.item()
    return str(obj)


def canonical_dumps(obj: Any, indent: int = None) -> str:
    """
    Canonical JSON serialization with sorted keys.

    This ensures identical objects produce identical JSON strings.
    Floats are written with repr precision, so values round-trip exactly.

    Args:
        obj: Object to serialize
        indent: Indentation level (None for compact)

    Returns:
        Canonical JSON string
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(',', ':') if indent is None else None,
        indent=indent,
        default=_default
    )


def canonical_hash(obj: Any) -> str:
    """
    Compute SHA-256 hash of canonical JSON.

    Args:
        obj: Object to hash

    Returns:
        Hex digest of SHA-256 hash
    """
    return hashlib.sha256(canonical_dumps(obj).encode()).hexdigest()
