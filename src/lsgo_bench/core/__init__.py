"""
Core Module - Foundational Components

Provides:
- Error hierarchy
- Canonical JSON serialization and hashing
"""

from .canonical_json import canonical_dumps, canonical_hash
from .errors import (
    LSGOError,
    DataLoadError,
    DimensionMismatchError,
    UnknownFunctionError,
)

__all__ = [
    'canonical_dumps',
    'canonical_hash',
    'LSGOError',
    'DataLoadError',
    'DimensionMismatchError',
    'UnknownFunctionError',
]
