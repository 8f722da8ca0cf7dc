"""
Core type definitions for Strata.

These types are shared by every store and combinator:
- Operation: the four protocol verbs, as recorded by LoggingStore
- MergePolicy: how a store interprets merge
- Entry: a value carried together with an optional metadata store
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict


D = TypeVar("D")
M = TypeVar("M")


# ============================================
# Enums
# ============================================

class Operation(str, Enum):
    """Protocol operations."""
    GET = "GET"
    PUT = "PUT"
    MERGE = "MERGE"
    DELETE = "DELETE"


class MergePolicy(str, Enum):
    """How a store applies merge."""
    UNION = "union"              # Shallow field union, new fields win
    APPEND = "append"            # Append to existing content
    REPLACE = "replace"          # Same as put
    UNSUPPORTED = "unsupported"  # Raises UnsupportedOperation


# ============================================
# Records
# ============================================

class Entry(BaseModel, Generic[D, M]):
    """
    A stored value paired with out-of-band metadata.

    ``metadata``, when present, is itself a store scoped to this one
    resource (e.g. the response headers of an HTTP fetch).
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    data: D
    metadata: M | None = None


def merge_values(existing: Any, update: Any) -> Any:
    """
    Combine ``update`` into ``existing``.

    Two mappings are merged field by field with ``update`` overriding
    same-named fields. Anything else is replaced by ``update``.
    """
    if isinstance(existing, Mapping) and isinstance(update, Mapping):
        return {**existing, **update}
    return update
