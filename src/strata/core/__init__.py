"""
Core module - Configuration, errors and shared types.
"""

from strata.core.config import settings, setup_logging, get_logger
from strata.core.errors import (
    BackendFailure,
    PartialWriteFailure,
    StoreError,
    UnsupportedOperation,
)
from strata.core.types import Entry, MergePolicy, Operation, merge_values

__all__ = [
    "settings",
    "setup_logging",
    "get_logger",
    "BackendFailure",
    "PartialWriteFailure",
    "StoreError",
    "UnsupportedOperation",
    "Entry",
    "MergePolicy",
    "Operation",
    "merge_values",
]
