"""
Strata exception hierarchy.

Absence is never an error: a missing reference is the ``None`` result of
``get``. Everything here is a real failure a caller has to act on.

- UnsupportedOperation → the store refuses the operation (read/write-only)
- BackendFailure       → I/O failed (network, non-404 status, filesystem)
- PartialWriteFailure  → the cache took a write the source did not
"""

from typing import Literal

Layer = Literal["cache", "source"]


class StoreError(Exception):
    """Base exception for all storage failures."""

    def __init__(self, message: str, ref: str | None = None, layer: Layer | None = None):
        super().__init__(message)
        self.ref = ref
        self.layer = layer

    def tag(self, layer: Layer) -> "StoreError":
        """Record which layer of the enclosing caching store raised this."""
        self.layer = layer
        return self

    def __str__(self) -> str:
        message = super().__str__()
        if self.layer:
            return f"[{self.layer}] {message}"
        return message


class UnsupportedOperation(StoreError):
    """Raised when a store explicitly refuses an operation."""

    def __init__(self, operation: str, store: str, ref: str | None = None):
        super().__init__(f"{store} does not support {operation}", ref=ref)
        self.operation = operation
        self.store = store


class BackendFailure(StoreError):
    """Raised for I/O-level failures other than 'not found'."""

    def __init__(
        self,
        message: str,
        ref: str | None = None,
        layer: Layer | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message, ref=ref, layer=layer)
        self.status_code = status_code


class PartialWriteFailure(StoreError):
    """
    Raised when the cache accepted a write but the source did not.

    The cache now holds a value that is not durable at the source. The
    caller may retry the write or reconcile.
    """

    def __init__(self, ref: str, cause: Exception, layer: Layer = "source"):
        super().__init__(f"write to {ref!r} reached the cache but not the source: {cause}", ref=ref, layer=layer)
        self.cause = cause
