from __future__ import annotations

from resilience import TransientError


class ZbError(RuntimeError):
    """Base class for every failure raised by the market-data client."""


class TransportError(ZbError, TransientError):
    """
    The HTTP round trip failed: DNS, connection refused, timeout or a
    non-2xx status. The underlying requests exception is chained as __cause__.
    """


class DecodeError(ZbError, ValueError):
    """Response body is not valid JSON or lacks a required top-level structure."""


class FieldDecodeError(DecodeError):
    """A single field could not be coerced (only raised in strict mode)."""

    def __init__(self, field: str, value: object, reason: str) -> None:
        super().__init__(f"{field}: {reason} (got {value!r})")
        self.field = field
        self.value = value
