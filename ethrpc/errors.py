# =============================================================================
# ethrpc/errors.py  -  Error types
# =============================================================================
#
# ApiError is the ONE error a caller of the core has to catch.  Validation
# failures, HTTP failures, network failures and anything unexpected inside
# the client all surface as ApiError; callers discriminate further on
# `code` when they need to.
#
# ConfigError is separate: it is a startup failure, not a per-call one.
# =============================================================================

from typing import Any, Optional


class ApiError(Exception):
    """A failed Ethereum JSON-RPC call.

    Args:
        message: Human-readable description of what went wrong.
        code: HTTP status or JSON-RPC error code, when one is known.
        details: Structured extra data (e.g. the node's response body).
    """

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = int(code) if code is not None else None
        self.details = details

    def __repr__(self) -> str:
        return f"ApiError(message={self.message!r}, code={self.code!r})"


class ConfigError(Exception):
    """Raised when the client cannot be configured (e.g. no API key)."""
