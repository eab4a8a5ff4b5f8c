"""Error taxonomy for content-store queries and view resolution."""

from __future__ import annotations

from typing import Any, Optional


class BridgeError(RuntimeError):
    """Base class for failures surfaced while building a content view."""


class QueryError(BridgeError):
    """Raised when a content-store query cannot produce a result."""


class ConfigError(QueryError):
    """Raised when the store identity (project/dataset/version) is not configured."""


class TransportError(QueryError):
    """Raised on network, DNS or timeout failures talking to the store."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class HTTPError(QueryError):
    """Raised when the store answers with a non-2xx status."""

    def __init__(self, code: int, detail: Optional[Any] = None):
        super().__init__(f"Content store HTTP {code}")
        self.code = code
        self.detail = detail


class NotFoundError(BridgeError):
    """Raised when a slug resolves to no published document."""


class LanguageUnavailable(BridgeError):
    """Raised when a document exists but has no title in the requested language."""
