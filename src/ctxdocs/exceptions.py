"""Custom exception hierarchy for ctxdocs.

These exceptions allow callers to discriminate error categories
and handle them appropriately while preserving the original context.
"""

from __future__ import annotations

from typing import List, Optional


class CtxDocsError(Exception):
    """Base class for all ctxdocs exceptions."""


class ConfigError(CtxDocsError):
    """Raised when configuration loading or validation fails."""


class RetrievalError(CtxDocsError):
    """Raised when a corpus index cannot be fetched.

    Attributes
    ----------
    message: str
        Human-readable explanation.
    status: int | None
        HTTP status code, if the failure came from a response.
    locator: str | None
        The index locator that was requested.
    """

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        locator: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.locator = locator

    def __str__(self) -> str:
        parts: List[str] = [self.message]
        if self.status is not None:
            parts.append(f"status={self.status}")
        if self.locator:
            parts.append(f"locator={self.locator}")
        return " | ".join(parts)


class FormatError(CtxDocsError):
    """Raised when a corpus index payload does not match the expected shape."""


class SearchError(CtxDocsError):
    """Raised for search indexing/query issues."""
