"""Abstract search interface for querying a documentation corpus.

Defines the minimal surface for search backends (e.g., Whoosh), enabling
extensibility and testability via a common contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, List, Literal, Optional

from ctxdocs.corpus.models import DocID


@dataclass(frozen=True, slots=True)
class SearchQuery:
    """A free-text search request."""

    text: str


@dataclass(frozen=True, slots=True)
class SearchResult:
    """Reference to a matching chunk of a corpus document."""

    kind: ClassVar[Literal["reference"]] = "reference"

    doc: DocID
    chunk: int
    score: float
    excerpt: Optional[str] = None


class BaseSearch(ABC):
    """Abstract interface for search implementations."""

    @abstractmethod
    async def search(self, query: SearchQuery) -> List[SearchResult]:
        """Execute a search query and return results, best first."""
        raise NotImplementedError
