"""Docs provider exposed to a host application.

A provider presents a fixed contract to its host: it reports its
capabilities and returns items for a request. `DocsProvider` answers
requests from a corpus index loaded once at construction time.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import httpx
from pydantic import BaseModel, ConfigDict

from ctxdocs.config import ProviderSettings
from ctxdocs.corpus.index import CorpusIndex
from ctxdocs.corpus.loader import fetch_index
from ctxdocs.exceptions import ConfigError
from ctxdocs.provider.assembler import Item, assemble
from ctxdocs.search.base_search import BaseSearch
from ctxdocs.search.corpus_search import CorpusSearch


class Capabilities(BaseModel):
    """Capabilities advertised to the host. Docs need no item selectors."""

    model_config = ConfigDict(extra="allow")


class ItemsParams(BaseModel):
    """Parameters of an items request."""

    query: Optional[str] = None


class Provider(ABC):
    """Abstract provider interface."""

    @abstractmethod
    def capabilities(self) -> Capabilities:
        """Describe what this provider supports."""

    @abstractmethod
    async def items(self, params: ItemsParams) -> List[Item]:
        """Return items for a request."""
        raise NotImplementedError


class DocsProvider(Provider):
    """Provider that returns documentation pages matching the request query."""

    def __init__(
        self,
        index: CorpusIndex,
        search: BaseSearch,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.index = index
        self.search = search
        self.logger = logger or logging.getLogger(__name__)

    def capabilities(self) -> Capabilities:
        return Capabilities()

    async def items(self, params: ItemsParams) -> List[Item]:
        return await assemble(self.index, params.query, search=self.search, log=self.logger)


async def create_provider(
    settings: ProviderSettings,
    *,
    client: Optional[httpx.AsyncClient] = None,
    logger: Optional[logging.Logger] = None,
) -> DocsProvider:
    """Load the configured corpus index and build a provider over it."""
    logger = logger or logging.getLogger(__name__)
    if not settings.index:
        raise ConfigError("No corpus index configured. Set CTXDOCS_DOCS__INDEX.")
    index = await fetch_index(
        settings.index, client=client, timeout=settings.timeout, log=logger
    )
    # Whoosh indexing is CPU bound and runs off the event loop
    search = await asyncio.to_thread(CorpusSearch, index, limit=settings.search_limit)
    logger.info("Docs provider ready: %d docs from %s", len(index), settings.index)
    return DocsProvider(index, search, logger=logger)
