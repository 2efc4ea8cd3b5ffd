"""Documentation context tools for FastMCP.

These tools go through the provider abstraction so the host is decoupled
from how the corpus index is loaded and searched.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from fastmcp import FastMCP

from ctxdocs.provider.provider import ItemsParams, Provider


def register_docs_tools(mcp: FastMCP, get_state: Callable[[], Any]) -> None:
    """Register docs tools on the given FastMCP instance.

    The `get_state` callable should return an object exposing
    `settings.docs` and an async `providers.get(settings)`.
    """

    async def _get_provider() -> Provider:
        state = get_state()
        return await state.providers.get(state.settings.docs)

    @mcp.tool
    async def docs_capabilities() -> Dict[str, Any]:
        """Describe the capabilities of the docs provider."""
        provider = await _get_provider()
        return provider.capabilities().model_dump()

    @mcp.tool
    async def docs_items(query: Optional[str] = None) -> List[Dict[str, Any]]:
        """Return documentation pages relevant to `query`.

        Parameters
        ----------
        query: str | None
            Free-text query. When omitted or blank, every page in the corpus
            is returned.

        Each item has a `title` and, when known, `url`, a short `preview`
        and the full text `content`.
        """
        provider = await _get_provider()
        items = await provider.items(ItemsParams(query=query))
        return [item.to_wire() for item in items]
