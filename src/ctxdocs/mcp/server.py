"""ctxdocs MCP server entrypoint using FastMCP.

Exposes documentation context from a prebuilt corpus index.
Run with:
  - ctxdocs-mcp
  - or: python -m ctxdocs.mcp.server (ensure PYTHONPATH includes ./src)
"""
from __future__ import annotations

import logging
import sys
from typing import Optional

from fastmcp import FastMCP

from ctxdocs.config import ProviderSettings, Settings, load_settings
from ctxdocs.logging_utils import setup_logging
from ctxdocs.mcp.tools import register_docs_tools
from ctxdocs.provider.multiplex import ProviderMultiplexer
from ctxdocs.provider.provider import DocsProvider, create_provider


class AppState:
    """Application state shared by MCP tools."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.logger = logging.getLogger("ctxdocs.provider")
        self.providers: ProviderMultiplexer[ProviderSettings, DocsProvider] = (
            ProviderMultiplexer(self._create_provider)
        )

    async def _create_provider(self, settings: ProviderSettings) -> DocsProvider:
        return await create_provider(settings, logger=self.logger)


# Global state and server instance
_state: Optional[AppState] = None
mcp = FastMCP("ctxdocs MCP Server")


# ----- Tools -----

@mcp.tool
def health() -> str:
    """Simple health check tool."""
    return "ok"


# ----- Entrypoint -----

def main() -> None:
    """Initialize state and run the MCP server."""
    global _state
    settings = load_settings()
    transport = settings.app.transport
    # stdio transport owns stdout
    setup_logging(
        settings.app.log_level, stream=sys.stderr if transport == "stdio" else sys.stdout
    )
    _state = AppState(settings)
    register_docs_tools(mcp, get_state=lambda: _state)
    if transport in ("http", "sse"):
        mcp.run(transport=transport, host=settings.app.host, port=settings.app.port)
    else:
        mcp.run()


if __name__ == "__main__":  # pragma: no cover
    main()
