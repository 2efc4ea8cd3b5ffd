"""Tool registration modules for the ctxdocs MCP server."""

from .docs import register_docs_tools

__all__ = ["register_docs_tools"]
