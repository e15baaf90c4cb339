"""MCP server exposing read-only Sentry issue, project and event lookups."""

from sentry_mcp.__about__ import __version__

__all__ = ["__version__"]
