"""Run the MCP server over stdio."""

import anyio

from sentry_mcp import server
from sentry_mcp.utils import get_config


def serve() -> None:
    """Start the Sentry MCP server on stdin/stdout.

    Requires SENTRY_AUTH_TOKEN, SENTRY_ORG_SLUG and SENTRY_PROJECT_NAMES.
    SENTRY_BASE_URL defaults to https://sentry.io.
    """
    config = get_config()
    anyio.run(server.serve, config)
