"""Custom exceptions for sentry-mcp."""

from mcp.types import INVALID_PARAMS, METHOD_NOT_FOUND


class ConfigurationError(Exception):
    """Required environment variable missing or blank."""


class UpstreamError(Exception):
    """Sentry API call failed: non-2xx response, transport failure or unreadable body."""


class ToolError(Exception):
    """Tool call rejected before any request was sent.

    Carries the JSON-RPC error code reported back to the MCP client.
    """

    code: int = INVALID_PARAMS


class InvalidParamsError(ToolError):
    code = INVALID_PARAMS


class MethodNotFoundError(ToolError):
    code = METHOD_NOT_FOUND
