"""MCP server wiring: tool definitions, call handling and the stdio transport."""

import anyio.to_thread
import mcp.server.stdio
import mcp.types as types
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.shared.exceptions import McpError

from sentry_mcp.__about__ import __version__
from sentry_mcp.client import SentryClient
from sentry_mcp.config import ServerConfig
from sentry_mcp.exceptions import ToolError
from sentry_mcp.monitoring import get_logger, tool_context
from sentry_mcp.services import SentryApi
from sentry_mcp.tools import Tool, ToolRouter

log = get_logger("server")

SERVER_NAME = "sentry-server"

_ORG_SLUG_PROPERTY = {
    "type": "string",
    "description": "Organization slug. Defaults to the configured organization.",
}

TOOLS: list[types.Tool] = [
    types.Tool(
        name=Tool.fetch_issue.value,
        description="Get details for a specific Sentry issue using its ID or URL",
        inputSchema={
            "type": "object",
            "properties": {
                "issue_id_or_url": {
                    "type": "string",
                    "description": "The Sentry issue ID or the full URL of the issue page",
                },
            },
            "required": ["issue_id_or_url"],
        },
    ),
    types.Tool(
        name=Tool.list_projects.value,
        description="List the Sentry projects accessible with the configured token",
        inputSchema={"type": "object", "properties": {}},
    ),
    types.Tool(
        name=Tool.list_project_issues.value,
        description="List issues of a Sentry project, one page at a time",
        inputSchema={
            "type": "object",
            "properties": {
                "project_slug": {"type": "string", "description": "Project slug"},
                "organization_slug": _ORG_SLUG_PROPERTY,
                "query": {
                    "type": "string",
                    "description": "Sentry search query, e.g. 'is:unresolved'",
                },
                "stats_period": {
                    "type": "string",
                    "description": "Stats period such as '24h' or '14d'",
                },
                "cursor": {
                    "type": "string",
                    "description": "Pagination cursor from a previous call",
                },
            },
            "required": ["project_slug"],
        },
    ),
    types.Tool(
        name=Tool.fetch_event.value,
        description="Get a single Sentry event by project and event ID",
        inputSchema={
            "type": "object",
            "properties": {
                "project_slug": {"type": "string", "description": "Project slug"},
                "event_id": {
                    "type": "string",
                    "description": "Event ID (32 hexadecimal characters)",
                },
                "organization_slug": _ORG_SLUG_PROPERTY,
            },
            "required": ["project_slug", "event_id"],
        },
    ),
]


def build_router(config: ServerConfig) -> ToolRouter:
    client = SentryClient(config.api_base_url, config.auth_token)
    return ToolRouter(SentryApi(client), default_org=config.org_slug)


def build_server(router: ToolRouter) -> Server:
    """Create the MCP server around a router.

    tools/call is registered as a raw request handler so that ToolError
    surfaces to the client as a JSON-RPC error instead of a tool result.
    """
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return TOOLS

    async def handle_call_tool(request: types.CallToolRequest) -> types.ServerResult:
        name = request.params.name
        arguments = request.params.arguments or {}

        with tool_context(name):
            log.info("tool call")
            try:
                result = await anyio.to_thread.run_sync(router.dispatch, name, arguments)
            except ToolError as exc:
                raise McpError(types.ErrorData(code=exc.code, message=str(exc))) from exc

            if not result.success:
                log.warning("tool call failed", error=result.error)

        return types.ServerResult(
            types.CallToolResult(
                content=[types.TextContent(type="text", text=result.to_text())],
                isError=not result.success,
            )
        )

    server.request_handlers[types.CallToolRequest] = handle_call_tool
    return server


async def serve(config: ServerConfig) -> None:
    server = build_server(build_router(config))
    log.info(
        "Sentry MCP server running on stdio",
        org=config.org_slug,
        projects=list(config.project_names),
        base_url=config.base_url,
    )
    async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            InitializationOptions(
                server_name=SERVER_NAME,
                server_version=__version__,
                capabilities=server.get_capabilities(
                    notification_options=NotificationOptions(),
                    experimental_capabilities={},
                ),
            ),
        )
