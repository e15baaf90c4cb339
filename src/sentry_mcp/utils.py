"""Utility functions for CLI commands: config resolution and tool invocation."""

from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from sentry_mcp.config import ServerConfig, load_config
from sentry_mcp.exceptions import ConfigurationError, ToolError
from sentry_mcp.server import build_router
from sentry_mcp.tools import OperationResult, Tool

EXIT_UPSTREAM_ERROR = 1
EXIT_INVALID_PARAMS = 2


def mask_token(token: str | None) -> str:
    if token:
        return f"***...{token[-4:]}"
    return "(not set)"


def get_config() -> ServerConfig:
    try:
        return load_config()
    except ConfigurationError as exc:
        Console().print(f"[red]Error: {escape(str(exc))}[/red]")
        raise typer.Exit(1) from None


def run_tool(tool: Tool, arguments: dict[str, Any]) -> OperationResult:
    """Dispatch a tool from the command line.

    Parameter errors exit with status 2 and upstream errors with status 1;
    only successful results are returned.
    """
    router = build_router(get_config())
    console = Console()
    try:
        result = router.dispatch(tool.value, arguments)
    except ToolError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise typer.Exit(EXIT_INVALID_PARAMS) from None

    if not result.success:
        console.print(f"[red]{escape(result.error or '')}[/red]")
        raise typer.Exit(EXIT_UPSTREAM_ERROR)
    return result
