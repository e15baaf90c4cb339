"""Event-related commands."""

from typing import Annotated

import typer

from sentry_mcp.output import print_json
from sentry_mcp.tools import Tool
from sentry_mcp.utils import run_tool


def show_event(
    project: Annotated[str, typer.Argument(help="Project slug")],
    event_id: Annotated[str, typer.Argument(help="Event ID (32 hex characters)")],
    org: Annotated[
        str | None, typer.Option("--org", "-o", help="Organization slug (default: configured)")
    ] = None,
) -> None:
    """
    Show a single event as JSON.

    Examples:
        sentry-mcp event backend 9fac2ceed9344f2bbfdd1fdacb0ed9b1
        sentry-mcp event backend 9fac2ceed9344f2bbfdd1fdacb0ed9b1 --org acme
    """
    result = run_tool(
        Tool.fetch_event,
        {"project_slug": project, "event_id": event_id, "organization_slug": org},
    )
    print_json(result.payload)
