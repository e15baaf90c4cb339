"""Project-related commands."""

from typing import Annotated

import typer
from rich.console import Console

from sentry_mcp.output import Column, OutputFormat, render
from sentry_mcp.tools import Tool
from sentry_mcp.utils import run_tool


def list_projects(
    format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.table,
) -> None:
    """List all projects accessible with the configured token.

    Examples:
        sentry-mcp projects
        sentry-mcp projects --format json
    """
    projects = run_tool(Tool.list_projects, {}).payload

    if format == OutputFormat.json:
        render(projects, format)
        return

    if not projects:
        Console().print("No projects found")
        return

    rows = [
        {
            "slug": proj.get("slug", ""),
            "name": proj.get("name", ""),
            "org": (proj.get("organization") or {}).get("slug", ""),
            "platform": proj.get("platform", "") or "",
        }
        for proj in projects
    ]

    columns = [
        Column("Slug", "slug", style="cyan"),
        Column("Name", "name"),
        Column("Organization", "org"),
        Column("Platform", "platform"),
    ]

    render(rows, format, columns=columns, footer=f"{len(projects)} projects")
