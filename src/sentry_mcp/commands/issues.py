"""Issue-related commands."""

from typing import Annotated

import typer
from rich.console import Console

from sentry_mcp.output import Column, OutputFormat, pagination_footer, print_json, render
from sentry_mcp.tools import Tool
from sentry_mcp.utils import run_tool


def list_issues(
    project: Annotated[str, typer.Argument(help="Project slug")],
    org: Annotated[
        str | None, typer.Option("--org", "-o", help="Organization slug (default: configured)")
    ] = None,
    query: Annotated[
        str | None, typer.Option("--query", "-q", help="Search query, e.g. is:unresolved")
    ] = None,
    stats_period: Annotated[
        str | None, typer.Option("--stats-period", "-s", help="Stats period, e.g. 24h or 14d")
    ] = None,
    cursor: Annotated[
        str | None, typer.Option("--cursor", "-c", help="Pagination cursor from a previous page")
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.table,
) -> None:
    """
    List one page of issues in a project.

    Examples:
        sentry-mcp issues backend
        sentry-mcp issues backend -q is:unresolved -s 24h
        sentry-mcp issues backend --cursor 1700000000000:100:0
        sentry-mcp issues backend --format json
    """
    result = run_tool(
        Tool.list_project_issues,
        {
            "project_slug": project,
            "organization_slug": org,
            "query": query,
            "stats_period": stats_period,
            "cursor": cursor,
        },
    )

    if format == OutputFormat.json:
        print_json({"data": result.payload, "pagination": result.pagination})
        return

    issues = result.payload
    if not issues:
        Console().print("No issues found")
        return

    rows = [
        {
            "id": str(issue.get("id", "")),
            "shortId": issue.get("shortId", ""),
            "status": issue.get("status", ""),
            "level": issue.get("level", ""),
            "count": str(issue.get("count", "")),
            "title": issue.get("title", ""),
        }
        for issue in issues
    ]

    columns = [
        Column("ID", "id", style="dim", max_width=12),
        Column("Short ID", "shortId", max_width=20),
        Column("Status", "status", max_width=12),
        Column("Level", "level", max_width=8),
        Column("Count", "count", justify="right", max_width=8),
        Column("Title", "title", max_width=50),
    ]

    render(
        rows,
        format,
        columns=columns,
        footer=pagination_footer(len(issues), result.pagination or {}),
    )


def show_issue(
    issue_id_or_url: Annotated[
        str, typer.Argument(help="Numeric issue ID or issue page URL")
    ],
) -> None:
    """
    Show an issue as JSON.

    Examples:
        sentry-mcp issue 6380454530
        sentry-mcp issue https://my-org.sentry.io/issues/6380454530/
    """
    result = run_tool(Tool.fetch_issue, {"issue_id_or_url": issue_id_or_url})
    print_json(result.payload)
