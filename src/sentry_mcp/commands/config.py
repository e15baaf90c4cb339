"""Configuration commands."""

import os
from typing import Annotated

import typer
from rich.console import Console

from sentry_mcp.config import (
    DEFAULT_BASE_URL,
    ENV_AUTH_TOKEN,
    ENV_BASE_URL,
    ENV_ORG_SLUG,
    ENV_PROJECT_NAMES,
)
from sentry_mcp.output import Column, OutputFormat, render
from sentry_mcp.utils import get_config, mask_token

config_app = typer.Typer(help="Configuration commands")


@config_app.command("show")
def show(
    format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.table,
) -> None:
    """Display the configuration the server would start with.

    Exits with status 1 when a required variable is missing.

    Examples:
        sentry-mcp config show
        sentry-mcp config show --format json
    """
    config = get_config()

    if format == OutputFormat.json:
        render(
            [{
                "base_url": config.base_url,
                "api_base_url": config.api_base_url,
                "org_slug": config.org_slug,
                "project_names": list(config.project_names),
                "auth_token": mask_token(config.auth_token),
            }],
            format,
        )
        return

    base_url_source = ENV_BASE_URL if os.getenv(ENV_BASE_URL) else "default"
    rows = [
        {"setting": "base_url", "value": config.base_url, "source": base_url_source},
        {"setting": "org_slug", "value": config.org_slug, "source": ENV_ORG_SLUG},
        {
            "setting": "project_names",
            "value": ", ".join(config.project_names),
            "source": ENV_PROJECT_NAMES,
        },
        {"setting": "auth_token", "value": mask_token(config.auth_token), "source": ENV_AUTH_TOKEN},
    ]
    columns = [
        Column("Setting", "setting", style="bold"),
        Column("Value", "value"),
        Column("Source", "source", style="dim"),
    ]
    render(rows, format, columns=columns)

    if config.base_url != DEFAULT_BASE_URL:
        Console().print(f"\n[dim]API root: {config.api_base_url}[/dim]")
