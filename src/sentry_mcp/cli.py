from typing import Annotated

import typer

from sentry_mcp.__about__ import __version__
from sentry_mcp.commands import config, events, issues, projects, serve
from sentry_mcp.monitoring import setup_logging, setup_sentry

app = typer.Typer(
    help="Sentry MCP - Serve read-only Sentry lookups to MCP clients.",
    no_args_is_help=True,
)

app.add_typer(config.config_app, name="config")

app.command("serve")(serve.serve)
app.command("issue")(issues.show_issue)
app.command("issues")(issues.list_issues)
app.command("event")(events.show_event)
app.command("projects")(projects.list_projects)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"sentry-mcp {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug output to stderr"),
    ] = False,
) -> None:
    """Handle global options before subcommand dispatch."""
    if verbose:
        setup_logging(verbose=True)


def cli() -> None:
    """Configure logging and Sentry, then run the CLI app."""
    setup_logging()
    setup_sentry(environment="local")
    app()
