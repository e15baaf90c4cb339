from sentry_mcp.cli import cli

cli()
