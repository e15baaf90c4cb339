"""CLI commands."""

from sentry_mcp.commands import config, events, issues, projects, serve

__all__ = ["config", "events", "issues", "projects", "serve"]
