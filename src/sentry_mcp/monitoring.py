"""Logging and self-monitoring for the server process.

stdout carries the MCP JSON-RPC stream under `serve` and command output
otherwise, so every log line goes to stderr (or the file given to
setup_logging). Module loggers are lazy: they pick up whatever configuration
is active when they first log, not when their module is imported.

Per-call context such as the tool name is bound with structlog.contextvars and
merged into every line logged while the call is running.
"""

import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TextIO

import sentry_sdk
import structlog

from sentry_mcp.__about__ import __version__


def setup_logging(verbose: bool = False, file: TextIO | None = None) -> None:
    stream = file if file is not None else sys.stderr

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=stream.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else logging.INFO
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Any:
    if name:
        return structlog.get_logger(logger=name)
    return structlog.get_logger()


@contextmanager
def tool_context(tool: str) -> Iterator[None]:
    """Tag every log line emitted during one tool call with the tool name."""
    with structlog.contextvars.bound_contextvars(tool=tool):
        yield


def setup_sentry(environment: str = "local") -> None:
    """Report this server's own exceptions to Sentry when SENTRY_DSN is set."""
    dsn = os.environ.get("SENTRY_DSN")
    if not dsn:
        get_logger("monitoring").info("Sentry DSN not configured, skipping error tracking setup")
        return

    sentry_sdk.init(
        dsn=dsn,
        traces_sample_rate=0.03,
        environment=environment,
        release=f"sentry-mcp@{__version__}",
        attach_stacktrace=True,
        send_default_pii=False,
    )
