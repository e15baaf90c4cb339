"""Tool dispatch: argument validation and the uniform result envelope.

Parameter problems raise ToolError subclasses before any request is sent.
Upstream failures never raise past this module; they come back as a failed
OperationResult.
"""

import json
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any
from urllib.parse import urlsplit

from sentry_mcp.exceptions import InvalidParamsError, MethodNotFoundError, UpstreamError
from sentry_mcp.monitoring import get_logger, tool_context
from sentry_mcp.services import SentryApi

log = get_logger("tools")

_DIGITS = re.compile(r"[0-9]+")
EVENT_ID_PATTERN = re.compile(r"[a-f0-9]{32}", re.IGNORECASE)


class Tool(str, Enum):
    fetch_issue = "fetch_issue"
    list_projects = "list_projects"
    list_project_issues = "list_project_issues"
    fetch_event = "fetch_event"


@dataclass(frozen=True)
class OperationResult:
    success: bool
    payload: Any = None
    error: str | None = None
    pagination: dict[str, str] | None = None

    def __post_init__(self) -> None:
        if self.success and self.error is not None:
            raise ValueError("successful result cannot carry an error")
        if not self.success and (not self.error or self.payload is not None):
            raise ValueError("failed result needs an error message and no payload")

    @classmethod
    def ok(cls, payload: Any, pagination: dict[str, str] | None = None) -> "OperationResult":
        return cls(success=True, payload=payload, pagination=pagination)

    @classmethod
    def failure(cls, error: str) -> "OperationResult":
        return cls(success=False, error=error)

    def to_text(self) -> str:
        if not self.success:
            return self.error or ""
        body = self.payload
        if self.pagination is not None:
            body = {"data": self.payload, "pagination": self.pagination}
        return json.dumps(body, indent=2, ensure_ascii=False)


def parse_issue_input(value: str) -> str | None:
    """Extract a numeric issue ID from a bare ID or an issue page URL.

    URLs must contain an `issues/<digits>` path pair, e.g.
    https://my-org.sentry.io/issues/6380454530/. Returns None when nothing matches.
    """
    if value.startswith(("http://", "https://")):
        try:
            segments = urlsplit(value).path.split("/")
        except ValueError:
            return None
        if "issues" not in segments:
            return None
        index = segments.index("issues")
        if index + 1 < len(segments) and _DIGITS.fullmatch(segments[index + 1]):
            return segments[index + 1]
        return None

    if _DIGITS.fullmatch(value):
        return value
    return None


def _required_str(arguments: Mapping[str, Any], name: str) -> str:
    value = arguments.get(name)
    if not isinstance(value, str) or not value:
        raise InvalidParamsError(f"Invalid arguments: {name} must be a non-empty string.")
    return value


def _optional_str(arguments: Mapping[str, Any], name: str) -> str | None:
    value = arguments.get(name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidParamsError(f"Invalid arguments: {name} must be a string.")
    return value or None


class ToolRouter:
    """Validate tool arguments and forward them to the matching API call."""

    def __init__(self, api: SentryApi, default_org: str) -> None:
        self.api = api
        self.default_org = default_org
        self._handlers: dict[Tool, Callable[[Mapping[str, Any]], OperationResult]] = {
            Tool.fetch_issue: self._fetch_issue,
            Tool.list_projects: self._list_projects,
            Tool.list_project_issues: self._list_project_issues,
            Tool.fetch_event: self._fetch_event,
        }
        unhandled = set(Tool) - set(self._handlers)
        if unhandled:
            raise RuntimeError(f"No handler for tools: {sorted(t.value for t in unhandled)}")

    def dispatch(self, name: str, arguments: Mapping[str, Any] | None = None) -> OperationResult:
        with tool_context(name):
            try:
                tool = Tool(name)
            except ValueError:
                log.warning("unknown tool")
                raise MethodNotFoundError(f"Unknown tool: {name}") from None

            try:
                return self._handlers[tool](arguments or {})
            except InvalidParamsError as exc:
                log.warning("rejected tool arguments", reason=str(exc))
                raise
            except UpstreamError as exc:
                return OperationResult.failure(str(exc))

    def _org(self, arguments: Mapping[str, Any]) -> str:
        return _optional_str(arguments, "organization_slug") or self.default_org

    def _fetch_issue(self, arguments: Mapping[str, Any]) -> OperationResult:
        raw = arguments.get("issue_id_or_url")
        if not isinstance(raw, str):
            raise InvalidParamsError("Invalid arguments: issue_id_or_url must be a string.")

        issue_id = parse_issue_input(raw)
        if issue_id is None:
            raise InvalidParamsError(f"Invalid Sentry issue ID or URL format: {raw}")

        return OperationResult.ok(self.api.get_issue(issue_id))

    def _list_projects(self, arguments: Mapping[str, Any]) -> OperationResult:
        return OperationResult.ok(self.api.list_projects())

    def _list_project_issues(self, arguments: Mapping[str, Any]) -> OperationResult:
        project = _required_str(arguments, "project_slug")
        page = self.api.list_project_issues(
            org=self._org(arguments),
            project=project,
            query=_optional_str(arguments, "query"),
            stats_period=_optional_str(arguments, "stats_period"),
            cursor=_optional_str(arguments, "cursor"),
        )
        return OperationResult.ok(page.issues, pagination=page.pagination)

    def _fetch_event(self, arguments: Mapping[str, Any]) -> OperationResult:
        project = _required_str(arguments, "project_slug")
        event_id = arguments.get("event_id")
        if not isinstance(event_id, str) or not EVENT_ID_PATTERN.fullmatch(event_id):
            raise InvalidParamsError(
                f"Invalid event_id: {event_id!r}. Expected 32 hexadecimal characters."
            )

        return OperationResult.ok(self.api.get_event(self._org(arguments), project, event_id))
