"""Business logic for Sentry API interactions.

One method per endpoint; payloads are returned exactly as Sentry sent them.
"""

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from sentry_mcp.client import Transport, parse_link_header


def _segment(value: str) -> str:
    return quote(value, safe="")


@dataclass(frozen=True)
class IssuePage:
    issues: Any
    pagination: dict[str, str]


class SentryApi:
    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def get_issue(self, issue_id: str) -> Any:
        return self.transport.get(f"issues/{issue_id}/").data

    def list_projects(self) -> Any:
        return self.transport.get("projects/").data

    def list_project_issues(
        self,
        org: str,
        project: str,
        query: str | None = None,
        stats_period: str | None = None,
        cursor: str | None = None,
    ) -> IssuePage:
        """Fetch one page of a project's issues with its next/prev cursors.

        Filters are sent only when non-empty.
        """
        params = {
            key: value
            for key, value in (("query", query), ("statsPeriod", stats_period), ("cursor", cursor))
            if value
        }
        response = self.transport.get(
            f"projects/{_segment(org)}/{_segment(project)}/issues/",
            params=params,
        )
        return IssuePage(
            issues=response.data,
            pagination=parse_link_header(response.headers.get("Link")),
        )

    def get_event(self, org: str, project: str, event_id: str) -> Any:
        return self.transport.get(
            f"projects/{_segment(org)}/{_segment(project)}/events/{event_id}/"
        ).data
