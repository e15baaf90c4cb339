"""Sentry API client and pagination header parsing.

Failures are never retried: every non-2xx response or transport failure is
turned into an UpstreamError carrying a message fit for the tool result.
"""

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

import requests

from sentry_mcp.exceptions import UpstreamError
from sentry_mcp.monitoring import get_logger

log = get_logger("client")

REQUEST_TIMEOUT = 30
HTTP_OK_MIN = 200
HTTP_OK_MAX = 300

_LINK_URL = re.compile(r"^\s*<([^>]*)>\s*$")


@dataclass(frozen=True)
class UpstreamResponse:
    data: Any
    headers: Mapping[str, str] = field(default_factory=dict)


class Transport(Protocol):
    def get(self, path: str, params: Mapping[str, str] | None = None) -> UpstreamResponse: ...


class SentryClient:
    """GET-only client bound to one API base URL and one bearer token."""

    def __init__(
        self,
        base_url: str,
        token: str,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        })

    def get(self, path: str, params: Mapping[str, str] | None = None) -> UpstreamResponse:
        url = f"{self.base_url}{path.lstrip('/')}"
        log.debug("sentry request", url=url, params=dict(params or {}))

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            log.error("sentry request failed", url=url, error=str(exc))
            raise UpstreamError(str(exc) or "Failed to reach the Sentry API") from exc

        if not HTTP_OK_MIN <= response.status_code < HTTP_OK_MAX:
            message = describe_http_error(response)
            log.error("sentry api error", url=url, status=response.status_code)
            raise UpstreamError(message)

        try:
            data = response.json()
        except ValueError as exc:
            log.error("sentry response not json", url=url, status=response.status_code)
            raise UpstreamError(f"Sentry API returned a non-JSON body: {exc}") from exc

        return UpstreamResponse(data=data, headers=response.headers)


def describe_http_error(response: requests.Response) -> str:
    """Render status, reason and body of a failed response as one line.

    JSON bodies are re-serialized; other bodies are included as text. The body
    part is left out when the response has none.
    """
    message = f"Sentry API error: {response.status_code} {response.reason or ''}".rstrip()
    if not response.content:
        return f"{message}."

    try:
        body = json.dumps(response.json())
    except ValueError:
        body = response.text
    return f"{message}. {body}"


def parse_link_header(header: str | None) -> dict[str, str]:
    """Map each paginating `rel` of a Link header to its cursor.

    Only segments carrying rel, cursor and results="true" contribute; anything
    malformed is skipped.

    >>> parse_link_header('<https://x/?cursor=abc>; rel="next"; results="true"; cursor="abc:0:0"')
    {'next': 'abc:0:0'}
    """
    cursors: dict[str, str] = {}
    if not header:
        return cursors

    for segment in header.split(","):
        parts = segment.split(";")
        if len(parts) < 2 or not _LINK_URL.match(parts[0]):
            continue

        attrs: dict[str, str] = {}
        for part in parts[1:]:
            key, sep, value = part.partition("=")
            if not sep:
                continue
            attrs[key.strip()] = value.strip().strip('"')

        rel = attrs.get("rel")
        cursor = attrs.get("cursor")
        if rel and cursor and attrs.get("results") == "true":
            cursors[rel] = cursor

    return cursors
