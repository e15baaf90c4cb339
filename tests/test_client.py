"""Tests for the Sentry API client and Link header parsing."""

import pytest
import requests

from sentry_mcp.client import SentryClient, parse_link_header
from sentry_mcp.exceptions import UpstreamError

from .conftest import API_URL


def test_get_success(requests_mock, client):
    requests_mock.get(f"{API_URL}issues/1/", json={"id": "1"})

    response = client.get("issues/1/")

    assert response.data == {"id": "1"}


def test_get_sends_auth_and_content_type_headers(requests_mock):
    requests_mock.get(f"{API_URL}projects/", json=[])

    SentryClient(API_URL, "my-secret-token").get("projects/")

    headers = requests_mock.last_request.headers
    assert headers["Authorization"] == "Bearer my-secret-token"
    assert headers["Content-Type"] == "application/json"


def test_base_url_without_trailing_slash(requests_mock):
    requests_mock.get(f"{API_URL}projects/", json=[])

    SentryClient(API_URL.rstrip("/"), "token").get("projects/")

    assert requests_mock.last_request.url == f"{API_URL}projects/"


def test_get_forwards_query_params(requests_mock, client):
    requests_mock.get(f"{API_URL}projects/o/p/issues/", json=[])

    client.get("projects/o/p/issues/", params={"query": "is:unresolved", "cursor": "c:0:0"})

    assert requests_mock.last_request.qs == {"query": ["is:unresolved"], "cursor": ["c:0:0"]}


def test_get_exposes_response_headers(requests_mock, client):
    requests_mock.get(f"{API_URL}projects/", json=[], headers={"Link": "<x>; rel=\"next\""})

    response = client.get("projects/")

    assert response.headers.get("link") == "<x>; rel=\"next\""


def test_http_error_includes_status_reason_and_body(requests_mock, client):
    requests_mock.get(
        f"{API_URL}issues/404/",
        status_code=404,
        reason="Not Found",
        json={"detail": "The requested resource does not exist"},
    )

    with pytest.raises(UpstreamError) as exc_info:
        client.get("issues/404/")

    assert str(exc_info.value) == (
        'Sentry API error: 404 Not Found. {"detail": "The requested resource does not exist"}'
    )


def test_http_error_with_text_body(requests_mock, client):
    requests_mock.get(f"{API_URL}projects/", status_code=502, reason="Bad Gateway", text="upstream down")

    with pytest.raises(UpstreamError, match="502 Bad Gateway. upstream down"):
        client.get("projects/")


def test_http_error_without_body(requests_mock, client):
    requests_mock.get(f"{API_URL}projects/", status_code=401, reason="Unauthorized")

    with pytest.raises(UpstreamError) as exc_info:
        client.get("projects/")

    assert str(exc_info.value) == "Sentry API error: 401 Unauthorized."


def test_connection_error_uses_raw_message(requests_mock, client):
    requests_mock.get(
        f"{API_URL}projects/", exc=requests.exceptions.ConnectionError("connection refused")
    )

    with pytest.raises(UpstreamError, match="connection refused"):
        client.get("projects/")


def test_timeout_becomes_upstream_error(requests_mock, client):
    requests_mock.get(f"{API_URL}projects/", exc=requests.exceptions.ConnectTimeout("timed out"))

    with pytest.raises(UpstreamError, match="timed out"):
        client.get("projects/")


def test_non_json_success_body(requests_mock, client):
    requests_mock.get(f"{API_URL}projects/", text="<html>login</html>")

    with pytest.raises(UpstreamError, match="non-JSON"):
        client.get("projects/")


def test_no_retry_on_failure(requests_mock, client):
    requests_mock.get(f"{API_URL}projects/", status_code=500, reason="Internal Server Error")

    with pytest.raises(UpstreamError):
        client.get("projects/")

    assert requests_mock.call_count == 1


# ===== Tests for parse_link_header() =====


def test_parse_link_header_next():
    header = '<https://x/?cursor=abc>; rel="next"; results="true"; cursor="abc:0:0"'

    assert parse_link_header(header) == {"next": "abc:0:0"}


def test_parse_link_header_sentry_format():
    header = (
        '<https://sentry.io/api/0/projects/o/p/issues/?&cursor=1700000000000:0:1>; '
        'rel="previous"; results="false"; cursor="1700000000000:0:1", '
        '<https://sentry.io/api/0/projects/o/p/issues/?&cursor=1700000000000:100:0>; '
        'rel="next"; results="true"; cursor="1700000000000:100:0"'
    )

    assert parse_link_header(header) == {"next": "1700000000000:100:0"}


def test_parse_link_header_both_directions():
    header = (
        '<https://x/?cursor=p>; rel="prev"; results="true"; cursor="p:0:1", '
        '<https://x/?cursor=n>; rel="next"; results="true"; cursor="n:100:0"'
    )

    assert parse_link_header(header) == {"prev": "p:0:1", "next": "n:100:0"}


def test_parse_link_header_requires_results_true():
    header = '<https://x/?cursor=abc>; rel="next"; results="false"; cursor="abc:0:0"'

    assert parse_link_header(header) == {}


def test_parse_link_header_missing_results():
    header = '<https://x/?cursor=abc>; rel="next"; cursor="abc:0:0"'

    assert parse_link_header(header) == {}


@pytest.mark.parametrize("header", [None, ""])
def test_parse_link_header_absent(header):
    assert parse_link_header(header) == {}


def test_parse_link_header_skips_malformed_segments():
    header = (
        'garbage, '
        'https://x/?cursor=a; rel="next"; results="true"; cursor="a:0:0", '
        '<https://x/?cursor=b>; rel="next"; results="true"; cursor="b:0:0"'
    )

    assert parse_link_header(header) == {"next": "b:0:0"}


def test_parse_link_header_requires_rel():
    header = '<https://x/?cursor=abc>; results="true"; cursor="abc:0:0"'

    assert parse_link_header(header) == {}


def test_parse_link_header_requires_cursor():
    header = '<https://x/?cursor=abc>; rel="next"; results="true"'

    assert parse_link_header(header) == {}
