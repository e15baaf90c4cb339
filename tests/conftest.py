import pytest

from sentry_mcp.client import SentryClient, UpstreamResponse
from sentry_mcp.monitoring import setup_logging
from sentry_mcp.services import SentryApi
from sentry_mcp.tools import ToolRouter

# Configure structlog once for the test session so log.error() writes to stderr
setup_logging()

BASE_URL = "https://sentry.test.local"
API_URL = f"{BASE_URL}/api/0/"
ORG = "test-org"
EVENT_ID = "9fac2ceed9344f2bbfdd1fdacb0ed9b1"  # pragma: allowlist secret


class FakeTransport:
    """Transport double that records calls and replays canned responses by path."""

    def __init__(self, responses: dict[str, UpstreamResponse] | None = None) -> None:
        self.responses = responses or {}
        self.calls: list[tuple[str, dict[str, str]]] = []

    def get(self, path, params=None):
        self.calls.append((path, dict(params or {})))
        return self.responses.get(path, UpstreamResponse(data={}))


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def fake_router(fake_transport):
    return ToolRouter(SentryApi(fake_transport), default_org=ORG)


@pytest.fixture
def client():
    return SentryClient(API_URL, "test-token")


@pytest.fixture
def router(client):
    """Router over the real requests client; pair with requests_mock."""
    return ToolRouter(SentryApi(client), default_org=ORG)


@pytest.fixture
def sentry_env(monkeypatch):
    """Set SENTRY_* env vars for CLI tests."""
    monkeypatch.setenv("SENTRY_AUTH_TOKEN", "test_token_1234")  # pragma: allowlist secret
    monkeypatch.setenv("SENTRY_ORG_SLUG", ORG)
    monkeypatch.setenv("SENTRY_PROJECT_NAMES", "backend,frontend")
    monkeypatch.setenv("SENTRY_BASE_URL", BASE_URL)
    monkeypatch.delenv("SENTRY_DSN", raising=False)


@pytest.fixture
def sample_issues():
    return [
        {
            "id": "6380454530",
            "shortId": "BACKEND-1A",
            "status": "unresolved",
            "level": "error",
            "count": "42",
            "title": "ZeroDivisionError: division by zero",
        },
        {
            "id": "6380454531",
            "shortId": "BACKEND-1B",
            "status": "unresolved",
            "level": "warning",
            "count": "3",
            "title": "KeyError: 'user_id'",
        },
    ]
