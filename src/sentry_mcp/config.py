"""Server configuration loaded from the environment.

Read once at startup and treated as immutable for the life of the process:
1. SENTRY_AUTH_TOKEN (required)
2. SENTRY_ORG_SLUG (required)
3. SENTRY_PROJECT_NAMES (required, comma-separated)
4. SENTRY_BASE_URL (optional, defaults to https://sentry.io)
"""

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from sentry_mcp.exceptions import ConfigurationError

DEFAULT_BASE_URL = "https://sentry.io"
API_PREFIX = "/api/0/"

ENV_AUTH_TOKEN = "SENTRY_AUTH_TOKEN"
ENV_ORG_SLUG = "SENTRY_ORG_SLUG"
ENV_PROJECT_NAMES = "SENTRY_PROJECT_NAMES"
ENV_BASE_URL = "SENTRY_BASE_URL"


class ServerConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    auth_token: str = Field(description="Sentry API authentication token")
    org_slug: str = Field(description="Default Sentry organization slug")
    project_names: tuple[str, ...] = Field(
        default=(),
        description="Project slugs this server is meant for (informational)",
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base URL for Sentry instance",
    )

    @property
    def api_base_url(self) -> str:
        return f"{self.base_url.rstrip('/')}{API_PREFIX}"


def split_project_names(value: str) -> tuple[str, ...]:
    return tuple(name.strip() for name in value.split(",") if name.strip())


def load_config(environ: Mapping[str, str] | None = None) -> ServerConfig:
    """Build the server config from environment variables.

    Raises ConfigurationError naming every required variable that is missing or blank.
    """
    env = os.environ if environ is None else environ

    required = {
        ENV_AUTH_TOKEN: (env.get(ENV_AUTH_TOKEN) or "").strip(),
        ENV_ORG_SLUG: (env.get(ENV_ORG_SLUG) or "").strip(),
        ENV_PROJECT_NAMES: (env.get(ENV_PROJECT_NAMES) or "").strip(),
    }
    missing = [name for name, value in required.items() if not value]
    if missing:
        raise ConfigurationError(
            f"Missing required environment variable(s): {', '.join(missing)}"
        )

    base_url = (env.get(ENV_BASE_URL) or "").strip() or DEFAULT_BASE_URL

    return ServerConfig(
        auth_token=required[ENV_AUTH_TOKEN],
        org_slug=required[ENV_ORG_SLUG],
        project_names=split_project_names(required[ENV_PROJECT_NAMES]),
        base_url=base_url,
    )
