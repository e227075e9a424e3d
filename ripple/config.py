"""
Ripple configuration.

Constants shared by the propagation workflow and the settings object used to
build an authenticated GitHub client.
"""

import os
from dataclasses import dataclass

from ripple.exceptions import ConfigurationError

GITHUB_API_URL_ROOT = "api.github.com"
USER_AGENT = "webhook"

# Every propagation commit, in every repository and every run, lands here.
PROPAGATION_BRANCH = "ripple/dependency-updates"

MANIFEST_PATH = "package.json"
LOCKFILE_PATH = "npm-shrinkwrap.json"

EVENT_HEADER = "X-GitHub-Event"
CONTENT_TYPE = "Content-Type"
MSG_UNHANDLED_EVENT = "The event `{event}` isn't supported by this webhook."
MSG_UNSUPPORTED_CONTENT_TYPE = (
    "Unsupported Content-Type `{content_type}`. Expect `application/json`."
)
MSG_NOT_FOUND = "Resources not found."

COMMIT_MESSAGE = "Update {dependency} to {version} in {path}"
PULL_REQUEST_TITLE = "Update {dependency} to {version}"
PULL_REQUEST_BODY = (
    "Release {tag} of {organization}/{repository} was published.\n\n"
    "This pull request bumps `{dependency}` to `{version}`."
)


@dataclass(frozen=True)
class Settings:
    """Static configuration for one webhook invocation."""

    github_user: str
    github_api_key: str
    api_url_root: str = GITHUB_API_URL_ROOT
    timeout: float = 30.0
    repository_timeout: float | None = None

    @property
    def base_url(self) -> str:
        return f"https://{self.api_url_root}"

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from environment variables.

        Environment variables:
            RIPPLE_GITHUB_USER: GitHub login used for API calls (required)
            RIPPLE_GITHUB_API_KEY: API token for that login (required)
            RIPPLE_GITHUB_API_URL_ROOT: API host (optional, default: api.github.com)
            RIPPLE_TIMEOUT: Per-request timeout in seconds (optional, default: 30)
            RIPPLE_REPOSITORY_TIMEOUT: Budget in seconds for updating one
                repository (optional, default: no limit)

        Returns:
            Settings instance

        Raises:
            ConfigurationError: If a required variable is missing or a number
                cannot be parsed
        """
        user = os.environ.get("RIPPLE_GITHUB_USER")
        api_key = os.environ.get("RIPPLE_GITHUB_API_KEY")

        if not user:
            raise ConfigurationError("RIPPLE_GITHUB_USER environment variable not set")

        if not api_key:
            raise ConfigurationError(
                "RIPPLE_GITHUB_API_KEY environment variable not set"
            )

        return cls(
            github_user=user,
            github_api_key=api_key,
            api_url_root=os.environ.get(
                "RIPPLE_GITHUB_API_URL_ROOT", GITHUB_API_URL_ROOT
            ),
            timeout=_float_from_env("RIPPLE_TIMEOUT", 30.0),
            repository_timeout=_float_from_env("RIPPLE_REPOSITORY_TIMEOUT", None),
        )


def _float_from_env(name: str, default: float | None) -> float | None:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"Invalid {name}: {raw!r} is not a number") from None
