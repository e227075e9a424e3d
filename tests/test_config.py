"""
Tests for ripple settings.

Feature: ripple
"""

import pytest

from ripple.client import AsyncGitHubClient
from ripple.config import GITHUB_API_URL_ROOT, Settings
from ripple.exceptions import ConfigurationError

ENV_VARS = (
    "RIPPLE_GITHUB_USER",
    "RIPPLE_GITHUB_API_KEY",
    "RIPPLE_GITHUB_API_URL_ROOT",
    "RIPPLE_TIMEOUT",
    "RIPPLE_REPOSITORY_TIMEOUT",
)


@pytest.fixture
def env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("RIPPLE_GITHUB_USER", "bot")
    monkeypatch.setenv("RIPPLE_GITHUB_API_KEY", "secret-key")
    return monkeypatch


class TestSettingsFromEnv:
    """Tests for Settings.from_env."""

    def test_defaults(self, env: pytest.MonkeyPatch) -> None:
        settings = Settings.from_env()

        assert settings.github_user == "bot"
        assert settings.github_api_key == "secret-key"
        assert settings.api_url_root == GITHUB_API_URL_ROOT
        assert settings.base_url == "https://api.github.com"
        assert settings.timeout == 30.0
        assert settings.repository_timeout is None

    def test_overrides(self, env: pytest.MonkeyPatch) -> None:
        env.setenv("RIPPLE_GITHUB_API_URL_ROOT", "github.example.com/api/v3")
        env.setenv("RIPPLE_TIMEOUT", "5")
        env.setenv("RIPPLE_REPOSITORY_TIMEOUT", "120.5")

        settings = Settings.from_env()

        assert settings.base_url == "https://github.example.com/api/v3"
        assert settings.timeout == 5.0
        assert settings.repository_timeout == 120.5

    @pytest.mark.parametrize("name", ["RIPPLE_GITHUB_USER", "RIPPLE_GITHUB_API_KEY"])
    def test_missing_credentials(self, env: pytest.MonkeyPatch, name: str) -> None:
        env.delenv(name)

        with pytest.raises(ConfigurationError) as exc_info:
            Settings.from_env()

        assert name in exc_info.value.message

    def test_invalid_number(self, env: pytest.MonkeyPatch) -> None:
        env.setenv("RIPPLE_TIMEOUT", "soon")

        with pytest.raises(ConfigurationError) as exc_info:
            Settings.from_env()

        assert exc_info.value.code == "CONFIGURATION_ERROR"

    def test_settings_are_immutable(self) -> None:
        settings = Settings(github_user="bot", github_api_key="key")

        with pytest.raises(AttributeError):
            settings.github_user = "other"  # type: ignore[misc]


class TestClientFromEnv:
    """Tests for AsyncGitHubClient.from_env."""

    def test_from_env(self, env: pytest.MonkeyPatch) -> None:
        client = AsyncGitHubClient.from_env()

        assert client.settings.github_user == "bot"
        assert client.transport.base_url == "https://api.github.com"

    def test_from_env_without_credentials(self, env: pytest.MonkeyPatch) -> None:
        env.delenv("RIPPLE_GITHUB_API_KEY")

        with pytest.raises(ConfigurationError):
            AsyncGitHubClient.from_env()
