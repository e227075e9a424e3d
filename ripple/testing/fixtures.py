"""
Pytest fixtures for ripple testing.

Provides a fake GitHub organization modelled on a small npm workspace:
``my-lib`` releases, other repositories depend on it through GitHub URLs.
"""

import base64
from collections.abc import Generator
from typing import Any

import pytest

from ripple.client import AsyncGitHubClient
from ripple.config import Settings
from ripple.testing.mock import FakeGitHub, encode_document
from ripple.transport import RetryConfig
from ripple.types.contents import ManifestFile
from ripple.types.events import ReleaseEvent
from ripple.types.repos import GitRef, RefSet

TEST_ORG = "test_org"
RELEASED_REPO = "my-lib"  # package name of the released repository
RELEASING_REPO = "repo_1"
RELEASE_SHA = "4" * 40


# ============================================================================
# Fake API Fixtures
# ============================================================================


@pytest.fixture
def settings() -> Settings:
    """Provide test settings."""
    return Settings(github_user="test-user", github_api_key="test-api-key")


@pytest.fixture
def fake_github() -> Generator[FakeGitHub, None, None]:
    """
    Provide an empty FakeGitHub for ``test_org``.

    Example:
        ```python
        def test_my_feature(fake_github, settings):
            fake_github.add_repository("app", files={...})
            ...
            assert fake_github.was_called("GET", "orgs/test_org/repos")
        ```
    """
    fake = FakeGitHub(TEST_ORG)
    yield fake
    fake.reset()


@pytest.fixture
def release_event() -> ReleaseEvent:
    """Provide the release of my-lib 4.0.0, published from ``repo_1``."""
    return ReleaseEvent(organization=TEST_ORG, repository=RELEASING_REPO, tag="4.0.0")


@pytest.fixture
def released_org(fake_github: FakeGitHub) -> FakeGitHub:
    """
    Provide an organization of ``[repo_1, repo_3, repo_4]`` where ``repo_1``
    is the released ``my-lib`` and only ``repo_4`` depends on an older
    version of it.
    """
    fake_github.add_repository(
        RELEASING_REPO,
        files={
            "package.json": {"name": RELEASED_REPO, "version": "4.0.0"},
            "npm-shrinkwrap.json": create_lockfile_document(
                RELEASED_REPO, "4.0.0", {"left-pad": {"version": "1.1.3"}}
            ),
        },
        tags={"4.0.0": RELEASE_SHA},
    )
    fake_github.add_repository(
        "repo_3",
        files={"package.json": {"name": "repo_3", "dependencies": {"express": "4.13.3"}}},
    )
    fake_github.add_repository(
        "repo_4",
        files={
            "package.json": {
                "name": "repo_4",
                "dependencies": {RELEASED_REPO: github_constraint("1.0.0")},
            },
            "npm-shrinkwrap.json": create_lockfile_document(
                "repo_4",
                "0.1.0",
                {RELEASED_REPO: create_locked_entry("1.0.0", "1" * 40)},
            ),
        },
    )
    return fake_github


# ============================================================================
# Helper Functions
# ============================================================================


def create_client(
    fake: FakeGitHub, settings: Settings | None = None, **kwargs: Any
) -> AsyncGitHubClient:
    """
    Create an AsyncGitHubClient answering from ``fake``.

    Retries are disabled unless a ``retry_config`` is passed.
    """
    kwargs.setdefault("retry_config", RetryConfig(max_retries=0))
    return AsyncGitHubClient(
        settings or Settings(github_user="test-user", github_api_key="test-api-key"),
        transport=fake.transport(),
        **kwargs,
    )


def github_constraint(version: str, name: str = RELEASED_REPO) -> str:
    """A GitHub-URL dependency constraint, e.g. ``github:test_org/my-lib#1.0.0``."""
    return f"github:{TEST_ORG}/{name}#{version}"


def create_locked_entry(
    version: str, sha: str, name: str = RELEASED_REPO, **kwargs: Any
) -> dict[str, Any]:
    """A shrinkwrap entry for a GitHub-URL dependency."""
    entry: dict[str, Any] = {
        "version": version,
        "from": github_constraint(version, name),
        "resolved": f"git://github.com/{TEST_ORG}/{name}.git#{sha}",
    }
    entry.update(kwargs)
    return entry


def create_lockfile_document(
    name: str, version: str, dependencies: dict[str, Any]
) -> dict[str, Any]:
    """An ``npm-shrinkwrap.json`` document."""
    return {"name": name, "version": version, "dependencies": dependencies}


def create_manifest_file(
    document: dict[str, Any], path: str = "package.json", sha: str = "0" * 40
) -> ManifestFile:
    """A ManifestFile encoded the way the contents API serves it."""
    return ManifestFile(
        path=path,
        sha=sha,
        content=base64.b64encode(encode_document(document).encode("utf-8")).decode("ascii"),
        encoding="base64",
    )


def create_release_refs(tag: str = "4.0.0", sha: str = RELEASE_SHA) -> RefSet:
    """Refs of the released repository, with the release tag."""
    return RefSet(
        [
            GitRef(ref="refs/heads/master", sha="f" * 40),
            GitRef(ref=f"refs/tags/{tag}", sha=sha, object_type="tag"),
        ]
    )
