"""Ripple testing utilities.

Provides an in-memory fake GitHub API and fixtures for testing code that
propagates releases.
"""

from ripple.testing.fixtures import (
    create_client,
    create_locked_entry,
    create_lockfile_document,
    create_manifest_file,
    create_release_refs,
    github_constraint,
)
from ripple.testing.mock import FakeGitHub, MockCall, MockResponse

__all__ = [
    # Fake API
    "FakeGitHub",
    "MockCall",
    "MockResponse",
    # Helper functions
    "create_client",
    "create_locked_entry",
    "create_lockfile_document",
    "create_manifest_file",
    "create_release_refs",
    "github_constraint",
]
