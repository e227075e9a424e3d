"""Shared fixtures for the ripple test suite."""

from ripple.testing.fixtures import (  # noqa: F401
    fake_github,
    release_event,
    released_org,
    settings,
)
