"""
Pytest plugin for ripple testing fixtures.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["ripple.testing.conftest"]
"""

# Re-export all fixtures for pytest auto-discovery
from ripple.testing.fixtures import (
    fake_github,
    release_event,
    released_org,
    settings,
)

__all__ = [
    "fake_github",
    "settings",
    "release_event",
    "released_org",
]
