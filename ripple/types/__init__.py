"""Ripple type definitions.

This module exports all data model types used by the package.
"""

from ripple.types.contents import ManifestFile
from ripple.types.events import ReleaseEvent
from ripple.types.pulls import PullRequest
from ripple.types.repos import GitRef, RefSet, RepositorySummary
from ripple.types.results import PropagationSummary, UpdateResult

__all__ = [
    # Input
    "ReleaseEvent",
    # Repository types
    "RepositorySummary",
    "GitRef",
    "RefSet",
    # File types
    "ManifestFile",
    # Pull request types
    "PullRequest",
    # Outcome types
    "UpdateResult",
    "PropagationSummary",
]
