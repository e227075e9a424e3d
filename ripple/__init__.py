"""Ripple - propagate package releases to dependent repositories."""

from ripple.client import AsyncGitHubClient
from ripple.config import PROPAGATION_BRANCH, Settings
from ripple.events import (
    EventResponse,
    handle_delivery,
    handle_event,
    not_found,
    parse_release_event,
)
from ripple.exceptions import (
    ConfigurationError,
    FileTooLargeError,
    MissingTagError,
    PropagationError,
    RemoteTransportError,
    RepositoryUpdateError,
    RippleError,
    UnexpectedResponseError,
)
from ripple.logging import configure_logging, get_logger
from ripple.propagator import ReleasePropagator
from ripple.result import Ok, TransportError, Unexpected, unwrap
from ripple.transport import AsyncHTTPTransport, RetryConfig
from ripple.types import (
    GitRef,
    ManifestFile,
    PropagationSummary,
    PullRequest,
    RefSet,
    ReleaseEvent,
    RepositorySummary,
    UpdateResult,
)
from ripple.versions import update_lockfile, update_manifest
from ripple.workflow import RepositoryUpdateWorkflow

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Main entry points
    "ReleasePropagator",
    "RepositoryUpdateWorkflow",
    "handle_event",
    "handle_delivery",
    "not_found",
    "parse_release_event",
    "EventResponse",
    # Client
    "AsyncGitHubClient",
    "AsyncHTTPTransport",
    "RetryConfig",
    "Settings",
    "PROPAGATION_BRANCH",
    # Results
    "Ok",
    "Unexpected",
    "TransportError",
    "unwrap",
    # Version rewriting
    "update_manifest",
    "update_lockfile",
    # Types
    "ReleaseEvent",
    "RepositorySummary",
    "GitRef",
    "RefSet",
    "ManifestFile",
    "PullRequest",
    "UpdateResult",
    "PropagationSummary",
    # Exceptions
    "RippleError",
    "ConfigurationError",
    "UnexpectedResponseError",
    "RemoteTransportError",
    "PropagationError",
    "RepositoryUpdateError",
    "MissingTagError",
    "FileTooLargeError",
    # Logging
    "configure_logging",
    "get_logger",
]
