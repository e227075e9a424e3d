"""Ripple async resource clients."""

from ripple.clients.contents import ContentsClient
from ripple.clients.pulls import PullsClient
from ripple.clients.refs import RefsClient
from ripple.clients.repos import ReposClient

__all__ = [
    "ReposClient",
    "ContentsClient",
    "RefsClient",
    "PullsClient",
]
