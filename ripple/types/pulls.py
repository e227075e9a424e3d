"""Pull request data model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PullRequest:
    """A pull request opened (or found already open) for a propagation."""

    head: str
    base: str
    number: int | None = None
    url: str | None = None
    already_exists: bool = False
