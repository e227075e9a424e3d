"""Propagation outcome data models."""

from dataclasses import dataclass, field

from ripple.types.events import ReleaseEvent
from ripple.types.pulls import PullRequest


@dataclass
class UpdateResult:
    """Outcome of the update workflow for one repository."""

    repository: str
    manifest_updated: bool = False
    lockfile_updated: bool = False
    messages: dict[str, str] = field(default_factory=dict)
    pull_request: PullRequest | None = None

    @property
    def updated_files(self) -> list[str]:
        return list(self.messages)

    def describe(self) -> str:
        """One summary line, e.g. ``repo: package.json updated``."""
        if not self.messages:
            return f"{self.repository}: Nothing updated"
        return f"{self.repository}: {' '.join(self.messages)} updated"


@dataclass
class PropagationSummary:
    """Result of one propagation run."""

    event: ReleaseEvent
    outcomes: list[UpdateResult | None]
    failures: dict[str, Exception] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return render_summary(self.outcomes)

    def __str__(self) -> str:
        return self.text


def render_summary(outcomes: list[UpdateResult | None]) -> str:
    """Bulleted summary of the outcomes, one line each; None entries are omitted."""
    lines = [outcome.describe() for outcome in outcomes if outcome is not None]
    if not lines:
        return ""
    return "- " + "\n- ".join(lines)
