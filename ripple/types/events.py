"""Release event data model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ReleaseEvent:
    """A published release that should be propagated to dependents."""

    organization: str
    repository: str
    tag: str  # raw release tag name, e.g. "v4.0.0"

    @property
    def version(self) -> str:
        """The tag without its leading ``v``."""
        if self.tag[:1] in ("v", "V"):
            return self.tag[1:]
        return self.tag

    @property
    def api_path(self) -> str:
        return f"repos/{self.organization}/{self.repository}"
