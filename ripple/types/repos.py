"""Repository and git ref data models."""

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass(frozen=True)
class RepositorySummary:
    """Organization member repository, as listed by the API."""

    name: str
    owner: str
    default_branch: str = "master"

    @property
    def api_path(self) -> str:
        return f"repos/{self.owner}/{self.name}"


@dataclass(frozen=True)
class GitRef:
    """A git reference and the object it points to."""

    ref: str  # e.g. "refs/heads/master", "refs/tags/v1.0.0"
    sha: str
    object_type: str = "commit"


@dataclass
class RefSet:
    """Ordered list of the refs of one repository."""

    refs: list[GitRef] = field(default_factory=list)

    def __iter__(self) -> Iterator[GitRef]:
        return iter(self.refs)

    def __len__(self) -> int:
        return len(self.refs)

    def find(self, ref: str) -> GitRef | None:
        for git_ref in self.refs:
            if git_ref.ref == ref:
                return git_ref
        return None

    def branch(self, name: str) -> GitRef | None:
        return self.find(f"refs/heads/{name}")

    def tag(self, name: str) -> GitRef | None:
        return self.find(f"refs/tags/{name}")
