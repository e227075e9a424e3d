"""Git references resource client."""

from typing import TYPE_CHECKING, Any

from ripple.exceptions import UnexpectedResponseError
from ripple.result import unwrap
from ripple.types.repos import GitRef, RefSet

if TYPE_CHECKING:
    from ripple.transport import AsyncHTTPTransport


class RefsClient:
    """Async client for git reference operations."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the refs client.

        Args:
            transport: Async HTTP transport for making requests
        """
        self.transport = transport

    async def list(self, repo_path: str) -> RefSet:
        """
        List all refs (branches and tags) of a repository.

        Args:
            repo_path: Repository API path

        Returns:
            RefSet in API order
        """
        result = await self.transport.get(f"{repo_path}/git/refs")
        data = unwrap(result, f"listing refs of {repo_path}")
        # A single matching ref comes back as an object rather than a list.
        if isinstance(data, dict):
            data = [data]
        return RefSet([self._parse_ref(ref) for ref in data])

    async def get_branch(self, repo_path: str, branch: str) -> GitRef:
        """
        Get the ref of a single branch.

        Args:
            repo_path: Repository API path
            branch: Branch name

        Returns:
            GitRef pointing at the branch head
        """
        result = await self.transport.get(f"{repo_path}/git/refs/heads/{branch}")
        action = f"fetching branch {branch} of {repo_path}"
        data = unwrap(result, action)
        if isinstance(data, list):
            # Prefix match: keep the exact branch only.
            exact = [ref for ref in data if ref.get("ref") == f"refs/heads/{branch}"]
            if not exact:
                raise UnexpectedResponseError(action, 404, data)
            data = exact[0]
        return self._parse_ref(data)

    async def create_branch(self, repo_path: str, branch: str, sha: str) -> GitRef:
        """
        Create a branch pointing at a commit.

        Args:
            repo_path: Repository API path
            branch: New branch name
            sha: Commit SHA the branch starts from

        Returns:
            The created GitRef
        """
        ref = f"refs/heads/{branch}"
        result = await self.transport.post(
            f"{repo_path}/git/refs", {"ref": ref, "sha": sha}
        )
        data = unwrap(result, f"creating branch {branch} in {repo_path}")
        if not data:
            return GitRef(ref=ref, sha=sha)
        return self._parse_ref(data)

    def _parse_ref(self, data: dict[str, Any]) -> GitRef:
        """Parse ref data from API response."""
        target = data.get("object") or {}
        return GitRef(
            ref=data["ref"],
            sha=target.get("sha", ""),
            object_type=target.get("type", "commit"),
        )
