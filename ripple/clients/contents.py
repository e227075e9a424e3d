"""Repository contents resource client."""

from typing import TYPE_CHECKING

from ripple.exceptions import FileTooLargeError
from ripple.result import Unexpected, unwrap
from ripple.types.contents import ManifestFile

if TYPE_CHECKING:
    from ripple.transport import AsyncHTTPTransport


class ContentsClient:
    """Async client for reading and writing repository files."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the contents client.

        Args:
            transport: Async HTTP transport for making requests
        """
        self.transport = transport

    async def get(
        self, repo_path: str, path: str, ref: str | None = None
    ) -> ManifestFile | None:
        """
        Fetch and decode a JSON file.

        Args:
            repo_path: Repository API path (e.g., "repos/acme/app")
            path: File path inside the repository
            ref: Branch to read from (default: the repository's default branch)

        Returns:
            ManifestFile, or None when the file does not exist

        Raises:
            UnexpectedResponseError: On any non-200 answer other than 404
            FileTooLargeError: When the API leaves out the content (files over 1 MB)
            RemoteTransportError: On network failures
        """
        result = await self.transport.get(
            f"{repo_path}/contents/{path}",
            params={"ref": ref} if ref else None,
        )
        if isinstance(result, Unexpected) and result.status_code == 404:
            return None

        data = unwrap(result, f"fetching {path} from {repo_path}")
        if data.get("encoding") == "none":
            raise FileTooLargeError(repo_path, path, data.get("size"))
        if not data.get("content") and not data.get("encoding"):
            return None

        return ManifestFile(
            path=data.get("path", path),
            sha=data["sha"],
            content=data["content"],
            encoding=data["encoding"],
        )

    async def update(
        self, repo_path: str, file: ManifestFile, message: str, branch: str
    ) -> str:
        """
        Commit new content for a file on a branch.

        The file's ``sha`` must be the revision token of the file as it
        currently is on ``branch``. On success it is replaced by the new one.

        Args:
            repo_path: Repository API path
            file: File carrying the new encoded content
            message: Commit message
            branch: Target branch

        Returns:
            The SHA of the created commit

        Raises:
            UnexpectedResponseError: If the API does not answer 200
            RemoteTransportError: On network failures
        """
        result = await self.transport.put(
            f"{repo_path}/contents/{file.path}",
            {
                "message": message,
                "content": file.content,
                "sha": file.sha,
                "branch": branch,
            },
        )
        data = unwrap(result, f"committing {file.path} to {repo_path}@{branch}")

        new_sha = (data.get("content") or {}).get("sha")
        if new_sha:
            file.sha = new_sha
        return (data.get("commit") or {}).get("sha", "")
