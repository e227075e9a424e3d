"""Pull requests resource client."""

from typing import TYPE_CHECKING

from ripple.result import Unexpected, unwrap
from ripple.types.pulls import PullRequest

if TYPE_CHECKING:
    from ripple.transport import AsyncHTTPTransport


class PullsClient:
    """Async client for pull request operations."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the pulls client.

        Args:
            transport: Async HTTP transport for making requests
        """
        self.transport = transport

    async def create(
        self,
        repo_path: str,
        head: str,
        base: str,
        title: str,
        body: str | None = None,
    ) -> PullRequest:
        """
        Open a pull request.

        An "already exists" answer is not an error: the returned
        PullRequest has ``already_exists`` set instead.

        Args:
            repo_path: Repository API path
            head: Branch containing changes
            base: Branch to merge into
            title: Pull request title
            body: Optional pull request description

        Returns:
            PullRequest with number and URL when newly created

        Raises:
            UnexpectedResponseError: On any other non-201 answer
            RemoteTransportError: On network failures
        """
        payload = {"title": title, "head": head, "base": base}
        if body:
            payload["body"] = body

        result = await self.transport.post(f"{repo_path}/pulls", payload)
        if isinstance(result, Unexpected) and is_already_exists(result):
            return PullRequest(head=head, base=base, already_exists=True)

        data = unwrap(result, f"opening pull request {head} -> {base} in {repo_path}")
        return PullRequest(
            head=head,
            base=base,
            number=data.get("number"),
            url=data.get("html_url"),
        )


def is_already_exists(result: Unexpected) -> bool:
    """True if the API refused to open a pull request because one is open."""
    return "already exists" in result.message.lower()
