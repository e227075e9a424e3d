"""Repositories resource client."""

from typing import TYPE_CHECKING, Any

from ripple.result import unwrap
from ripple.types.repos import RepositorySummary

if TYPE_CHECKING:
    from ripple.transport import AsyncHTTPTransport


class ReposClient:
    """Async client for repository listing."""

    PAGE_SIZE = 100

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the repos client.

        Args:
            transport: Async HTTP transport for making requests
        """
        self.transport = transport

    async def list_for_org(self, organization: str) -> list[RepositorySummary]:
        """
        List the repositories of an organization.

        Args:
            organization: Organization login

        Returns:
            RepositorySummary objects in the order the API lists them

        Raises:
            UnexpectedResponseError: If the API does not answer 200
            RemoteTransportError: On network failures
        """
        result = await self.transport.get(
            f"orgs/{organization}/repos", params={"per_page": self.PAGE_SIZE}
        )
        repos = unwrap(result, f"listing repositories of {organization}")
        return [self._parse_repository(repo) for repo in repos]

    def _parse_repository(self, data: dict[str, Any]) -> RepositorySummary:
        """Parse repository data from API response."""
        return RepositorySummary(
            name=data["name"],
            owner=data["owner"]["login"],
            default_branch=data.get("default_branch") or "master",
        )
