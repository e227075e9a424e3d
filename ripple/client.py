"""
Ripple async GitHub client.

Provides the async interface to the parts of the GitHub REST API that the
propagation workflow needs.
"""

from typing import Any

import httpx

from ripple.clients import ContentsClient, PullsClient, RefsClient, ReposClient
from ripple.config import Settings
from ripple.transport import AsyncHTTPTransport, RetryConfig


class AsyncGitHubClient:
    """
    Async client for the GitHub REST API.

    Aggregates the resource clients over one shared, already-authenticated
    transport. The client holds no per-call state, so a single instance can
    serve every concurrent repository workflow of a propagation run.

    Example:
        ```python
        import asyncio
        from ripple import AsyncGitHubClient, ReleaseEvent, ReleasePropagator

        async def main():
            async with AsyncGitHubClient.from_env() as client:
                propagator = ReleasePropagator(client)
                summary = await propagator.propagate(
                    ReleaseEvent("acme", "my-lib", "v4.0.0")
                )
                print(summary.text)

        asyncio.run(main())
        ```
    """

    def __init__(
        self,
        settings: Settings,
        retry_config: RetryConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the async GitHub client.

        Args:
            settings: Credentials, API host and timeouts
            retry_config: Configuration for retry behavior (optional)
            transport: httpx transport override, for tests (optional)

        Raises:
            ConfigurationError: If the settings carry no credentials
        """
        self.settings = settings

        self._transport = AsyncHTTPTransport(
            settings=settings,
            retry_config=retry_config,
            transport=transport,
        )

        self.repos = ReposClient(self._transport)
        self.contents = ContentsClient(self._transport)
        self.refs = RefsClient(self._transport)
        self.pulls = PullsClient(self._transport)

    @classmethod
    def from_env(
        cls,
        retry_config: RetryConfig | None = None,
    ) -> "AsyncGitHubClient":
        """
        Create an async client from environment variables.

        See ``Settings.from_env`` for the variables read.

        Args:
            retry_config: Configuration for retry behavior (optional)

        Returns:
            Configured AsyncGitHubClient instance

        Raises:
            ConfigurationError: If required environment variables are missing
        """
        return cls(settings=Settings.from_env(), retry_config=retry_config)

    @property
    def transport(self) -> AsyncHTTPTransport:
        """Get the underlying async HTTP transport (for raw get/post/put calls)."""
        return self._transport

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> "AsyncGitHubClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit - closes the client."""
        await self.close()
