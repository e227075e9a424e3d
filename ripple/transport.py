"""
Async HTTP transport for the GitHub REST API.

Handles authenticated async HTTP communication with automatic retry of
transient failures, and maps every response onto a tagged ``Result``.
"""

import asyncio
import json
import random
import time
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field
from typing import Any

import httpx

from ripple.config import USER_AGENT, Settings
from ripple.exceptions import ConfigurationError
from ripple.logging import log_http_request, log_http_response
from ripple.result import Ok, Result, TransportError, Unexpected

# Success status expected for each method; anything else is Unexpected.
EXPECTED_STATUS = {"GET": 200, "POST": 201, "PUT": 200}


@dataclass
class RetryConfig:
    """Configuration for automatic retry behavior."""

    max_retries: int = 3
    backoff_factor: float = 2.0
    retry_on: list[int] = field(default_factory=lambda: [429, 500, 502, 503])
    respect_retry_after: bool = True
    max_backoff: float = 60.0  # Maximum backoff time in seconds
    jitter: float = 0.1  # Jitter factor (0.1 = ±10%)


class AsyncHTTPTransport:
    """
    Async HTTP transport layer for the GitHub REST API.

    Handles:
    - Basic authentication with the configured user and API key
    - Exponential backoff with jitter for retryable statuses and network errors
    - Retry-After header respect for rate limiting
    - Mapping responses to ``Ok`` / ``Unexpected`` / ``TransportError``

    Endpoints are relative paths such as ``orgs/acme/repos``; the transport
    prefixes scheme and API host.
    """

    def __init__(
        self,
        settings: Settings,
        retry_config: RetryConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize async HTTP transport.

        Args:
            settings: Credentials, API host and timeout
            retry_config: Configuration for retry behavior
            transport: Optional httpx transport (tests pass an ``httpx.MockTransport``)

        Raises:
            ConfigurationError: If the user or the API key is empty
        """
        if not settings.github_user or not settings.github_api_key:
            raise ConfigurationError(
                "A GitHub user and API key are required to talk to the API"
            )

        self.settings = settings
        self.base_url = settings.base_url
        self.retry_config = retry_config or RetryConfig()

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            auth=(settings.github_user, settings.github_api_key),
            timeout=settings.timeout,
            headers={
                "User-Agent": USER_AGENT,
                "Content-Type": "application/json",
                "Accept": "application/vnd.github+json",
            },
            transport=transport,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def get(self, endpoint: str, params: dict[str, Any] | None = None) -> Result:
        """GET ``endpoint``; ``Ok`` only on 200."""
        return await self.request("GET", endpoint, params=params)

    async def post(self, endpoint: str, body: dict[str, Any]) -> Result:
        """POST ``body`` to ``endpoint``; ``Ok`` only on 201."""
        return await self.request("POST", endpoint, body=body)

    async def put(self, endpoint: str, body: dict[str, Any]) -> Result:
        """PUT ``body`` to ``endpoint``; ``Ok`` only on 200."""
        return await self.request("PUT", endpoint, body=body)

    async def request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Result:
        """
        Make a request with automatic retry.

        Args:
            method: HTTP method (GET, POST or PUT)
            endpoint: Relative API path (e.g., "repos/acme/app/pulls")
            params: Query parameters
            body: JSON request body

        Returns:
            Tagged result of the call
        """
        path = "/" + endpoint.lstrip("/")
        expected = EXPECTED_STATUS.get(method, 200)

        async def make_request() -> httpx.Response:
            log_http_request(method, f"{self.base_url}{path}", body)
            return await self._client.request(method, path, params=params, json=body)

        return await self._execute_with_retry(make_request, expected)

    async def _execute_with_retry(
        self,
        request_fn: Callable[[], Coroutine[Any, Any, httpx.Response]],
        expected_status: int,
    ) -> Result:
        """
        Execute a request, retrying retryable statuses and network errors.

        Args:
            request_fn: Async function that makes the HTTP request
            expected_status: The only status code treated as success

        Returns:
            ``Ok`` on the expected status, ``Unexpected`` for any other final
            status, ``TransportError`` when no usable response was obtained
        """
        for attempt in range(self.retry_config.max_retries + 1):
            started = time.monotonic()
            try:
                response = await request_fn()
            except httpx.RequestError as e:
                if attempt >= self.retry_config.max_retries:
                    return TransportError(e)
                await asyncio.sleep(self._get_backoff_time(attempt, None))
                continue

            elapsed_ms = (time.monotonic() - started) * 1000

            if response.status_code == expected_status:
                try:
                    body = _parse_body(response)
                except ValueError as e:
                    return TransportError(e)
                log_http_response(
                    response.status_code, str(response.request.url), body, elapsed_ms
                )
                return Ok(body)

            unexpected = Unexpected(response.status_code, _parse_error_body(response))
            log_http_response(
                response.status_code,
                str(response.request.url),
                unexpected.body,
                elapsed_ms,
            )

            if not self._should_retry(response.status_code, attempt):
                return unexpected

            retry_after = response.headers.get("Retry-After")
            await asyncio.sleep(self._get_backoff_time(attempt, retry_after))

        raise AssertionError("unreachable: retry loop always returns")

    def _should_retry(self, status_code: int, attempt: int) -> bool:
        """
        Determine if a request should be retried.

        Args:
            status_code: HTTP status code
            attempt: Current attempt number (0-indexed)

        Returns:
            True if the request should be retried
        """
        if attempt >= self.retry_config.max_retries:
            return False

        return status_code in self.retry_config.retry_on

    def _get_backoff_time(self, attempt: int, retry_after: str | None) -> float:
        """
        Calculate backoff time for retry.

        Uses exponential backoff with jitter, respecting Retry-After header
        if present.

        Args:
            attempt: Current attempt number (0-indexed)
            retry_after: Value of Retry-After header (if present)

        Returns:
            Time to wait in seconds
        """
        if retry_after and self.retry_config.respect_retry_after:
            try:
                return float(retry_after)
            except ValueError:
                pass  # Fall through to exponential backoff

        base_wait = self.retry_config.backoff_factor ** attempt

        jitter_range = base_wait * self.retry_config.jitter
        jitter = random.uniform(-jitter_range, jitter_range)
        wait_time = base_wait + jitter

        return min(wait_time, self.retry_config.max_backoff)


def _parse_body(response: httpx.Response) -> Any:
    """Parse a success body; an empty body reads as ``{}``."""
    if not response.content.strip():
        return {}
    return json.loads(response.content)


def _parse_error_body(response: httpx.Response) -> Any:
    try:
        return _parse_body(response)
    except ValueError:
        return response.text
