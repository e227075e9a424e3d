"""
Tagged results of GitHub API calls.

Every transport call returns exactly one of:

- ``Ok(value)``: the expected success status, with the parsed JSON body
- ``Unexpected(status_code, body)``: any other status, with whatever body
  the server sent
- ``TransportError(cause)``: the request never produced a usable answer
  (network failure, unparseable success body)

Callers match on the variant explicitly; ``unwrap`` is provided for the
common case where anything but ``Ok`` is an error.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from ripple.exceptions import RemoteTransportError, UnexpectedResponseError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """The request succeeded with the expected status code."""

    value: T


@dataclass(frozen=True)
class Unexpected:
    """The server answered with a status code other than the expected one."""

    status_code: int
    body: Any

    @property
    def message(self) -> str:
        """Best-effort error message from a GitHub error body."""
        if isinstance(self.body, dict):
            parts = [str(self.body.get("message", ""))]
            for error in self.body.get("errors") or []:
                if isinstance(error, dict) and error.get("message"):
                    parts.append(str(error["message"]))
                elif isinstance(error, str):
                    parts.append(error)
            return "; ".join(part for part in parts if part)
        if isinstance(self.body, str):
            return self.body
        return ""


@dataclass(frozen=True)
class TransportError:
    """The request failed before a usable response was obtained."""

    cause: Exception


Result = Union[Ok[Any], Unexpected, TransportError]


def unwrap(result: Result, action: str) -> Any:
    """
    Return the value of an ``Ok`` result or raise.

    Args:
        result: Result returned by the transport
        action: Human-readable description used in the error message

    Returns:
        The parsed response body

    Raises:
        UnexpectedResponseError: For ``Unexpected`` results
        RemoteTransportError: For ``TransportError`` results
    """
    if isinstance(result, Ok):
        return result.value
    if isinstance(result, Unexpected):
        raise UnexpectedResponseError(action, result.status_code, result.body)
    raise RemoteTransportError(action, result.cause) from result.cause


__all__ = ["Ok", "Unexpected", "TransportError", "Result", "unwrap"]
