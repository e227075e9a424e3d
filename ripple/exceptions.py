"""Ripple exception classes."""

from typing import Any


class RippleError(Exception):
    """Base exception for all ripple errors."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class ConfigurationError(RippleError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class UnexpectedResponseError(RippleError):
    """Raised when the API answers with a status other than the expected one."""

    def __init__(self, action: str, status_code: int, body: Any) -> None:
        message = body.get("message") if isinstance(body, dict) else None
        super().__init__(
            "UNEXPECTED_RESPONSE",
            f"{action} returned HTTP {status_code}"
            + (f": {message}" if message else ""),
        )
        self.action = action
        self.status_code = status_code
        self.body = body


class RemoteTransportError(RippleError):
    """Raised on network failures or unreadable response bodies."""

    def __init__(self, action: str, cause: Exception) -> None:
        super().__init__("TRANSPORT_ERROR", f"{action} failed: {cause}")
        self.action = action
        self.cause = cause


class PropagationError(RippleError):
    """Raised when a propagation run cannot start (release data unavailable)."""

    def __init__(self, message: str) -> None:
        super().__init__("PROPAGATION_ERROR", message)


class RepositoryUpdateError(RippleError):
    """Raised when updating a single dependent repository fails."""

    def __init__(self, repository: str, message: str) -> None:
        super().__init__("REPOSITORY_UPDATE_ERROR", f"{repository}: {message}")
        self.repository = repository


class MissingTagError(RippleError):
    """Raised when the released tag cannot be found among the release refs."""

    def __init__(self, tag: str) -> None:
        super().__init__("MISSING_TAG", f"No tag ref found for release {tag}")
        self.tag = tag


class FileTooLargeError(RippleError):
    """Raised when the contents API withholds a file's content because of its size."""

    def __init__(self, repo_path: str, path: str, size: int | None = None) -> None:
        detail = f" ({size} bytes)" if size is not None else ""
        super().__init__(
            "FILE_TOO_LARGE",
            f"{path} in {repo_path} is too large for the contents API{detail}",
        )
        self.repo_path = repo_path
        self.path = path
        self.size = size
