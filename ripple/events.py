"""
GitHub webhook event dispatch.

Framework-free: a web server hands over the event name (``X-GitHub-Event``
header), the organization from the URL and the decoded JSON payload, and
sends back the returned ``EventResponse``.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ripple.config import (
    CONTENT_TYPE,
    EVENT_HEADER,
    MSG_NOT_FOUND,
    MSG_UNHANDLED_EVENT,
    MSG_UNSUPPORTED_CONTENT_TYPE,
)
from ripple.exceptions import RippleError
from ripple.logging import get_logger
from ripple.types.events import ReleaseEvent

if TYPE_CHECKING:
    from ripple.propagator import ReleasePropagator

logger = get_logger()

# Release actions that trigger a propagation; GitHub sends several per release.
PROPAGATED_ACTIONS = ("published",)


@dataclass(frozen=True)
class EventResponse:
    """Status code and text body to answer the webhook call with."""

    status_code: int
    body: str


def verify_content_type(content_type: str | None) -> EventResponse | None:
    """
    Reject anything but JSON payloads.

    Returns:
        A 400 response for an unsupported content type, else None
    """
    media_type = (content_type or "").split(";")[0].strip().lower()
    if media_type != "application/json":
        return EventResponse(
            400, MSG_UNSUPPORTED_CONTENT_TYPE.format(content_type=content_type)
        )
    return None


def not_found() -> EventResponse:
    """Answer for any route other than the webhook endpoint."""
    return EventResponse(404, MSG_NOT_FOUND)


def parse_release_event(organization: str, payload: dict[str, Any]) -> ReleaseEvent:
    """
    Build a ReleaseEvent from a ``release`` webhook payload.

    Args:
        organization: Organization the webhook is registered for
        payload: Decoded webhook body

    Raises:
        ValueError: If the payload lacks the repository name or tag name
    """
    repository = (payload.get("repository") or {}).get("name")
    tag = (payload.get("release") or {}).get("tag_name")
    if not repository or not tag:
        raise ValueError("release payload must carry repository.name and release.tag_name")
    return ReleaseEvent(organization=organization, repository=repository, tag=tag)


async def handle_event(
    propagator: "ReleasePropagator",
    event_name: str | None,
    organization: str,
    payload: dict[str, Any],
) -> EventResponse:
    """
    Dispatch one webhook delivery.

    Args:
        propagator: Propagator bound to an authenticated client
        event_name: Value of the ``X-GitHub-Event`` header
        organization: Organization from the webhook URL
        payload: Decoded webhook body

    Returns:
        200 with the propagation summary, 202 for events that are not
        handled, 400 for malformed release payloads, 500 when the
        propagation run fails
    """
    unhandled = EventResponse(202, MSG_UNHANDLED_EVENT.format(event=event_name))

    if event_name != "release":
        # "delete" (tag removal) is not handled yet either.
        return unhandled

    action = payload.get("action")
    if action is not None and action not in PROPAGATED_ACTIONS:
        return unhandled

    try:
        event = parse_release_event(organization, payload)
    except ValueError as e:
        return EventResponse(400, str(e))

    try:
        summary = await propagator.propagate(event)
    except RippleError as e:
        logger.error("Propagation of %s %s failed: %s", event.repository, event.tag, e)
        return EventResponse(500, e.message)

    return EventResponse(200, summary.text)


async def handle_delivery(
    propagator: "ReleasePropagator",
    headers: Mapping[str, str],
    organization: str,
    payload: dict[str, Any],
) -> EventResponse:
    """
    Dispatch a webhook delivery straight from its request headers.

    Checks ``Content-Type`` first, then reads the event name from
    ``X-GitHub-Event``. Header names are matched case-insensitively.

    Args:
        propagator: Propagator bound to an authenticated client
        headers: Request headers
        organization: Organization from the webhook URL
        payload: Decoded webhook body
    """
    normalized = {name.lower(): value for name, value in headers.items()}

    rejected = verify_content_type(normalized.get(CONTENT_TYPE.lower()))
    if rejected is not None:
        return rejected

    return await handle_event(
        propagator, normalized.get(EVENT_HEADER.lower()), organization, payload
    )
