#!/usr/bin/env python3
"""
Ripple - propagate a release by hand

Replays the ``release`` webhook for one published tag: every repository of
the organization that pins an older version of the released package gets
a bump on the propagation branch and a pull request.

Run with:
    RIPPLE_GITHUB_USER=bot RIPPLE_GITHUB_API_KEY=... \\
        python examples/python/propagate_release.py acme my-lib v4.0.0
"""

import asyncio
import logging
import sys

from ripple import (
    AsyncGitHubClient,
    ReleasePropagator,
    RippleError,
    configure_logging,
    handle_event,
)


async def propagate(organization: str, repository: str, tag: str) -> int:
    """Dispatch a synthetic release event and print the webhook answer."""
    payload = {
        "action": "published",
        "release": {"tag_name": tag},
        "repository": {"name": repository},
    }

    async with AsyncGitHubClient.from_env() as client:
        response = await handle_event(
            ReleasePropagator(client), "release", organization, payload
        )

    print(f"HTTP {response.status_code}")
    print(response.body or "(nothing to update)")
    return 0 if response.status_code < 400 else 1


def main() -> None:
    if len(sys.argv) != 4:
        print(__doc__)
        sys.exit(2)

    configure_logging(level=logging.INFO)

    try:
        sys.exit(asyncio.run(propagate(*sys.argv[1:])))
    except RippleError as e:
        print(f"Error: {e.message}")
        sys.exit(1)


if __name__ == "__main__":
    main()
