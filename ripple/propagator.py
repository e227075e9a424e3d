"""
Release propagation orchestrator.

Fetches what was released once, then runs the update workflow over every
other repository of the organization concurrently and renders a summary.
"""

import asyncio
from typing import TYPE_CHECKING

from ripple.config import LOCKFILE_PATH, MANIFEST_PATH, PROPAGATION_BRANCH
from ripple.exceptions import PropagationError, RippleError
from ripple.logging import get_logger
from ripple.types.events import ReleaseEvent
from ripple.types.repos import RepositorySummary
from ripple.types.results import PropagationSummary, UpdateResult
from ripple.workflow import ReleaseContext, RepositoryUpdateWorkflow

if TYPE_CHECKING:
    from ripple.client import AsyncGitHubClient

logger = get_logger("propagation")

# Default for ``repository_timeout``: read it from the client's settings.
SETTINGS_TIMEOUT = object()


class ReleasePropagator:
    """
    Propagates a release to the dependent repositories of its organization.

    Example:
        ```python
        propagator = ReleasePropagator(client, repository_timeout=120)
        summary = await propagator.propagate(ReleaseEvent("acme", "my-lib", "4.0.0"))
        print(summary.text)  # "- app: package.json npm-shrinkwrap.json updated"
        ```
    """

    def __init__(
        self,
        client: "AsyncGitHubClient",
        branch: str = PROPAGATION_BRANCH,
        repository_timeout: float | None | object = SETTINGS_TIMEOUT,
    ) -> None:
        """
        Initialize the propagator.

        Args:
            client: Shared, authenticated GitHub client
            branch: Propagation branch name
            repository_timeout: Seconds allowed for one repository's workflow;
                None means no limit (default: the client's settings)
        """
        self.client = client
        self.branch = branch
        if repository_timeout is SETTINGS_TIMEOUT:
            repository_timeout = client.settings.repository_timeout
        self.repository_timeout = repository_timeout

    async def propagate(self, event: ReleaseEvent) -> PropagationSummary:
        """
        Propagate ``event`` to every other repository of its organization.

        Args:
            event: The published release

        Returns:
            PropagationSummary with one outcome per organization repository,
            in organization-list order

        Raises:
            PropagationError: If the release data or the repository list
                cannot be fetched
        """
        repositories, release = await self._gather_release(event)
        logger.info(
            "Propagating %s %s to %d repositories of %s",
            release.dependency,
            event.version,
            sum(1 for repo in repositories if repo.name != event.repository),
            event.organization,
        )

        summary = PropagationSummary(event=event, outcomes=[])
        outcomes = await asyncio.gather(
            *(self._update(repo, release, summary) for repo in repositories)
        )
        summary.outcomes = list(outcomes)
        return summary

    async def _gather_release(
        self, event: ReleaseEvent
    ) -> tuple[list[RepositorySummary], ReleaseContext]:
        repo_path = event.api_path
        try:
            repositories, manifest, lockfile, refs = await asyncio.gather(
                self.client.repos.list_for_org(event.organization),
                self.client.contents.get(repo_path, MANIFEST_PATH),
                self.client.contents.get(repo_path, LOCKFILE_PATH),
                self.client.refs.list(repo_path),
            )
        except (RippleError, KeyError, ValueError) as e:
            logger.error("Cannot propagate %s %s: %s", repo_path, event.tag, e)
            raise PropagationError(
                f"Unable to load release data for {repo_path}: {e}"
            ) from e

        dependency = event.repository
        document = manifest.document if manifest is not None else None
        if isinstance(document, dict) and isinstance(document.get("name"), str):
            dependency = document["name"]

        return repositories, ReleaseContext(
            event=event, dependency=dependency, refs=refs, lockfile=lockfile
        )

    async def _update(
        self,
        repository: RepositorySummary,
        release: ReleaseContext,
        summary: PropagationSummary,
    ) -> UpdateResult | None:
        """Run one workflow; its failure is recorded, never raised."""
        if repository.name == release.event.repository:
            return None

        workflow = RepositoryUpdateWorkflow(
            self.client, repository, release, branch=self.branch
        )
        try:
            if self.repository_timeout is None:
                outcome = await workflow.run()
            else:
                outcome = await asyncio.wait_for(
                    workflow.run(), timeout=self.repository_timeout
                )
        except asyncio.TimeoutError as e:
            logger.warning(
                "%s: timed out after %ss in state %s",
                repository.name,
                self.repository_timeout,
                workflow.state.value,
            )
            summary.failures[repository.name] = e
            return None
        except Exception as e:
            logger.warning("%s: update failed: %s", repository.name, e, exc_info=True)
            summary.failures[repository.name] = e
            return None

        if outcome is not None:
            logger.info(outcome.describe())
        return outcome

