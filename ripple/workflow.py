"""
Per-repository update workflow.

Brings one dependent repository up to date with a release:

    FETCHING -> DECIDING -> SKIPPED
                         -> BRANCHING -> COMMITTING -> PULL_REQUESTING -> DONE
    (any step) -> FAILED

Steps are strictly sequential: each one needs the previous one's output
(file contents, branch existence, revision tokens).
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ripple.config import (
    COMMIT_MESSAGE,
    LOCKFILE_PATH,
    MANIFEST_PATH,
    PROPAGATION_BRANCH,
    PULL_REQUEST_BODY,
    PULL_REQUEST_TITLE,
)
from ripple.exceptions import RepositoryUpdateError, RippleError
from ripple.logging import get_logger
from ripple.types.contents import ManifestFile
from ripple.types.events import ReleaseEvent
from ripple.types.pulls import PullRequest
from ripple.types.repos import RefSet, RepositorySummary
from ripple.types.results import UpdateResult
from ripple.versions import update_lockfile, update_manifest

if TYPE_CHECKING:
    from ripple.client import AsyncGitHubClient

logger = get_logger("propagation")


class WorkflowState(Enum):
    FETCHING = "fetching"
    DECIDING = "deciding"
    SKIPPED = "skipped"
    BRANCHING = "branching"
    COMMITTING = "committing"
    PULL_REQUESTING = "pull_requesting"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class ReleaseContext:
    """What was released, fetched once per run and shared read-only."""

    event: ReleaseEvent
    dependency: str  # package name of the released repository
    refs: RefSet  # refs of the released repository, tags included
    lockfile: ManifestFile | None  # lockfile of the released repository


class RepositoryUpdateWorkflow:
    """
    Update workflow for a single dependent repository.

    Each instance owns its files and state; nothing is shared with the
    workflows of other repositories except the (stateless) client.
    """

    def __init__(
        self,
        client: "AsyncGitHubClient",
        repository: RepositorySummary,
        release: ReleaseContext,
        branch: str = PROPAGATION_BRANCH,
    ) -> None:
        """
        Initialize the workflow.

        Args:
            client: Shared GitHub client
            repository: Repository to update
            release: Release being propagated
            branch: Propagation branch name
        """
        self.client = client
        self.repository = repository
        self.release = release
        self.branch = branch
        self.state = WorkflowState.FETCHING

    @property
    def _version(self) -> str:
        return self.release.event.version

    def _transition(self, state: WorkflowState) -> None:
        logger.debug("%s: %s -> %s", self.repository.name, self.state.value, state.value)
        self.state = state

    async def run(self) -> UpdateResult | None:
        """
        Run the workflow to completion.

        Returns:
            UpdateResult, or None when the repository has nothing to update

        Raises:
            RepositoryUpdateError: If any step fails
        """
        try:
            return await self._run()
        except RippleError as e:
            self._transition(WorkflowState.FAILED)
            if isinstance(e, RepositoryUpdateError):
                raise
            raise RepositoryUpdateError(self.repository.name, e.message) from e
        except (KeyError, ValueError) as e:
            # Malformed API payload or file that is not valid JSON.
            self._transition(WorkflowState.FAILED)
            raise RepositoryUpdateError(
                self.repository.name, f"unreadable data: {e!r}"
            ) from e

    async def _run(self) -> UpdateResult | None:
        repo_path = self.repository.api_path

        manifest, lockfile = await self._fetch_files(ref=None)

        self._transition(WorkflowState.DECIDING)
        manifest_updated, lockfile_updated = self._rewrite(manifest, lockfile)
        if not manifest_updated and not lockfile_updated:
            self._transition(WorkflowState.SKIPPED)
            return None

        self._transition(WorkflowState.BRANCHING)
        refs = await self.client.refs.list(repo_path)
        if refs.branch(self.branch) is not None:
            # The branch may already carry earlier propagation commits; apply
            # the bump to its copies so their revision tokens are the ones
            # the API expects and finished edits are not committed twice.
            manifest, lockfile = await self._fetch_files(ref=self.branch)
            manifest_updated, lockfile_updated = self._rewrite(manifest, lockfile)
        else:
            await self._create_branch(refs)

        self._transition(WorkflowState.COMMITTING)
        result = UpdateResult(repository=self.repository.name)
        # Sequential on purpose: both writes move the same branch head.
        if manifest_updated and manifest is not None:
            result.messages[MANIFEST_PATH] = await self._commit(manifest)
            result.manifest_updated = True
        if lockfile_updated and lockfile is not None:
            result.messages[LOCKFILE_PATH] = await self._commit(lockfile)
            result.lockfile_updated = True

        self._transition(WorkflowState.PULL_REQUESTING)
        result.pull_request = await self._open_pull_request()

        self._transition(WorkflowState.DONE)
        return result

    async def _fetch_files(
        self, ref: str | None
    ) -> tuple[ManifestFile | None, ManifestFile | None]:
        repo_path = self.repository.api_path
        manifest, lockfile = await asyncio.gather(
            self.client.contents.get(repo_path, MANIFEST_PATH, ref=ref),
            self.client.contents.get(repo_path, LOCKFILE_PATH, ref=ref),
        )
        return manifest, lockfile

    def _rewrite(
        self, manifest: ManifestFile | None, lockfile: ManifestFile | None
    ) -> tuple[bool, bool]:
        dependency = self.release.dependency
        manifest_result = update_manifest(manifest, dependency, self._version)
        lockfile_result = update_lockfile(
            self.release.refs,
            lockfile,
            dependency,
            self._version,
            tag=self.release.event.tag,
            source_lockfile=self.release.lockfile,
        )
        return manifest_result.updated, lockfile_result.updated

    async def _create_branch(self, refs: RefSet) -> None:
        repo_path = self.repository.api_path
        default_branch = self.repository.default_branch
        head = refs.branch(default_branch)
        if head is None:
            head = await self.client.refs.get_branch(repo_path, default_branch)
        await self.client.refs.create_branch(repo_path, self.branch, head.sha)
        logger.debug(
            "%s: created %s from %s@%s",
            self.repository.name,
            self.branch,
            default_branch,
            head.sha[:7],
        )

    async def _commit(self, file: ManifestFile) -> str:
        message = COMMIT_MESSAGE.format(
            dependency=self.release.dependency, version=self._version, path=file.path
        )
        await self.client.contents.update(
            self.repository.api_path, file, message, branch=self.branch
        )
        return message

    async def _open_pull_request(self) -> PullRequest:
        event = self.release.event
        pull_request = await self.client.pulls.create(
            self.repository.api_path,
            head=self.branch,
            base=self.repository.default_branch,
            title=PULL_REQUEST_TITLE.format(
                dependency=self.release.dependency, version=self._version
            ),
            body=PULL_REQUEST_BODY.format(
                tag=event.tag,
                organization=event.organization,
                repository=event.repository,
                dependency=self.release.dependency,
                version=self._version,
            ),
        )
        if pull_request.already_exists:
            logger.debug("%s: pull request already open", self.repository.name)
        return pull_request
