"""
Tests for the resource clients, run against the fake GitHub API.

Feature: ripple
"""

import asyncio

import pytest

from ripple.exceptions import FileTooLargeError, RemoteTransportError, UnexpectedResponseError
from ripple.testing import FakeGitHub, create_client, github_constraint
from ripple.versions import update_manifest

REPO = "repos/test_org/app"


@pytest.fixture
def org(fake_github: FakeGitHub) -> FakeGitHub:
    fake_github.add_repository(
        "app",
        files={"package.json": {"name": "app", "dependencies": {"my-lib": github_constraint("1.0.0")}}},
        default_branch="main",
        tags={"v1.0.0": "a" * 40},
    )
    fake_github.add_repository("empty")
    return fake_github


def run(fake: FakeGitHub, action):
    async def _test():
        async with create_client(fake) as client:
            return await action(client)

    return asyncio.run(_test())


class TestReposClient:
    """Tests for ReposClient."""

    def test_list_for_org(self, org: FakeGitHub) -> None:
        repos = run(org, lambda client: client.repos.list_for_org("test_org"))

        assert [repo.name for repo in repos] == ["app", "empty"]
        assert repos[0].owner == "test_org"
        assert repos[0].default_branch == "main"
        assert repos[0].api_path == REPO
        assert org.get_calls("GET", "orgs/test_org/repos")[0].params == {"per_page": "100"}

    def test_list_for_unknown_org_raises(self, org: FakeGitHub) -> None:
        with pytest.raises(UnexpectedResponseError) as exc_info:
            run(org, lambda client: client.repos.list_for_org("other_org"))

        assert exc_info.value.status_code == 404


class TestContentsClient:
    """Tests for ContentsClient."""

    def test_get_decodes_document(self, org: FakeGitHub) -> None:
        file = run(org, lambda client: client.contents.get(REPO, "package.json"))

        assert file is not None
        assert file.path == "package.json"
        assert file.encoding == "base64"
        assert file.document["dependencies"]["my-lib"] == github_constraint("1.0.0")

    def test_get_missing_file_is_none(self, org: FakeGitHub) -> None:
        file = run(org, lambda client: client.contents.get(REPO, "npm-shrinkwrap.json"))

        assert file is None

    def test_get_passes_ref(self, org: FakeGitHub) -> None:
        run(org, lambda client: client.contents.get(REPO, "package.json", ref="feature"))

        call = org.get_calls("GET", f"{REPO}/contents/package.json")[0]
        assert call.params == {"ref": "feature"}

    def test_get_server_error_raises(self, org: FakeGitHub) -> None:
        org.configure_response("GET", f"{REPO}/contents/package.json", 500, {"message": "boom"})

        with pytest.raises(UnexpectedResponseError):
            run(org, lambda client: client.contents.get(REPO, "package.json"))

    def test_get_file_over_size_limit_raises(self, org: FakeGitHub) -> None:
        """Files over 1 MB come back with ``encoding: none`` and no content."""
        org.configure_response(
            "GET",
            f"{REPO}/contents/npm-shrinkwrap.json",
            200,
            {
                "path": "npm-shrinkwrap.json",
                "sha": "b" * 40,
                "size": 2_500_000,
                "encoding": "none",
                "content": "",
            },
        )

        with pytest.raises(FileTooLargeError) as exc_info:
            run(org, lambda client: client.contents.get(REPO, "npm-shrinkwrap.json"))

        assert exc_info.value.size == 2_500_000
        assert "too large" in exc_info.value.message

    def test_update_commits_and_refreshes_revision_token(self, org: FakeGitHub) -> None:
        async def action(client):
            file = await client.contents.get(REPO, "package.json")
            old_sha = file.sha
            update_manifest(file, "my-lib", "2.0.0")
            commit = await client.contents.update(REPO, file, "Bump my-lib", branch="main")
            return old_sha, file, commit

        old_sha, file, commit = run(org, action)

        assert commit
        assert file.sha != old_sha
        assert org.document("app", "package.json")["dependencies"]["my-lib"] == github_constraint("2.0.0")
        put = org.get_calls("PUT", f"{REPO}/contents/package.json")[0]
        assert put.body["sha"] == old_sha
        assert put.body["branch"] == "main"
        assert put.body["message"] == "Bump my-lib"

    def test_update_with_stale_token_raises(self, org: FakeGitHub) -> None:
        async def action(client):
            file = await client.contents.get(REPO, "package.json")
            file.sha = "stale"
            await client.contents.update(REPO, file, "Bump", branch="main")

        with pytest.raises(UnexpectedResponseError) as exc_info:
            run(org, action)

        assert exc_info.value.status_code == 409


class TestRefsClient:
    """Tests for RefsClient."""

    def test_list_includes_branches_and_tags(self, org: FakeGitHub) -> None:
        refs = run(org, lambda client: client.refs.list(REPO))

        assert refs.branch("main") is not None
        assert refs.tag("v1.0.0").sha == "a" * 40
        assert refs.tag("v1.0.0").object_type == "tag"

    def test_get_branch(self, org: FakeGitHub) -> None:
        async def action(client):
            refs = await client.refs.list(REPO)
            return refs, await client.refs.get_branch(REPO, "main")

        refs, head = run(org, action)

        assert head == refs.branch("main")

    def test_create_branch(self, org: FakeGitHub) -> None:
        async def action(client):
            head = await client.refs.get_branch(REPO, "main")
            return await client.refs.create_branch(REPO, "updates", head.sha)

        created = run(org, action)

        assert created.ref == "refs/heads/updates"
        assert org.branch_exists("app", "updates")

    def test_create_existing_branch_raises(self, org: FakeGitHub) -> None:
        async def action(client):
            head = await client.refs.get_branch(REPO, "main")
            await client.refs.create_branch(REPO, "main", head.sha)

        with pytest.raises(UnexpectedResponseError) as exc_info:
            run(org, action)

        assert exc_info.value.status_code == 422


class TestPullsClient:
    """Tests for PullsClient."""

    def test_create(self, org: FakeGitHub) -> None:
        pull = run(
            org,
            lambda client: client.pulls.create(REPO, head="main", base="main", title="Bump"),
        )

        assert pull.number == 1
        assert pull.url == "https://github.com/test_org/app/pull/1"
        assert pull.already_exists is False

    def test_already_exists_is_not_an_error(self, org: FakeGitHub) -> None:
        async def action(client):
            await client.pulls.create(REPO, head="main", base="main", title="Bump")
            return await client.pulls.create(REPO, head="main", base="main", title="Bump")

        pull = run(org, action)

        assert pull.already_exists is True
        assert pull.number is None
        assert len(org.pull_requests("app")) == 1

    def test_other_validation_error_raises(self, org: FakeGitHub) -> None:
        org.configure_response(
            "POST", f"{REPO}/pulls", 422, {"message": "Validation Failed", "errors": [{"message": "No commits between main and main"}]}
        )

        with pytest.raises(UnexpectedResponseError):
            run(org, lambda client: client.pulls.create(REPO, head="main", base="main", title="Bump"))

    def test_network_failure_raises(self, org: FakeGitHub) -> None:
        import httpx

        org.configure_response("POST", f"{REPO}/pulls", error=httpx.ConnectError("refused"))

        with pytest.raises(RemoteTransportError):
            run(org, lambda client: client.pulls.create(REPO, head="main", base="main", title="Bump"))
