import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from repohint.core.config.workspace_config import WorkspaceConfig
from repohint.core.errors import GitHubTransportError
from repohint.core.models import PRField, Review
from repohint.pull_request.context import PullRequestContext

SIMPLE_DIFF = """\
diff --git a/app.py b/app.py
--- a/app.py
+++ b/app.py
@@ -1,2 +1,2 @@
 import os
-print("old")
+print("new")
"""


@pytest.mark.asyncio
async def test_basic_info_fetched_once_for_the_whole_group(github_client):
    pr = PullRequestContext(42, github_client)

    assert await pr.get(PRField.TITLE) == "[core] Add retry to the uploader"
    assert await pr.get(PRField.AUTHOR) == "alice"
    assert await pr.get(PRField.ADDITIONS) == 12
    assert await pr.get(PRField.DELETIONS) == 3
    assert await pr.get(PRField.ASSIGNEES) == ["bob"]
    assert await pr.get(PRField.REQUESTED_REVIEWERS) == ["carol"]
    assert await pr.get(PRField.DESCRIPTION) == "Retries failed uploads three times."

    github_client.get_pr_info.assert_awaited_once_with("42")


@pytest.mark.asyncio
async def test_field_names_accepted_as_strings(github_client):
    pr = PullRequestContext("42", github_client)

    assert await pr.get("title") == await pr.get(PRField.TITLE)
    github_client.get_pr_info.assert_awaited_once()


@pytest.mark.asyncio
async def test_concurrent_gets_share_one_request(github_client):
    pr = PullRequestContext(42, github_client)

    titles = await asyncio.gather(*(pr.get(PRField.TITLE) for _ in range(5)))

    assert len(set(titles)) == 1
    github_client.get_pr_info.assert_awaited_once()


@pytest.mark.asyncio
async def test_falsy_values_are_cached(github_client):
    github_client.get_pr_info.return_value = {"title": "", "user": {"login": "alice"}, "additions": 0, "deletions": 0}
    pr = PullRequestContext(42, github_client)

    assert await pr.get(PRField.TITLE) == ""
    assert await pr.get(PRField.ADDITIONS) == 0
    assert await pr.get(PRField.TITLE) == ""
    assert pr.has(PRField.TITLE)
    github_client.get_pr_info.assert_awaited_once()


@pytest.mark.asyncio
async def test_failed_fetch_is_retried(github_client):
    github_client.get_pr_info.side_effect = [
        GitHubTransportError("GET", "/pulls/42", "Request Timeout"),
        {"title": "[core] second try", "user": {"login": "alice"}},
    ]
    pr = PullRequestContext(42, github_client)

    with pytest.raises(GitHubTransportError):
        await pr.get(PRField.TITLE)
    assert not pr.has(PRField.TITLE)

    assert await pr.get(PRField.TITLE) == "[core] second try"
    assert github_client.get_pr_info.await_count == 2


@pytest.mark.asyncio
async def test_initial_data_wins_over_fetched_values(github_client):
    pr = PullRequestContext(42, github_client, initial_data={"title": "[ci] from trigger", "author": None})

    assert await pr.get(PRField.TITLE) == "[ci] from trigger"
    github_client.get_pr_info.assert_not_awaited()

    # author was None, so it is unknown and fetched; title keeps the trigger value
    assert await pr.get(PRField.AUTHOR) == "alice"
    assert await pr.get(PRField.TITLE) == "[ci] from trigger"


@pytest.mark.asyncio
async def test_custom_keys(github_client):
    pr = PullRequestContext(42, github_client)
    pr.set("risk", 0)

    assert await pr.get("risk") == 0
    with pytest.raises(KeyError):
        await pr.get("never-set")


@pytest.mark.asyncio
async def test_files_and_changed_files(github_client):
    pr = PullRequestContext(42, github_client)

    assert await pr.get(PRField.FILES) == ["src/uploader.py", "tests/test_uploader.py"]
    assert await pr.get(PRField.CHANGED_FILES) == 2
    github_client.get_pr_files.assert_awaited_once()


@pytest.mark.asyncio
async def test_reviews_and_merge_status(github_client):
    github_client.get_pr_reviews.return_value = [{"state": "APPROVED", "user": {"login": "carol"}}]
    github_client.get_pr_merge_status.return_value = False
    pr = PullRequestContext(42, github_client)

    assert await pr.get(PRField.REVIEWS) == [Review(state="APPROVED", reviewer="carol")]
    assert await pr.get(PRField.IS_MERGED) is False
    assert await pr.get(PRField.IS_MERGED) is False
    github_client.get_pr_merge_status.assert_awaited_once()


@pytest.mark.asyncio
async def test_diff_from_github_without_local_checkout(github_client, tmp_path):
    github_client.get_pr_diff.return_value = SIMPLE_DIFF
    pr = PullRequestContext(42, github_client, WorkspaceConfig(temp_dir=str(tmp_path)))

    diff = await pr.get(PRField.DIFF)

    assert [f.file_name for f in diff] == ["app.py"]
    assert diff[0].additions == 1
    assert diff[0].deletions == 1
    github_client.get_pr_diff.assert_awaited_once_with("42")


@pytest.mark.asyncio
async def test_diff_from_local_checkout(github_client, tmp_path):
    workspace = WorkspaceConfig(temp_dir=str(tmp_path), code_dir=str(tmp_path), base_branch="origin/main")
    pr = PullRequestContext(42, github_client, workspace)

    with patch("repohint.pull_request.context.git_diff", AsyncMock(return_value=SIMPLE_DIFF)) as local_diff:
        diff = await pr.get(PRField.DIFF)

    local_diff.assert_awaited_once_with(str(tmp_path), "origin/main")
    github_client.get_pr_diff.assert_not_awaited()
    assert diff[0].file_name == "app.py"
