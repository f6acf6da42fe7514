"""
End-to-end checks: the default rule set and the real marker files, with only
the GitHub API replaced by a double.
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from repohint.checks import PullRequestCheck
from repohint.core.utils.signing import sign_pr_number
from repohint.main import create_app
from repohint.rules.builtin.code_rules import PHP_NOTICE, SIZE_NOTICE
from repohint.rules.builtin.criterion_rules import TITLE_COMMENT
from repohint.rules.loader import load_rule_set

CRITERION_STATUS_FAILED = "Title and description do not follow the convention"


@pytest.fixture
def checker(config, github_client):
    return PullRequestCheck(config, load_rule_set(config.rules), github_client)


def criterion_status(github_client):
    return [c for c in github_client.set_pr_status.await_args_list if c.args[2] == "PRInfo Inspection"]


@pytest.mark.asyncio
async def test_unconventional_title_is_reported_once(checker, config, github_client):
    github_client.get_pr_info.return_value = {"title": "Fix bug", "user": {"login": "alice"}, "additions": 3}
    marker_file = config.workspace.temp_dir + "/tmp/info-check-checked"

    first = await checker.run(42)

    assert first.criterion_rules.passed is False
    comments = [c.args[1] for c in github_client.add_comment_on_pr.await_args_list]
    assert len(comments) == 1
    assert comments[0].startswith(TITLE_COMMENT.strip("\n"))
    assert "/api/pr/check?pr=42&token=" in comments[0]
    assert open(marker_file, encoding="utf-8").read().splitlines() == ["42"]
    assert criterion_status(github_client)[0].args[1] == "failure"

    github_client.add_comment_on_pr.reset_mock()
    github_client.set_pr_status.reset_mock()

    second = await checker.run(42)

    assert second.criterion_rules.passed is False
    assert second.criterion_rules.comments == []
    github_client.add_comment_on_pr.assert_not_awaited()
    (status,) = criterion_status(github_client)
    assert status.args[1] == "failure"
    assert status.args[4] == CRITERION_STATUS_FAILED


@pytest.mark.asyncio
async def test_large_php_change_gets_both_notices(config, github_client):
    config.rules.code_rules = ["repohint.rules.builtin.code_rules"]
    checker = PullRequestCheck(config, load_rule_set(config.rules), github_client)
    github_client.get_pr_info.return_value = {
        "title": "[web] Rework checkout",
        "user": {"login": "alice"},
        "additions": 600,
        "deletions": 0,
    }
    github_client.get_pr_files.return_value = [{"filename": "a.php"}, {"filename": "b.txt"}]

    report = await checker.run(7)

    assert report.code_rules.passed is True
    assert report.code_rules.comments == [PHP_NOTICE + SIZE_NOTICE]
    github_client.add_comment_on_pr.assert_awaited_once_with("7", PHP_NOTICE + SIZE_NOTICE)
    code_status = [c for c in github_client.set_pr_status.await_args_list if c.args[2] == "PR Check"]
    assert code_status[0].args[1] == "success"
    assert report.criterion_rules.passed is True


def test_tampered_recheck_link_runs_no_rule(config, github_client):
    rule_set = MagicMock()
    checker = PullRequestCheck(config, rule_set, github_client)
    client = TestClient(create_app(config, checker=checker))
    token = sign_pr_number(config.server.secret_key, 42)
    tampered = ("1" if token[0] == "0" else "0") + token[1:]

    response = client.get("/api/pr/check", params={"pr": "42", "token": tampered})

    assert response.status_code == 403
    assert response.json()["detail"] == "Forbidden Access"
    github_client.get_pr_info.assert_not_called()
    github_client.set_pr_status.assert_not_called()
    assert not rule_set.mock_calls
