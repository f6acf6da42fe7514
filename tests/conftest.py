"""
Shared fixtures: a configuration rooted in a temporary directory and a
GitHub client double whose coroutines return canned pull request data.
"""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

ROOT = Path(__file__).resolve().parent.parent

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from repohint.core.config import Config  # noqa: E402

PR_INFO = {
    "number": 42,
    "title": "[core] Add retry to the uploader",
    "state": "open",
    "body": "Retries failed uploads three times.",
    "user": {"login": "alice"},
    "assignee": {"login": "bob"},
    "assignees": [{"login": "bob"}],
    "requested_reviewers": [{"login": "carol"}],
    "additions": 12,
    "deletions": 3,
    "head": {"sha": "abc123"},
    "base": {"ref": "main"},
    "_links": {},
}

PR_FILES = [{"filename": "src/uploader.py"}, {"filename": "tests/test_uploader.py"}]


def make_values(**overrides):
    values = {
        "REPO": "octo/repo",
        "USER_AGENT": "repo",
        "TOKEN": "t0ken",
        "SECRET_KEY": "s3cret",
        "HOST": "hint.example.com",
        "PROTOCOL": "https",
        "PORT": "8443",
        "SERVER_PORT": 8100,
    }
    values.update(overrides)
    return values


@pytest.fixture
def config(tmp_path):
    return Config(make_values(), tmp_path)


@pytest.fixture
def github_client():
    client = MagicMock()
    client.repo = "octo/repo"
    client.get_pr_info = AsyncMock(return_value=dict(PR_INFO))
    client.get_pr_files = AsyncMock(return_value=list(PR_FILES))
    client.get_pr_diff = AsyncMock(return_value="")
    client.get_pr_reviews = AsyncMock(return_value=[])
    client.get_pr_merge_status = AsyncMock(return_value=False)
    client.add_comment_on_pr = AsyncMock(return_value={"id": 1})
    client.set_pr_status = AsyncMock(return_value={"state": "success"})
    client.close = AsyncMock()
    return client


@pytest.fixture(name="make_values")
def make_values_fixture():
    return make_values
