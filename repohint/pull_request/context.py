import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import structlog

from repohint.core.config.workspace_config import WorkspaceConfig
from repohint.core.models import BASIC_INFO_FIELDS, PRField, Review
from repohint.core.utils.diff import diff_files_from_text
from repohint.integrations.git import git_diff
from repohint.integrations.github.api import GitHubClient

logger = structlog.get_logger(__name__)

FieldKey = PRField | str


class PullRequestContext:
    """
    Lazy, memoizing view of one pull request.

    Fields are fetched from GitHub (or the local checkout for the diff) the
    first time they are requested and served from memory afterwards. Fields
    sharing one API response are populated together. Pre-processors may
    inject values with ``set``, including custom keys outside ``PRField``.

    A failed fetch leaves the field unpopulated, so the next ``get`` retries.
    """

    def __init__(
        self,
        number: str | int,
        client: GitHubClient,
        workspace: WorkspaceConfig | None = None,
        initial_data: dict[str, Any] | None = None,
    ):
        self.number = str(number)
        self._client = client
        self._workspace = workspace
        self._values: dict[FieldKey, Any] = {}
        self._locks: dict[str, asyncio.Lock] = {}

        # None means "unknown" for data handed over by the trigger.
        for key, value in (initial_data or {}).items():
            if value is not None:
                self.set(key, value)

    @staticmethod
    def _key(field: FieldKey) -> FieldKey:
        if isinstance(field, PRField):
            return field
        try:
            return PRField(field)
        except ValueError:
            return field

    def set(self, field: FieldKey, value: Any) -> None:
        """Store a value directly, without fetching."""
        self._values[self._key(field)] = value

    def has(self, field: FieldKey) -> bool:
        """Whether the field is already cached (falsy values included)."""
        return self._key(field) in self._values

    async def get(self, field: FieldKey) -> Any:
        """Return the field value, fetching and caching it on first access."""
        key = self._key(field)
        if key in self._values:
            return self._values[key]

        if not isinstance(key, PRField):
            raise KeyError(f"Field {key!r} was never set on PR #{self.number}")

        group, fetch = self._fetch_strategy(key)
        lock = self._locks.setdefault(group, asyncio.Lock())
        async with lock:
            if key not in self._values:
                logger.debug("Fetching pull request field", pr_number=self.number, field=key.value, group=group)
                await fetch()
        return self._values[key]

    def _fetch_strategy(self, key: PRField) -> tuple[str, Callable[[], Awaitable[None]]]:
        if key in BASIC_INFO_FIELDS:
            return "basic", self._fetch_basic_info
        strategies: dict[PRField, tuple[str, Callable[[], Awaitable[None]]]] = {
            PRField.FILES: ("files", self._fetch_files),
            PRField.CHANGED_FILES: ("changed_files", self._fetch_changed_files),
            PRField.DIFF: ("diff", self._fetch_diff),
            PRField.REVIEWS: ("reviews", self._fetch_reviews),
            PRField.IS_MERGED: ("merge", self._fetch_merge_status),
        }
        return strategies[key]

    def _populate(self, values: dict[PRField, Any]) -> None:
        # Values already known (initial data or injected) are kept.
        for key, value in values.items():
            self._values.setdefault(key, value)

    async def _fetch_basic_info(self) -> None:
        info = await self._client.get_pr_info(self.number)
        assignee = info.get("assignee")
        self._populate(
            {
                PRField.TITLE: info.get("title"),
                PRField.STATE: info.get("state"),
                PRField.DESCRIPTION: info.get("body"),
                PRField.AUTHOR: (info.get("user") or {}).get("login"),
                PRField.ASSIGNEE: assignee["login"] if assignee else None,
                PRField.ASSIGNEES: [user["login"] for user in info.get("assignees") or []],
                PRField.REQUESTED_REVIEWERS: [user["login"] for user in info.get("requested_reviewers") or []],
                PRField.DELETIONS: info.get("deletions", 0),
                PRField.ADDITIONS: info.get("additions", 0),
            }
        )

    async def _fetch_files(self) -> None:
        files = await self._client.get_pr_files(self.number)
        self.set(PRField.FILES, [file["filename"] for file in files])

    async def _fetch_changed_files(self) -> None:
        files = await self.get(PRField.FILES)
        self.set(PRField.CHANGED_FILES, len(files))

    async def _fetch_diff(self) -> None:
        if self._workspace and self._workspace.has_local_checkout:
            diff_text = await git_diff(self._workspace.code_dir, self._workspace.base_branch)
        else:
            diff_text = await self._client.get_pr_diff(self.number)
        self.set(PRField.DIFF, diff_files_from_text(diff_text))

    async def _fetch_reviews(self) -> None:
        reviews = await self._client.get_pr_reviews(self.number)
        self.set(
            PRField.REVIEWS,
            [Review(state=review["state"], reviewer=(review.get("user") or {}).get("login", "")) for review in reviews],
        )

    async def _fetch_merge_status(self) -> None:
        self.set(PRField.IS_MERGED, await self._client.get_pr_merge_status(self.number))
