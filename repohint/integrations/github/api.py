import asyncio
import json
from typing import Any

import aiohttp
import structlog

from repohint.core.config.github_config import GitHubConfig
from repohint.core.errors import (
    GitHubAPIError,
    GitHubResponseError,
    GitHubTransportError,
    InvalidStateError,
)

logger = structlog.get_logger(__name__)

PR_STATES = ("open", "closed")
REVIEW_EVENTS = ("APPROVE", "REQUEST_CHANGES", "COMMENT")
STATUS_STATES = ("error", "failure", "pending", "success")

JSON_MEDIA = "+json"
DIFF_MEDIA = ".diff"

FILES_PER_PAGE = 100
MAX_FILE_PAGES = 30  # GitHub lists at most 3000 files per pull request


class GitHubClient:
    """
    A client for the GitHub REST API scoped to a single repository.

    Authenticates with a personal access token. Every request is bounded by
    the configured timeout. Network failures and timeouts raise
    ``GitHubTransportError``; error status codes raise ``GitHubAPIError``.
    """

    def __init__(self, github_config: GitHubConfig):
        self._repo = github_config.repo
        self._user_agent = github_config.user_agent
        self._token = github_config.token
        self._base_url = github_config.api_base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=github_config.request_timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def repo(self) -> str:
        return self._repo

    def _headers(self, media: str = JSON_MEDIA) -> dict[str, str]:
        return {
            "Accept": f"application/vnd.github.v3{media}",
            "User-Agent": self._user_agent,
            "Authorization": f"token {self._token}",
        }

    async def _request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        media: str = JSON_MEDIA,
        params: dict[str, Any] | None = None,
        raw_status: bool = False,
    ) -> Any:
        """
        Send a request to ``/repos/<repo><path>``.

        With ``raw_status`` the status code is returned as-is and the body is
        ignored. Otherwise the decoded body is returned (parsed JSON for the
        JSON media type, text for the others).
        """
        url = f"{self._base_url}/repos/{self._repo}{path}"
        session = await self._get_session()
        try:
            async with session.request(
                method,
                url,
                headers=self._headers(media),
                json=body,
                params=params,
                timeout=self._timeout,
            ) as response:
                status = response.status
                logger.info(f"{method} {path} => {status}")
                if raw_status:
                    return status
                text = await response.text()
        except asyncio.TimeoutError as e:
            raise GitHubTransportError(method, path, "Request Timeout") from e
        except aiohttp.ClientError as e:
            raise GitHubTransportError(method, path, str(e) or type(e).__name__) from e

        if status >= 400:
            logger.error("GitHub API error", method=method, path=path, status=status, response_body=text)
            raise GitHubAPIError(method, path, status, text)

        if "json" not in media:
            return text
        if not text:
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise GitHubResponseError(f"JSON Parsing Failed for {method} {path}") from e

    async def _get_session(self) -> aiohttp.ClientSession:
        """Initializes and returns the aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def close(self) -> None:
        """Closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    # --- Pull request reads ---

    async def get_pr_info(self, number: str | int) -> dict[str, Any]:
        """Get the pull request document."""
        return await self._request("GET", f"/pulls/{number}")

    async def get_pr_files(self, number: str | int) -> list[dict[str, Any]]:
        """Get every file changed in a pull request, following pagination."""
        files: list[dict[str, Any]] = []
        for page in range(1, MAX_FILE_PAGES + 1):
            batch = await self._request(
                "GET", f"/pulls/{number}/files", params={"per_page": FILES_PER_PAGE, "page": page}
            )
            files.extend(batch or [])
            if not batch or len(batch) < FILES_PER_PAGE:
                break
        return files

    async def get_pr_diff(self, number: str | int) -> str:
        """Get the unified diff of a pull request."""
        return await self._request("GET", f"/pulls/{number}", media=DIFF_MEDIA)

    async def get_pr_reviews(self, number: str | int) -> list[dict[str, Any]]:
        return await self._request("GET", f"/pulls/{number}/reviews")

    async def get_pr_merge_status(self, number: str | int) -> bool:
        """GitHub answers 204 for merged pull requests and 404 otherwise."""
        status = await self._request("GET", f"/pulls/{number}/merge", raw_status=True)
        return status == 204

    async def get_pr_comments(self, number: str | int) -> list[dict[str, Any]]:
        return await self._request("GET", f"/issues/{number}/comments")

    async def get_head_sha(self, number: str | int) -> str:
        info = await self.get_pr_info(number)
        return info["head"]["sha"]

    async def get_pr_status(self, number: str | int) -> list[dict[str, Any]]:
        """Get the commit statuses of the pull request head."""
        sha = await self.get_head_sha(number)
        return await self._request("GET", f"/commits/{sha}/statuses")

    # --- Pull request writes ---

    async def add_comment_on_pr(
        self, number: str | int, content: str = "Please be careful with your pull request."
    ) -> dict[str, Any]:
        """Create a comment on a pull request."""
        return await self._request("POST", f"/issues/{number}/comments", body={"body": content})

    async def delete_comment(self, comment_id: str | int) -> None:
        await self._request("DELETE", f"/issues/comments/{comment_id}")

    async def create_pr_review(self, number: str | int, content: str, event: str = "COMMENT") -> dict[str, Any]:
        """Submit a review on a pull request."""
        if event not in REVIEW_EVENTS:
            raise InvalidStateError(f"Invalid review event {event!r}, expected one of {', '.join(REVIEW_EVENTS)}")
        return await self._request("POST", f"/pulls/{number}/reviews", body={"body": content, "event": event})

    async def update_pr_state(self, number: str | int, state: str) -> dict[str, Any]:
        """Open or close a pull request."""
        if state not in PR_STATES:
            raise InvalidStateError(f"Invalid state {state!r}, expected one of {', '.join(PR_STATES)}")
        return await self._request("PATCH", f"/pulls/{number}", body={"state": state})

    async def set_pr_status(
        self,
        number: str | int,
        state: str = "success",
        context: str = "default",
        target_url: str = "",
        description: str = "",
    ) -> dict[str, Any]:
        """Publish a commit status on the head of a pull request."""
        if state not in STATUS_STATES:
            raise InvalidStateError(f"Invalid status {state!r}, expected one of {', '.join(STATUS_STATES)}")
        sha = await self.get_head_sha(number)
        return await self._request(
            "POST",
            f"/statuses/{sha}",
            body={
                "state": state,
                "target_url": target_url,
                "description": description,
                "context": context,
            },
        )
