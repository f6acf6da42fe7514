"""Diff of the local CI checkout against its base branch."""

import asyncio

import structlog

from repohint.core.errors import GitCommandError

logger = structlog.get_logger(__name__)


async def git_diff(code_dir: str, base_branch: str) -> str:
    """Return the output of ``git diff <base_branch>`` run inside ``code_dir``."""
    command = ["git", "diff", base_branch]
    process = await asyncio.create_subprocess_exec(
        *command,
        cwd=code_dir,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdout, stderr = await process.communicate()
    if process.returncode != 0:
        raise GitCommandError(command, process.returncode, stderr.decode("utf-8", errors="replace"))

    logger.debug("Collected local diff", code_dir=code_dir, base_branch=base_branch, size=len(stdout))
    return stdout.decode("utf-8", errors="replace")
