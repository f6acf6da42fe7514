import html

import structlog
from fastapi import APIRouter, BackgroundTasks, Depends
from fastapi.responses import HTMLResponse

from repohint.api.dependencies import get_checker
from repohint.api.rate_limit import recheck_cooldown
from repohint.checks.orchestrator import CheckOptions, PhaseOptions, PullRequestCheck

logger = structlog.get_logger(__name__)
router = APIRouter()

# Re-checks come from an edited title or description: criterion rules only,
# and the comment is posted again even if it was posted before.
RECHECK_OPTIONS = CheckOptions(criterion_rules=PhaseOptions(on=True, disable_comment_once=True))


async def run_recheck(checker: PullRequestCheck, pr: str) -> None:
    try:
        await checker.run(pr, options=RECHECK_OPTIONS)
    except Exception as e:
        # Runs after the response was sent; the failure is only reported in the log.
        logger.error("Re-check failed", pr_number=pr, error=str(e), exc_info=True)


@router.get("/pr/check", response_class=HTMLResponse, summary="Re-check a pull request title and description")
async def recheck_pull_request(
    background_tasks: BackgroundTasks,
    pr: str = Depends(recheck_cooldown),
    checker: PullRequestCheck = Depends(get_checker),
):
    """
    Target of the signed link posted on pull requests failing the criterion rules.

    The signature and cooldown dependencies reject the request before any
    rule runs; accepted requests are checked in the background.
    """
    background_tasks.add_task(run_recheck, checker, pr)
    logger.info("Re-check scheduled", pr_number=pr)

    pr_url = html.escape(f"https://github.com/{checker.client.repo}/pull/{pr}")
    return HTMLResponse(
        f"<p>Now start checking, please refer to <a target='_blank' href='{pr_url}'>{pr_url}</a></p>"
    )
