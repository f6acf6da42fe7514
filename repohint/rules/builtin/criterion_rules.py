"""Criterion rules on the pull request title and description."""

import re

from repohint.core.models import PRField
from repohint.rules.models import RuleOutcome, rule

# "[team] what changed" or "【team】what changed"
TITLE_PATTERN = re.compile(r"(【|\[)\s*[^\s]+.*\s*(】|\])(\s*)[^\s]+.*")

TITLE_COMMENT = (
    "**The title of this PR does not follow the convention!** \n"
    " Start the title with [team] or [business] and finish with what the PR changes \n\n"
)


@rule("info-check", comment_once=True)
async def check_title(pr) -> RuleOutcome:
    title = await pr.get(PRField.TITLE) or ""
    if TITLE_PATTERN.search(title):
        return RuleOutcome(comments="", passed=True)
    return RuleOutcome(comments=TITLE_COMMENT, passed=False)


RULES = [check_title]
