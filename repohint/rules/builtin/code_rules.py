"""Advisory code rules: PHP changes and oversized pull requests."""

from repohint.core.models import PRField
from repohint.rules.models import RuleOutcome, rule

MAX_CHANGED_LINES = 500
MAX_CHANGED_FILES = 10

PHP_NOTICE = "This PR modifies PHP source files!\n"
SIZE_NOTICE = "This PR is too large, please split it into several smaller PRs to ease code review.\n"


@rule("sample")
async def check_php_and_size(pr) -> RuleOutcome:
    files = await pr.get(PRField.FILES)
    additions = await pr.get(PRField.ADDITIONS)
    deletions = await pr.get(PRField.DELETIONS)
    changed_files = await pr.get(PRField.CHANGED_FILES)

    comments = ""
    if any(file_name.endswith(".php") for file_name in files):
        comments += PHP_NOTICE

    if (additions + deletions) > MAX_CHANGED_LINES or changed_files > MAX_CHANGED_FILES:
        comments += SIZE_NOTICE

    # Notices only, the PR is never blocked.
    return RuleOutcome(comments=comments, passed=True)


RULES = [check_php_and_size]
