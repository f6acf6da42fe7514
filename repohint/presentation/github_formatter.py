"""Text posted to GitHub: status descriptions and batched comments."""

CODE_RULES_CONTEXT = "PR Check"
CRITERION_RULES_CONTEXT = "PRInfo Inspection"

CODE_RULES_DESCRIPTIONS = {
    True: "PR rules check passed",
    False: "PR rules check failed",
}

CRITERION_RULES_DESCRIPTIONS = {
    True: "Title and description follow the convention",
    False: "Title and description do not follow the convention",
}

COMMENT_SEPARATOR = "\n\n"


def status_state(passed: bool) -> str:
    return "success" if passed else "failure"


def format_recheck_line(recheck_url: str) -> str:
    """Final line of a failed criterion comment, inviting a re-check."""
    return f"Click [here]({recheck_url}) to re-check the PR title and description"


def join_comments(comments: list[str]) -> str:
    """Join rule comments into one body separated by blank lines."""
    return COMMENT_SEPARATOR.join(comment.strip("\n") for comment in comments)
