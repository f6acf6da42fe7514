from repohint.checks.factory import create_pr_check
from repohint.checks.orchestrator import (
    CheckOptions,
    CheckReport,
    PhaseOptions,
    PhaseResult,
    PullRequestCheck,
)

__all__ = [
    "CheckOptions",
    "CheckReport",
    "PhaseOptions",
    "PhaseResult",
    "PullRequestCheck",
    "create_pr_check",
]
