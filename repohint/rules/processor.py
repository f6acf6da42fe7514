"""
Rule lifecycle.

Evaluating a rule is more than calling its handler: the outcome is
normalized and, for rules that comment once, checked against the durable
markers so the same comment is not posted twice.
"""

import inspect
from typing import Any

import structlog

from repohint.rules.markers import SuppressionMarkerStore
from repohint.rules.models import RuleDescriptor, RuleOutcome

logger = structlog.get_logger(__name__)


async def call_handler(handler: Any, *args: Any) -> Any:
    """Call a sync or async plugin function."""
    result = handler(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


class RuleProcessor:
    """Runs one rule against one pull request context."""

    def __init__(self, context: Any, rule: RuleDescriptor, marker_store: SuppressionMarkerStore):
        self.context = context
        self.rule = rule
        self.marker_store = marker_store

    async def run(self, disable_comment_once: bool = False) -> RuleOutcome:
        """
        Evaluate the rule.

        With ``disable_comment_once`` the markers are neither read nor written.
        A suppressed outcome keeps its verdict; only the comment is cleared.
        """
        result = await call_handler(self.rule.handler, self.context)
        outcome = result if isinstance(result, RuleOutcome) else RuleOutcome.model_validate(result or {})

        if self.rule.comment_once and outcome.comments and not disable_comment_once:
            checked = self.marker_store.check_and_record(self.rule.name, self.context.number, outcome.labels)
            if checked:
                logger.info("Suppressing repeated comment", rule=self.rule.name, pr_number=self.context.number)
                outcome = outcome.model_copy(update={"comments": ""})

        logger.debug(
            "Rule evaluated",
            rule=self.rule.name,
            pr_number=self.context.number,
            passed=outcome.passed,
            commented=bool(outcome.comments),
        )
        return outcome
