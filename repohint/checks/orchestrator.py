"""
Pull request check orchestration.

A check runs the pre-processors once, then two independent passes over the
same PullRequestContext:

- code rules: every comment is posted on its own as soon as the rule returns;
- criterion rules: comments are batched into one, and a failed pass gets a
  signed link that re-runs the criterion rules after the PR is edited.

Each pass ends with one commit status summarizing its verdict.
"""

from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field

from repohint.core.config import Config
from repohint.core.errors import PreprocessorError
from repohint.core.utils.logging import log_operation
from repohint.core.utils.signing import build_recheck_url, sign_pr_number
from repohint.integrations.github.api import GitHubClient
from repohint.presentation import github_formatter
from repohint.pull_request.context import PullRequestContext
from repohint.rules.markers import SuppressionMarkerStore
from repohint.rules.models import RuleDescriptor, RuleOutcome, RuleSet
from repohint.rules.processor import RuleProcessor, call_handler

logger = structlog.get_logger(__name__)


class PhaseOptions(BaseModel):
    """Whether a pass runs, and whether it bypasses comment suppression."""

    model_config = ConfigDict(populate_by_name=True)

    on: bool = False
    disable_comment_once: bool = Field(default=False, alias="disableCommentOnce")


class CheckOptions(BaseModel):
    """Pass selection supplied by a trigger. Passes left out do not run."""

    model_config = ConfigDict(populate_by_name=True)

    code_rules: PhaseOptions = Field(default_factory=PhaseOptions, alias="codeRules")
    criterion_rules: PhaseOptions = Field(default_factory=PhaseOptions, alias="criterionRules")


class PhaseResult(BaseModel):
    """Aggregated outcome of one pass."""

    passed: bool = True
    comments: list[str] = Field(default_factory=list)
    target_url: str = ""


class CheckReport(BaseModel):
    pr_number: str
    code_rules: PhaseResult | None = None
    criterion_rules: PhaseResult | None = None

    @property
    def passed(self) -> bool:
        return all(phase.passed for phase in (self.code_rules, self.criterion_rules) if phase is not None)


ALL_PHASES = CheckOptions(code_rules=PhaseOptions(on=True), criterion_rules=PhaseOptions(on=True))


class PullRequestCheck:
    """Evaluates the configured rule set against pull requests and reports to GitHub."""

    def __init__(
        self,
        config: Config,
        rule_set: RuleSet,
        client: GitHubClient,
        marker_store: SuppressionMarkerStore | None = None,
    ):
        self.config = config
        self.rule_set = rule_set
        self.client = client
        self.marker_store = marker_store or SuppressionMarkerStore(config.workspace.temp_dir)

    def create_context(self, number: str | int, initial_data: dict[str, Any] | None = None) -> PullRequestContext:
        return PullRequestContext(number, self.client, self.config.workspace, initial_data)

    async def run(
        self,
        number: str | int,
        initial_data: dict[str, Any] | None = None,
        options: CheckOptions | None = None,
    ) -> CheckReport:
        """
        Check one pull request.

        Args:
            number: Pull request number
            initial_data: Fields already known by the trigger (author, title, description, files)
            options: Pass selection; both passes run when omitted
        """
        options = options or ALL_PHASES
        context = self.create_context(number, initial_data)
        report = CheckReport(pr_number=context.number)

        async with log_operation("pr_check", pr_number=context.number, repo=self.client.repo):
            if options.code_rules.on or options.criterion_rules.on:
                await self.run_preprocessors(context)

            if options.code_rules.on:
                report.code_rules = await self.process_code_rules(context, options.code_rules.disable_comment_once)

            if options.criterion_rules.on:
                report.criterion_rules = await self.process_criterion_rules(
                    context, options.criterion_rules.disable_comment_once
                )

        return report

    async def run_preprocessors(self, context: PullRequestContext) -> None:
        for preprocessor in self.rule_set.preprocessors:
            name = getattr(preprocessor, "__name__", repr(preprocessor))
            try:
                await call_handler(preprocessor, context)
            except Exception as e:
                raise PreprocessorError(name, e) from e

    async def _evaluate(
        self, context: PullRequestContext, rule: RuleDescriptor, disable_comment_once: bool
    ) -> RuleOutcome:
        async with log_operation("rule", rule=rule.name or "<unnamed>", pr_number=context.number):
            return await RuleProcessor(context, rule, self.marker_store).run(disable_comment_once)

    async def process_code_rules(self, context: PullRequestContext, disable_comment_once: bool = False) -> PhaseResult:
        result = PhaseResult()

        for rule in self.rule_set.code_rules:
            outcome = await self._evaluate(context, rule, disable_comment_once)
            if not outcome.passed:
                result.passed = False

            if outcome.comments and outcome.comments not in result.comments:
                result.comments.append(outcome.comments)
                await self.client.add_comment_on_pr(context.number, outcome.comments)

        await self.client.set_pr_status(
            context.number,
            github_formatter.status_state(result.passed),
            github_formatter.CODE_RULES_CONTEXT,
            "",
            github_formatter.CODE_RULES_DESCRIPTIONS[result.passed],
        )
        return result

    async def process_criterion_rules(
        self, context: PullRequestContext, disable_comment_once: bool = False
    ) -> PhaseResult:
        result = PhaseResult()

        for rule in self.rule_set.criterion_rules:
            outcome = await self._evaluate(context, rule, disable_comment_once)
            if not outcome.passed:
                result.passed = False

            if outcome.comments and outcome.comments not in result.comments:
                result.comments.append(outcome.comments)

        if not result.passed and result.comments:
            result.target_url = self.recheck_url(context.number)
            if result.target_url:
                result.comments.append(github_formatter.format_recheck_line(result.target_url))
            logger.info(f"#{context.number} failed passing PRInfo Inspection")

        if result.comments:
            await self.client.add_comment_on_pr(context.number, github_formatter.join_comments(result.comments))

        await self.client.set_pr_status(
            context.number,
            github_formatter.status_state(result.passed),
            github_formatter.CRITERION_RULES_CONTEXT,
            result.target_url,
            github_formatter.CRITERION_RULES_DESCRIPTIONS[result.passed],
        )
        return result

    def recheck_url(self, number: str | int) -> str:
        """Signed link to the re-check endpoint; empty when no secret is configured."""
        secret_key = self.config.server.secret_key
        if not secret_key:
            logger.warning("SECRET_KEY is not configured, failed checks get no re-check link", pr_number=str(number))
            return ""
        token = sign_pr_number(secret_key, number)
        return build_recheck_url(self.config.server.public_base_url, number, token)
