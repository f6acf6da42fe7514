from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from repohint.core.errors import RuleDefinitionError

# A rule handler receives the PullRequestContext and returns a RuleOutcome
# (or a mapping with the same keys), either directly or as an awaitable.
RuleHandler = Callable[[Any], Any]
Preprocessor = Callable[[Any], Any]


class RuleOutcome(BaseModel):
    """Result of evaluating one rule against a pull request."""

    comments: str = ""
    passed: bool = True
    labels: str | list[str] | None = None


@dataclass(frozen=True)
class RuleDescriptor:
    """A named, pluggable check.

    ``comment_once`` asks the engine to post the rule's comment at most once
    per pull request and label; it requires a ``name`` to key the markers.
    """

    name: str | None
    handler: RuleHandler
    comment_once: bool = False

    def __post_init__(self) -> None:
        if not callable(self.handler):
            raise RuleDefinitionError(f"Invalid handler for rule {self.name or '<unnamed>'}")
        if self.comment_once and not self.name:
            raise RuleDefinitionError("A rule that comments once needs a name to record its checked history")


@dataclass
class RuleSet:
    """The rules configured for a repository, in evaluation order."""

    preprocessors: list[Preprocessor] = field(default_factory=list)
    code_rules: list[RuleDescriptor] = field(default_factory=list)
    criterion_rules: list[RuleDescriptor] = field(default_factory=list)


def rule(name: str | None = None, comment_once: bool = False) -> Callable[[RuleHandler], RuleDescriptor]:
    """Decorator turning a handler function into a ``RuleDescriptor``.

    Example:
        @rule("info-check", comment_once=True)
        async def check_title(pr):
            ...
    """

    def decorator(handler: RuleHandler) -> RuleDescriptor:
        return RuleDescriptor(name=name, handler=handler, comment_once=comment_once)

    return decorator
