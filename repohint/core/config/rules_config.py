"""
Rule module configuration.
"""

from dataclasses import dataclass, field

DEFAULT_PREPROCESSORS = ["repohint.rules.builtin.preprocessors"]
# The PHP/size sample rule is opt-in: add "repohint.rules.builtin.code_rules" to CODE_RULES.
DEFAULT_CODE_RULES: list[str] = []
DEFAULT_CRITERION_RULES = ["repohint.rules.builtin.criterion_rules"]


@dataclass
class RulesConfig:
    """Import paths ("module" or "module:attribute") of the rule set."""

    preprocessors: list[str] = field(default_factory=lambda: list(DEFAULT_PREPROCESSORS))
    code_rules: list[str] = field(default_factory=lambda: list(DEFAULT_CODE_RULES))
    criterion_rules: list[str] = field(default_factory=lambda: list(DEFAULT_CRITERION_RULES))
