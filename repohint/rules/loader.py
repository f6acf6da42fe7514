"""
Rule set loader.

Builds the explicit list of pre-processors and rules from the import paths
named in the configuration. An entry is either ``"package.module"``, which
uses the module's ``RULES`` (or ``PREPROCESSORS``) list, or
``"package.module:attribute"`` naming a descriptor, function or list.
"""

import importlib
import sys
from pathlib import Path
from typing import Any

import structlog

from repohint.core.config.rules_config import RulesConfig
from repohint.core.errors import ConfigurationError, RuleDefinitionError
from repohint.rules.models import Preprocessor, RuleDescriptor, RuleSet

logger = structlog.get_logger(__name__)

RULES_ATTRIBUTE = "RULES"
PREPROCESSORS_ATTRIBUTE = "PREPROCESSORS"


def _import_target(path: str, default_attribute: str) -> Any:
    module_name, _, attribute = path.partition(":")
    try:
        module = importlib.import_module(module_name)
    except (ImportError, SyntaxError, RuleDefinitionError) as e:
        raise ConfigurationError(f"Unable to import rule module {module_name}: {e}") from e

    name = attribute or default_attribute
    try:
        return getattr(module, name)
    except AttributeError as e:
        raise ConfigurationError(f"{module_name} has no attribute {name}") from e


def _as_list(target: Any) -> list[Any]:
    if isinstance(target, (list, tuple)):
        return list(target)
    return [target]


def load_rules(paths: list[str]) -> list[RuleDescriptor]:
    rules: list[RuleDescriptor] = []
    for path in paths:
        for item in _as_list(_import_target(path, RULES_ATTRIBUTE)):
            if not isinstance(item, RuleDescriptor):
                raise ConfigurationError(f"{path} provides {item!r}, which is not a RuleDescriptor")
            rules.append(item)
    return rules


def load_preprocessors(paths: list[str]) -> list[Preprocessor]:
    preprocessors: list[Preprocessor] = []
    for path in paths:
        for item in _as_list(_import_target(path, PREPROCESSORS_ATTRIBUTE)):
            if not callable(item):
                raise ConfigurationError(f"{path} provides {item!r}, which is not callable")
            preprocessors.append(item)
    return preprocessors


def load_rule_set(rules_config: RulesConfig, search_path: str | Path | None = None) -> RuleSet:
    """
    Import every configured rule module.

    ``search_path`` (usually the configuration directory) is made importable
    so repositories can keep their own rule packages next to ``config.json``.
    """
    if search_path is not None and str(search_path) not in sys.path:
        sys.path.insert(0, str(search_path))

    rule_set = RuleSet(
        preprocessors=load_preprocessors(rules_config.preprocessors),
        code_rules=load_rules(rules_config.code_rules),
        criterion_rules=load_rules(rules_config.criterion_rules),
    )
    logger.info(
        "Loaded rule set",
        preprocessors=len(rule_set.preprocessors),
        code_rules=len(rule_set.code_rules),
        criterion_rules=len(rule_set.criterion_rules),
    )
    return rule_set
