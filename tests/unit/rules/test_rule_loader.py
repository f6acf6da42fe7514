import pytest

from repohint.core.config.rules_config import RulesConfig
from repohint.core.errors import ConfigurationError
from repohint.rules.builtin.code_rules import check_php_and_size
from repohint.rules.builtin.criterion_rules import check_title
from repohint.rules.builtin.preprocessors import count_changed_files
from repohint.rules.loader import load_rule_set, load_rules

LOCAL_RULES = '''
from repohint.rules import RuleOutcome, rule


@rule("local")
def local_rule(pr):
    return RuleOutcome()


def helper(pr):
    return None


RULES = [local_rule]
'''


def test_default_rule_set():
    rule_set = load_rule_set(RulesConfig())

    assert rule_set.preprocessors == [count_changed_files]
    assert rule_set.code_rules == []
    assert rule_set.criterion_rules == [check_title]


def test_sample_code_rule_is_opt_in():
    rule_set = load_rule_set(RulesConfig(code_rules=["repohint.rules.builtin.code_rules"]))

    assert rule_set.code_rules == [check_php_and_size]


def test_rules_next_to_the_configuration(tmp_path):
    (tmp_path / "loader_local_rules.py").write_text(LOCAL_RULES, encoding="utf-8")

    rule_set = load_rule_set(
        RulesConfig(preprocessors=[], code_rules=["loader_local_rules"], criterion_rules=[]),
        search_path=tmp_path,
    )

    assert [r.name for r in rule_set.code_rules] == ["local"]


def test_attribute_paths():
    rules = load_rules(["repohint.rules.builtin.criterion_rules:check_title"])

    assert rules == [check_title]


def test_unknown_module():
    with pytest.raises(ConfigurationError, match="Unable to import rule module"):
        load_rules(["does_not_exist.rules"])


def test_missing_attribute():
    with pytest.raises(ConfigurationError, match="has no attribute"):
        load_rules(["repohint.rules.builtin.criterion_rules:nope"])


def test_plain_functions_are_not_rules(tmp_path):
    (tmp_path / "loader_plain_rules.py").write_text(LOCAL_RULES, encoding="utf-8")

    with pytest.raises(ConfigurationError, match="not a RuleDescriptor"):
        load_rule_set(
            RulesConfig(preprocessors=[], code_rules=["loader_plain_rules:helper"], criterion_rules=[]),
            search_path=tmp_path,
        )
