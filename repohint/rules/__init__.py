from repohint.rules.loader import load_rule_set
from repohint.rules.markers import SuppressionMarkerStore
from repohint.rules.models import RuleDescriptor, RuleOutcome, RuleSet, rule
from repohint.rules.processor import RuleProcessor

__all__ = [
    "RuleDescriptor",
    "RuleOutcome",
    "RuleProcessor",
    "RuleSet",
    "SuppressionMarkerStore",
    "load_rule_set",
    "rule",
]
