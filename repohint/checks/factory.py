from repohint.checks.orchestrator import PullRequestCheck
from repohint.core.config import Config
from repohint.integrations.github.api import GitHubClient
from repohint.rules.loader import load_rule_set


def create_pr_check(config: Config) -> PullRequestCheck:
    """Wire the configured rule set and a GitHub client into a PullRequestCheck."""
    rule_set = load_rule_set(config.rules, search_path=config.config_dir)
    return PullRequestCheck(config, rule_set, GitHubClient(config.github))
