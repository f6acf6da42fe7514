"""
GitHub configuration.
"""

from dataclasses import dataclass


@dataclass
class GitHubConfig:
    """GitHub configuration."""

    repo: str
    user_agent: str
    token: str
    api_base_url: str = "https://api.github.com"
    request_timeout: float = 10.0
