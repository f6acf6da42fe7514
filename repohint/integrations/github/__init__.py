"""
GitHub API adapter.

This package provides integrations for GitHub API interactions.
"""

from repohint.integrations.github.api import GitHubClient

__all__ = [
    "GitHubClient",
]
