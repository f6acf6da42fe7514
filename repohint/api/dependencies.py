from cachetools import TTLCache
from fastapi import Request

from repohint.checks.orchestrator import PullRequestCheck
from repohint.core.config import Config


def get_config(request: Request) -> Config:
    """Returns the configuration the application was created with."""
    return request.app.state.config


def get_checker(request: Request) -> PullRequestCheck:
    """Returns the shared PullRequestCheck instance."""
    return request.app.state.checker


def get_recheck_history(request: Request) -> TTLCache:
    """Returns the cache of recently re-checked pull requests."""
    return request.app.state.recheck_history
