from repohint.pull_request.context import PullRequestContext

__all__ = ["PullRequestContext"]
