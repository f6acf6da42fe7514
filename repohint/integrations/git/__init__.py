from repohint.integrations.git.local_diff import git_diff

__all__ = ["git_diff"]
