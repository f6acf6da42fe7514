"""repohint: pull request review gating for GitHub repositories."""

__version__ = "0.2.0"
