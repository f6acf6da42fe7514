"""
Local workspace configuration.
"""

from dataclasses import dataclass


@dataclass
class WorkspaceConfig:
    """Where the CI checkout lives and where suppression markers are written."""

    temp_dir: str
    code_dir: str | None = None
    base_branch: str | None = None

    @property
    def has_local_checkout(self) -> bool:
        return bool(self.code_dir and self.base_branch)
