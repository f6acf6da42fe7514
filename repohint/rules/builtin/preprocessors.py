"""Pre-processors injecting derived fields shared by several rules."""

from repohint.core.models import PRField


async def count_changed_files(pr) -> None:
    """Store the number of changed files as ``changedFiles``."""
    files = await pr.get(PRField.FILES)
    pr.set(PRField.CHANGED_FILES, len(files))


PREPROCESSORS = [count_changed_files]
