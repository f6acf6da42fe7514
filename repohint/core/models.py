from enum import Enum

from pydantic import BaseModel, Field


class PRField(str, Enum):
    """Pull request fields that can be fetched lazily."""

    TITLE = "title"
    STATE = "state"
    DESCRIPTION = "description"
    AUTHOR = "author"
    ASSIGNEE = "assignee"
    ASSIGNEES = "assignees"
    REQUESTED_REVIEWERS = "requestedReviewers"
    DELETIONS = "deletions"
    ADDITIONS = "additions"
    FILES = "files"
    DIFF = "diff"
    REVIEWS = "reviews"
    IS_MERGED = "isMerged"
    CHANGED_FILES = "changedFiles"


# Fields populated together by a single pull request info request.
BASIC_INFO_FIELDS: frozenset[PRField] = frozenset(
    {
        PRField.TITLE,
        PRField.STATE,
        PRField.DESCRIPTION,
        PRField.AUTHOR,
        PRField.ASSIGNEE,
        PRField.ASSIGNEES,
        PRField.REQUESTED_REVIEWERS,
        PRField.DELETIONS,
        PRField.ADDITIONS,
    }
)


class Review(BaseModel):
    """A review left on a pull request."""

    state: str
    reviewer: str


class ChangeType(str, Enum):
    ADD = "add"
    DELETE = "del"
    NORMAL = "normal"


class DiffChange(BaseModel):
    """A single line change inside a file diff."""

    type: ChangeType
    content: str
    old_line: int | None = None
    new_line: int | None = None

    @property
    def is_change(self) -> bool:
        return self.type != ChangeType.NORMAL


class DiffFile(BaseModel):
    """All line changes of one file, chunk boundaries removed."""

    file_name: str
    changes: list[DiffChange] = Field(default_factory=list)

    @property
    def additions(self) -> int:
        return sum(1 for change in self.changes if change.type == ChangeType.ADD)

    @property
    def deletions(self) -> int:
        return sum(1 for change in self.changes if change.type == ChangeType.DELETE)
