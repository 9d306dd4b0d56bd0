"""Domain value objects for arbor.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and small pieces of business logic.
"""

from datetime import timedelta
from enum import Enum, IntEnum

from pydantic import computed_field, field_validator

from arbor.domain.value.common import RootValueObject, ValueObject


class VoteType(IntEnum):
    """Direction of a vote.

    There is no neutral value: removing a vote deletes it.
    """

    UP = 1
    DOWN = -1


class CommentState(str, Enum):
    """Lifecycle state of a comment node.

    A deleted node keeps its row and its place in descendants' paths.
    """

    ACTIVE = "active"
    DELETED = "deleted"


class SortField(str, Enum):
    """Columns a comment listing can be ordered by."""

    SCORE = "score"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    CONTENT_UPDATED_AT = "content_updated_at"
    EDIT_COUNT = "edit_count"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class TimeRange(str, Enum):
    """Creation-time window for top comment queries."""

    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    ALL = "all"

    @property
    def window(self) -> timedelta | None:
        """Length of the window, or None for all time."""
        return {
            TimeRange.HOUR: timedelta(hours=1),
            TimeRange.DAY: timedelta(days=1),
            TimeRange.WEEK: timedelta(weeks=1),
            TimeRange.MONTH: timedelta(days=30),
            TimeRange.ALL: None,
        }[self]


class VoteTally(ValueObject):
    """Vote counts for one comment."""

    upvotes: int = 0
    downvotes: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def score(self) -> int:
        return self.upvotes - self.downvotes


class SearchQuery(RootValueObject[str]):
    """Case-insensitive substring query over comment content.

    Surrounding whitespace is stripped and the result must not be empty. The
    minimum length is a configured limit checked by the comment service.
    """

    @field_validator("root")
    @classmethod
    def validate_query(cls, v: str) -> str:
        """Strip surrounding whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("Search query cannot be empty")
        return v

    def matches(self, text: str) -> bool:
        """Return True if the query occurs in ``text`` ignoring case."""
        return self.root.casefold() in text.casefold()
