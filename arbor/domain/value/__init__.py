"""Domain value objects for arbor."""

from arbor.domain.value.identifiers import (
    MAX_EXTERNAL_ID_LENGTH,
    CommentId,
    RootId,
    UserId,
    VoteId,
)
from arbor.domain.value.path import (
    PATH_DELIMITER,
    derive_child_path,
    descendant_pattern,
    is_descendant_prefix,
    split_path,
)
from arbor.domain.value.types import (
    CommentState,
    SearchQuery,
    SortField,
    SortOrder,
    TimeRange,
    VoteTally,
    VoteType,
)

__all__ = [
    # Identifiers
    "MAX_EXTERNAL_ID_LENGTH",
    "CommentId",
    "RootId",
    "UserId",
    "VoteId",
    # Paths
    "PATH_DELIMITER",
    "derive_child_path",
    "descendant_pattern",
    "is_descendant_prefix",
    "split_path",
    # Types
    "CommentState",
    "SearchQuery",
    "SortField",
    "SortOrder",
    "TimeRange",
    "VoteTally",
    "VoteType",
]
