"""Domain model entities for arbor."""

from arbor.domain.model.comment import (
    Comment,
    CommentFilter,
    CommentStats,
    CommentUpdate,
)
from arbor.domain.model.tree import CommentTreeNode, build_comment_forest
from arbor.domain.model.vote import BatchVote, Vote

__all__ = [
    "BatchVote",
    "Comment",
    "CommentFilter",
    "CommentStats",
    "CommentTreeNode",
    "CommentUpdate",
    "Vote",
    "build_comment_forest",
]
