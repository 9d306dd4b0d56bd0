"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .score_service import ScoreService, tally_votes

__all__ = [
    "CommentService",
    "ScoreService",
    "Service",
    "tally_votes",
]
