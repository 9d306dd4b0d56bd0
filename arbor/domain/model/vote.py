"""Vote entity.

A vote links one user to one comment with a direction of +1 or -1. There is
at most one vote per (comment, user); casting again overwrites the direction
and removing a vote deletes it.
"""

from datetime import datetime

from pydantic import Field

from arbor.domain.model.common import DomainModel, utc_now
from arbor.domain.value import CommentId, UserId, VoteId, VoteType


class Vote(DomainModel):
    """Vote entity."""

    id: VoteId
    comment_id: CommentId
    user_id: UserId
    vote_type: VoteType
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class BatchVote(DomainModel):
    """One entry of a batch vote request."""

    comment_id: CommentId
    user_id: UserId
    vote_type: VoteType
