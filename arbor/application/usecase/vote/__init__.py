"""Vote use cases."""

from .batch_vote import (
    BatchVoteItem,
    BatchVoteRequest,
    BatchVoteResponse,
    BatchVoteUseCase,
)
from .cast_vote import CastVoteRequest, CastVoteResponse, CastVoteUseCase, VoteItem
from .get_votes import (
    GetCommentVotesRequest,
    GetCommentVotesResponse,
    GetCommentVotesUseCase,
    GetUserVoteRequest,
    GetUserVoteResponse,
    GetUserVoteUseCase,
)
from .remove_vote import RemoveVoteRequest, RemoveVoteResponse, RemoveVoteUseCase

__all__ = [
    "BatchVoteItem",
    "BatchVoteRequest",
    "BatchVoteResponse",
    "BatchVoteUseCase",
    "CastVoteRequest",
    "CastVoteResponse",
    "CastVoteUseCase",
    "GetCommentVotesRequest",
    "GetCommentVotesResponse",
    "GetCommentVotesUseCase",
    "GetUserVoteRequest",
    "GetUserVoteResponse",
    "GetUserVoteUseCase",
    "RemoveVoteRequest",
    "RemoveVoteResponse",
    "RemoveVoteUseCase",
    "VoteItem",
]
