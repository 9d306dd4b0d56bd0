"""Maintenance use cases."""

from .purge_deleted import (
    PurgeDeletedRequest,
    PurgeDeletedResponse,
    PurgeDeletedUseCase,
)
from .recalculate_scores import (
    RecalculateScoresRequest,
    RecalculateScoresResponse,
    RecalculateScoresUseCase,
)

__all__ = [
    "PurgeDeletedRequest",
    "PurgeDeletedResponse",
    "PurgeDeletedUseCase",
    "RecalculateScoresRequest",
    "RecalculateScoresResponse",
    "RecalculateScoresUseCase",
]
