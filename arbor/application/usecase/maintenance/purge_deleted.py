"""Purge deleted comments use case."""

from pydantic import BaseModel

from arbor.domain.service import CommentService


class PurgeDeletedRequest(BaseModel):
    """Purge deleted comments request."""

    older_than_days: int


class PurgeDeletedResponse(BaseModel):
    """Purge deleted comments response."""

    purged: int
    older_than_days: int


class PurgeDeletedUseCase:
    """Use case for permanently removing old soft-deleted comments.

    Irreversible. Tombstones that still have replies are kept so every
    stored path stays complete.
    """

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize purge use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: PurgeDeletedRequest) -> PurgeDeletedResponse:
        """Execute purge.

        Raises:
            InvalidArgumentError: If ``older_than_days`` is below 1
        """
        purged = await self.comment_service.purge_old_deleted_comments(
            request.older_than_days
        )
        return PurgeDeletedResponse(
            purged=purged, older_than_days=request.older_than_days
        )
