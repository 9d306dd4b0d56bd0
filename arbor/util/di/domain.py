"""Domain layer DI providers."""

from dishka import Scope, provide

from arbor.config import CommentSettings
from arbor.domain.repository import CommentRepository
from arbor.domain.service import CommentService, ScoreService
from arbor.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository, settings: CommentSettings
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository, settings=settings)

    @provide
    def get_score_service(self, comment_repository: CommentRepository) -> ScoreService:
        """Provide score domain service."""
        return ScoreService(comment_repository=comment_repository)
