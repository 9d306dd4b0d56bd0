"""Application layer DI providers."""

from dishka import Scope, provide

from arbor.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentChildrenUseCase,
    GetCommentPathUseCase,
    GetCommentTreeUseCase,
    GetCommentUseCase,
    ListCommentsWithVotesUseCase,
    ListRootCommentsUseCase,
    ListUserCommentsUseCase,
    SearchCommentsUseCase,
    UpdateCommentUseCase,
)
from arbor.application.usecase.maintenance import (
    PurgeDeletedUseCase,
    RecalculateScoresUseCase,
)
from arbor.application.usecase.stats import (
    GetStatsUseCase,
    GetTopCommentsUseCase,
    GetUserCommentCountUseCase,
)
from arbor.application.usecase.vote import (
    BatchVoteUseCase,
    CastVoteUseCase,
    GetCommentVotesUseCase,
    GetUserVoteUseCase,
    RemoveVoteUseCase,
)
from arbor.domain.service import CommentService, ScoreService
from arbor.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed.

    Use cases are REQUEST-scoped so they share the request's services and session.
    """

    scope = Scope.REQUEST

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_comment_use_case(
        self, comment_service: CommentService
    ) -> GetCommentUseCase:
        """Provide get comment use case."""
        return GetCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self, comment_service: CommentService
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_list_root_comments_use_case(
        self, comment_service: CommentService
    ) -> ListRootCommentsUseCase:
        """Provide list root comments use case."""
        return ListRootCommentsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_list_user_comments_use_case(
        self, comment_service: CommentService
    ) -> ListUserCommentsUseCase:
        """Provide list user comments use case."""
        return ListUserCommentsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_list_comments_with_votes_use_case(
        self, comment_service: CommentService
    ) -> ListCommentsWithVotesUseCase:
        """Provide list comments with user votes use case."""
        return ListCommentsWithVotesUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_comment_tree_use_case(
        self, comment_service: CommentService
    ) -> GetCommentTreeUseCase:
        """Provide comment tree use case."""
        return GetCommentTreeUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_comment_path_use_case(
        self, comment_service: CommentService
    ) -> GetCommentPathUseCase:
        """Provide comment path use case."""
        return GetCommentPathUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_comment_children_use_case(
        self, comment_service: CommentService
    ) -> GetCommentChildrenUseCase:
        """Provide comment children use case."""
        return GetCommentChildrenUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_search_comments_use_case(
        self, comment_service: CommentService
    ) -> SearchCommentsUseCase:
        """Provide search comments use case."""
        return SearchCommentsUseCase(comment_service=comment_service)

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(self, comment_service: CommentService) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_remove_vote_use_case(
        self, comment_service: CommentService
    ) -> RemoveVoteUseCase:
        """Provide remove vote use case."""
        return RemoveVoteUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_batch_vote_use_case(
        self, comment_service: CommentService
    ) -> BatchVoteUseCase:
        """Provide batch vote use case."""
        return BatchVoteUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_user_vote_use_case(
        self, comment_service: CommentService
    ) -> GetUserVoteUseCase:
        """Provide get user vote use case."""
        return GetUserVoteUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_comment_votes_use_case(
        self, comment_service: CommentService
    ) -> GetCommentVotesUseCase:
        """Provide get comment votes use case."""
        return GetCommentVotesUseCase(comment_service=comment_service)

    # Stats use cases
    @provide(scope=Scope.REQUEST)
    def get_stats_use_case(self, comment_service: CommentService) -> GetStatsUseCase:
        """Provide root statistics use case."""
        return GetStatsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_top_comments_use_case(
        self, comment_service: CommentService
    ) -> GetTopCommentsUseCase:
        """Provide top comments use case."""
        return GetTopCommentsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_user_comment_count_use_case(
        self, comment_service: CommentService
    ) -> GetUserCommentCountUseCase:
        """Provide user comment count use case."""
        return GetUserCommentCountUseCase(comment_service=comment_service)

    # Maintenance use cases
    @provide(scope=Scope.REQUEST)
    def get_purge_deleted_use_case(
        self, comment_service: CommentService
    ) -> PurgeDeletedUseCase:
        """Provide purge deleted comments use case."""
        return PurgeDeletedUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_recalculate_scores_use_case(
        self, score_service: ScoreService
    ) -> RecalculateScoresUseCase:
        """Provide recalculate scores use case."""
        return RecalculateScoresUseCase(score_service=score_service)
