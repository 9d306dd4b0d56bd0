"""Comment repository interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import Optional

from arbor.domain.model import (
    Comment,
    CommentFilter,
    CommentStats,
    CommentTreeNode,
    CommentUpdate,
    Vote,
)
from arbor.domain.value import (
    CommentId,
    RootId,
    SortField,
    TimeRange,
    UserId,
    VoteTally,
    VoteType,
)


class CommentRepository(ABC):
    """Repository for comments and their votes.

    The only component that talks to the backing store. Implementations
    surface domain errors only, never driver exceptions.
    """

    # Reads

    @abstractmethod
    async def get_by_id(self, comment_id: CommentId) -> Comment:
        """Get a live comment by ID.

        Raises:
            NotFoundError: If the comment is absent or soft-deleted
        """
        pass

    @abstractmethod
    async def find_comments(self, comment_filter: CommentFilter) -> list[Comment]:
        """List live comments matching a filter, ordered and paginated.

        Comments whose sort value is missing come last; ties are broken by ID.
        """
        pass

    @abstractmethod
    async def find_children(
        self, parent_id: CommentId, max_depth: int
    ) -> list[Comment]:
        """Find live descendants of a comment.

        Returns descendants at most ``max_depth`` levels below the parent,
        ordered by path then creation time.

        Raises:
            NotFoundError: If the parent is absent or soft-deleted
        """
        pass

    @abstractmethod
    async def find_path(self, comment_id: CommentId) -> list[Comment]:
        """Find the ancestor chain of a comment, top-level ancestor first.

        The chain ends with the comment itself. Soft-deleted ancestors are
        included; the caller decides how to present them.

        Raises:
            NotFoundError: If the comment is absent or soft-deleted
        """
        pass

    @abstractmethod
    async def find_tree(
        self, root_id: RootId, max_depth: int, sort_by: SortField
    ) -> list[CommentTreeNode]:
        """Fetch a root's live comments down to ``max_depth`` as a forest."""
        pass

    @abstractmethod
    async def find_top(
        self, root_id: RootId, limit: int, time_range: TimeRange
    ) -> list[Comment]:
        """Highest scoring live comments created within ``time_range``."""
        pass

    @abstractmethod
    async def get_stats(self, root_id: RootId) -> CommentStats:
        """Aggregate figures over a root's live comments."""
        pass

    @abstractmethod
    async def count_by_user(self, user_id: UserId) -> int:
        """Count a user's live comments."""
        pass

    # Writes

    @abstractmethod
    async def create(self, comment: Comment) -> Comment:
        """Persist a new comment.

        Computes path and depth from the parent and stores zeroed vote
        counters.

        Raises:
            NotFoundError: If the parent is absent or soft-deleted
            CrossRootError: If the parent belongs to another root
            DepthExceededError: If the parent is at the maximum depth
        """
        pass

    @abstractmethod
    async def update(self, comment_id: CommentId, changes: CommentUpdate) -> Comment:
        """Apply a partial update with edit tracking.

        Raises:
            NotFoundError: If the comment is absent or soft-deleted
        """
        pass

    @abstractmethod
    async def soft_delete(self, comment_id: CommentId, user_id: UserId) -> None:
        """Mark a comment deleted on behalf of its author.

        Raises:
            NotFoundError: If the comment is absent or already deleted
            NotAuthorizedError: If ``user_id`` is not the author
        """
        pass

    # Votes

    @abstractmethod
    async def cast_vote(
        self, comment_id: CommentId, user_id: UserId, vote_type: VoteType
    ) -> Vote:
        """Create or overwrite a user's vote, then recompute the comment's score.

        Raises:
            NotFoundError: If the comment is absent or soft-deleted
        """
        pass

    @abstractmethod
    async def remove_vote(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Delete a user's vote if present and recompute the score.

        Returns:
            True if a vote was removed
        """
        pass

    @abstractmethod
    async def find_vote(
        self, comment_id: CommentId, user_id: UserId
    ) -> Optional[Vote]:
        pass

    @abstractmethod
    async def find_votes(self, comment_id: CommentId) -> list[Vote]:
        pass

    @abstractmethod
    async def find_user_votes(
        self, user_id: UserId, comment_ids: list[CommentId]
    ) -> dict[CommentId, Vote]:
        """A user's votes on the given comments, keyed by comment ID."""
        pass

    # Maintenance

    @abstractmethod
    async def recompute_score(self, comment_id: CommentId) -> VoteTally:
        """Recount a comment's votes and store the tally.

        Raises:
            NotFoundError: If no comment row exists
        """
        pass

    @abstractmethod
    async def recompute_scores(self, comment_ids: list[CommentId]) -> int:
        """Recount several comments. Returns how many were updated."""
        pass

    @abstractmethod
    async def recompute_all_scores(self) -> int:
        """Recount every comment. Returns how many were updated."""
        pass

    @abstractmethod
    async def purge_deleted(self, older_than_days: int) -> int:
        """Permanently remove old soft-deleted comments.

        Only tombstones with no remaining replies are removed, so every
        stored path stays complete. Votes on purged comments go with them.

        Returns:
            Number of comments removed
        """
        pass

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Scope in which all writes commit together or not at all."""
        pass

    @abstractmethod
    async def ping(self) -> None:
        """Check that the backing store answers.

        Raises:
            UnavailableError: If it does not
        """
        pass
