"""Comment domain service."""

from typing import Optional
from uuid import uuid4

import logfire
from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from arbor.config import CommentSettings
from arbor.domain.error import ForbiddenError, InvalidArgumentError, NotAuthorizedError
from arbor.domain.model import (
    BatchVote,
    Comment,
    CommentFilter,
    CommentStats,
    CommentTreeNode,
    CommentUpdate,
    Vote,
)
from arbor.domain.repository import CommentRepository
from arbor.domain.value import (
    MAX_EXTERNAL_ID_LENGTH,
    CommentId,
    RootId,
    SearchQuery,
    SortField,
    TimeRange,
    UserId,
    VoteType,
)

from .base import Service

_http_url = TypeAdapter(AnyHttpUrl)


class CommentService(Service):
    """Domain service for comment operations.

    Validates input, enforces rules the store cannot (authorship on edit,
    no self-votes, batch limits) and composes repository calls. Store errors
    are propagated unchanged.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        settings: CommentSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            settings: Comment limits and defaults
        """
        self.comment_repository = comment_repository
        self.settings = settings

    # Validation helpers

    def _clean_content(self, content: str) -> str:
        content = content.strip()
        if not content:
            raise InvalidArgumentError("Comment content cannot be empty")
        if len(content) > self.settings.max_content_length:
            raise InvalidArgumentError(
                f"Comment content exceeds {self.settings.max_content_length} characters"
            )
        return content

    @staticmethod
    def _clean_url(url: Optional[str], field: str) -> Optional[str]:
        """Check an http(s) URL. Empty strings pass through as empty."""
        if url is None:
            return None
        url = url.strip()
        if not url:
            return url
        try:
            _http_url.validate_python(url)
        except ValidationError:
            raise InvalidArgumentError(f"Invalid {field}: must be an http or https URL")
        return url

    @staticmethod
    def _require(value: str, name: str) -> None:
        if not value or not value.strip():
            raise InvalidArgumentError(f"{name} is required")
        if len(value) > MAX_EXTERNAL_ID_LENGTH:
            raise InvalidArgumentError(
                f"{name} exceeds {MAX_EXTERNAL_ID_LENGTH} characters"
            )

    @staticmethod
    def parse_vote_type(value: int) -> VoteType:
        """Convert a raw vote value to ``VoteType``.

        Raises:
            InvalidArgumentError: If the value is not +1 or -1
        """
        try:
            return VoteType(value)
        except ValueError:
            raise InvalidArgumentError(f"Invalid vote type: {value}")

    def _page(self, comment_filter: Optional[CommentFilter], **fixed) -> CommentFilter:
        """Apply default page size and the hard cap to a listing filter."""
        comment_filter = comment_filter or CommentFilter()
        limit = comment_filter.limit or self.settings.default_page_size
        return comment_filter.model_copy(
            update={**fixed, "limit": min(limit, self.settings.max_page_size)}
        )

    def _clamp_depth(self, max_depth: Optional[int]) -> int:
        if max_depth is None or max_depth <= 0:
            return self.settings.default_tree_depth
        return min(max_depth, self.settings.max_tree_depth)

    # Comments

    async def create_comment(
        self,
        root_id: RootId,
        user_id: UserId,
        content: str,
        parent_id: Optional[CommentId] = None,
        media_url: Optional[str] = None,
        link_url: Optional[str] = None,
    ) -> Comment:
        """Create a top-level comment or a reply.

        Args:
            root_id: External content the comment belongs to
            user_id: Author
            content: Comment text (trimmed before storing)
            parent_id: Parent comment for replies (None for top-level)
            media_url: Optional http(s) media URL
            link_url: Optional http(s) link URL

        Returns:
            Created comment with path and depth set

        Raises:
            InvalidArgumentError: If any input is malformed
            NotFoundError: If the parent is absent or deleted
            CrossRootError: If the parent belongs to another root
            DepthExceededError: If the parent is at the maximum depth
        """
        with logfire.span(
            "comment_service.create_comment",
            root_id=root_id,
            user_id=user_id,
            parent_id=str(parent_id) if parent_id else None,
        ):
            self._require(root_id, "root_id")
            self._require(user_id, "user_id")
            content = self._clean_content(content)
            media_url = self._clean_url(media_url, "media URL") or None
            link_url = self._clean_url(link_url, "link URL") or None

            try:
                comment = Comment(
                    id=CommentId(uuid4()),
                    root_id=root_id,
                    user_id=user_id,
                    parent_id=parent_id,
                    content=content,
                    media_url=media_url,
                    link_url=link_url,
                )
            except ValidationError as e:
                raise InvalidArgumentError(f"Invalid comment: {e}")

            created = await self.comment_repository.create(comment)
            logfire.info(
                "Comment created",
                comment_id=str(created.id),
                root_id=root_id,
                depth=created.depth,
            )
            return created

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get a live comment.

        Raises:
            NotFoundError: If the comment is absent or deleted
        """
        with logfire.span("comment_service.get_comment", comment_id=str(comment_id)):
            return await self.comment_repository.get_by_id(comment_id)

    async def update_comment(
        self,
        comment_id: CommentId,
        user_id: UserId,
        content: Optional[str] = None,
        media_url: Optional[str] = None,
        link_url: Optional[str] = None,
    ) -> Comment:
        """Edit a comment on behalf of its author.

        Arguments left as None are not changed. An empty URL clears it.

        Raises:
            InvalidArgumentError: If any provided value is malformed
            NotFoundError: If the comment is absent or deleted
            NotAuthorizedError: If ``user_id`` is not the author
        """
        with logfire.span(
            "comment_service.update_comment",
            comment_id=str(comment_id),
            user_id=user_id,
        ):
            self._require(user_id, "user_id")
            comment = await self.comment_repository.get_by_id(comment_id)
            if comment.user_id != user_id:
                logfire.warn(
                    "Unauthorized comment update attempt",
                    comment_id=str(comment_id),
                    user_id=user_id,
                    author_id=comment.user_id,
                )
                raise NotAuthorizedError("comment", str(comment_id), user_id)

            values: dict[str, str] = {}
            if content is not None:
                values["content"] = self._clean_content(content)
            if media_url is not None:
                values["media_url"] = self._clean_url(media_url, "media URL") or ""
            if link_url is not None:
                values["link_url"] = self._clean_url(link_url, "link URL") or ""

            try:
                changes = CommentUpdate(**values)
            except ValidationError as e:
                raise InvalidArgumentError(f"Invalid update: {e}")

            updated = await self.comment_repository.update(comment_id, changes)
            logfire.info(
                "Comment updated",
                comment_id=str(comment_id),
                fields=sorted(values),
                edit_count=updated.edit_count,
            )
            return updated

    async def delete_comment(self, comment_id: CommentId, user_id: UserId) -> None:
        """Soft-delete a comment on behalf of its author.

        Raises:
            InvalidArgumentError: If ``user_id`` is empty
            NotFoundError: If the comment is absent or already deleted
            NotAuthorizedError: If ``user_id`` is not the author
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            user_id=user_id,
        ):
            self._require(user_id, "user_id")
            await self.comment_repository.soft_delete(comment_id, user_id)
            logfire.info("Comment deleted", comment_id=str(comment_id))

    # Listings

    async def get_comments_by_root(
        self, root_id: RootId, comment_filter: Optional[CommentFilter] = None
    ) -> list[Comment]:
        """List a root's live comments, paginated (default 50, at most 1000)."""
        with logfire.span("comment_service.get_comments_by_root", root_id=root_id):
            self._require(root_id, "root_id")
            page = self._page(comment_filter, root_id=root_id)
            comments = await self.comment_repository.find_comments(page)
            logfire.info(
                "Comments retrieved for root", root_id=root_id, count=len(comments)
            )
            return comments

    async def get_comments_by_user(
        self, user_id: UserId, comment_filter: Optional[CommentFilter] = None
    ) -> list[Comment]:
        """List a user's live comments across all roots, paginated."""
        with logfire.span("comment_service.get_comments_by_user", user_id=user_id):
            self._require(user_id, "user_id")
            page = self._page(comment_filter, user_id=user_id)
            comments = await self.comment_repository.find_comments(page)
            logfire.info(
                "Comments retrieved for user", user_id=user_id, count=len(comments)
            )
            return comments

    async def get_comments_with_user_votes(
        self,
        root_id: RootId,
        user_id: UserId,
        comment_filter: Optional[CommentFilter] = None,
    ) -> tuple[list[Comment], dict[CommentId, Vote]]:
        """List a root's comments plus the caller's votes on that page."""
        with logfire.span(
            "comment_service.get_comments_with_user_votes",
            root_id=root_id,
            user_id=user_id,
        ):
            self._require(user_id, "user_id")
            comments = await self.get_comments_by_root(root_id, comment_filter)
            votes = await self.comment_repository.find_user_votes(
                user_id, [comment.id for comment in comments]
            )
            return comments, votes

    async def get_comment_tree(
        self,
        root_id: RootId,
        max_depth: Optional[int] = None,
        sort_by: Optional[SortField] = None,
    ) -> list[CommentTreeNode]:
        """Fetch a root's comments as a forest.

        ``max_depth`` is clamped to [1, 50] with a default of 10; ``sort_by``
        defaults to score.
        """
        max_depth = self._clamp_depth(max_depth)
        sort_by = sort_by or SortField.SCORE
        with logfire.span(
            "comment_service.get_comment_tree",
            root_id=root_id,
            max_depth=max_depth,
            sort_by=sort_by.value,
        ):
            self._require(root_id, "root_id")
            forest = await self.comment_repository.find_tree(root_id, max_depth, sort_by)
            logfire.info("Comment tree built", root_id=root_id, roots=len(forest))
            return forest

    async def get_comment_path(self, comment_id: CommentId) -> list[Comment]:
        """Ancestor chain of a comment, top-level ancestor first."""
        with logfire.span(
            "comment_service.get_comment_path", comment_id=str(comment_id)
        ):
            return await self.comment_repository.find_path(comment_id)

    async def get_comment_children(
        self, parent_id: CommentId, max_depth: Optional[int] = None
    ) -> list[Comment]:
        """Live descendants of a comment, down to a clamped depth."""
        max_depth = self._clamp_depth(max_depth)
        with logfire.span(
            "comment_service.get_comment_children",
            parent_id=str(parent_id),
            max_depth=max_depth,
        ):
            return await self.comment_repository.find_children(parent_id, max_depth)

    async def search_comments(
        self,
        root_id: RootId,
        query: str,
        comment_filter: Optional[CommentFilter] = None,
    ) -> list[Comment]:
        """Filter one page of a root's comments by a substring of their content.

        The page is fetched with ``comment_filter`` first and matched
        afterwards, so matches outside that page are not returned.

        Raises:
            InvalidArgumentError: If the trimmed query is too short
        """
        with logfire.span("comment_service.search_comments", root_id=root_id):
            try:
                search = SearchQuery(query)
            except ValidationError:
                raise InvalidArgumentError("Search query is required")
            if len(search.root) < self.settings.min_search_length:
                raise InvalidArgumentError(
                    "Search query must be at least "
                    f"{self.settings.min_search_length} characters"
                )

            comments = await self.get_comments_by_root(root_id, comment_filter)
            results = [c for c in comments if search.matches(c.content)]
            logfire.info(
                "Comment search completed",
                root_id=root_id,
                scanned=len(comments),
                matched=len(results),
            )
            return results

    # Votes

    async def vote_comment(
        self, comment_id: CommentId, user_id: UserId, vote_type: int
    ) -> Vote:
        """Cast or change a vote.

        Raises:
            InvalidArgumentError: If the vote type is not +1 or -1
            NotFoundError: If the comment is absent or deleted
            ForbiddenError: If the voter wrote the comment
        """
        with logfire.span(
            "comment_service.vote_comment",
            comment_id=str(comment_id),
            user_id=user_id,
            vote_type=vote_type,
        ):
            self._require(user_id, "user_id")
            direction = self.parse_vote_type(vote_type)
            vote = await self._apply_vote(comment_id, user_id, direction)
            logfire.info(
                "Vote cast",
                comment_id=str(comment_id),
                user_id=user_id,
                vote_type=int(direction),
            )
            return vote

    async def _apply_vote(
        self, comment_id: CommentId, user_id: UserId, vote_type: VoteType
    ) -> Vote:
        comment = await self.comment_repository.get_by_id(comment_id)
        if comment.user_id == user_id:
            logfire.warn(
                "Self-vote rejected", comment_id=str(comment_id), user_id=user_id
            )
            raise ForbiddenError("Users cannot vote on their own comments")
        return await self.comment_repository.cast_vote(comment_id, user_id, vote_type)

    async def remove_vote(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Remove a vote. Succeeds whether or not a vote existed.

        Returns:
            True if a vote was removed
        """
        with logfire.span(
            "comment_service.remove_vote",
            comment_id=str(comment_id),
            user_id=user_id,
        ):
            self._require(user_id, "user_id")
            removed = await self.comment_repository.remove_vote(comment_id, user_id)
            if removed:
                logfire.info("Vote removed", comment_id=str(comment_id), user_id=user_id)
            else:
                logfire.info(
                    "No vote to remove", comment_id=str(comment_id), user_id=user_id
                )
            return removed

    async def batch_vote_comments(
        self, votes: list[BatchVote], user_id: UserId
    ) -> list[Vote]:
        """Apply several votes in one transaction.

        Every vote must belong to ``user_id``. The first failure rolls back
        the whole batch.

        Raises:
            InvalidArgumentError: If the batch is empty, too large, or holds
                another user's vote
            NotFoundError: If a comment is absent or deleted
            ForbiddenError: If a vote targets the caller's own comment
        """
        with logfire.span(
            "comment_service.batch_vote_comments", user_id=user_id, count=len(votes)
        ):
            self._require(user_id, "user_id")
            if not votes:
                raise InvalidArgumentError("Batch must contain at least one vote")
            if len(votes) > self.settings.max_batch_size:
                raise InvalidArgumentError(
                    f"Too many votes in batch, maximum is {self.settings.max_batch_size}"
                )
            for item in votes:
                if item.user_id != user_id:
                    logfire.warn(
                        "Batch vote user mismatch",
                        user_id=user_id,
                        vote_user_id=item.user_id,
                    )
                    raise InvalidArgumentError("User ID mismatch in vote request")

            applied: list[Vote] = []
            async with self.comment_repository.transaction():
                for item in votes:
                    applied.append(
                        await self._apply_vote(item.comment_id, user_id, item.vote_type)
                    )
            logfire.info("Batch votes applied", user_id=user_id, count=len(applied))
            return applied

    async def get_vote(self, comment_id: CommentId, user_id: UserId) -> Optional[Vote]:
        with logfire.span(
            "comment_service.get_vote", comment_id=str(comment_id), user_id=user_id
        ):
            return await self.comment_repository.find_vote(comment_id, user_id)

    async def get_comment_votes(self, comment_id: CommentId) -> list[Vote]:
        with logfire.span(
            "comment_service.get_comment_votes", comment_id=str(comment_id)
        ):
            return await self.comment_repository.find_votes(comment_id)

    # Stats

    async def get_stats(self, root_id: RootId) -> CommentStats:
        """Aggregate figures over a root's live comments."""
        with logfire.span("comment_service.get_stats", root_id=root_id):
            self._require(root_id, "root_id")
            return await self.comment_repository.get_stats(root_id)

    async def get_top_comments(
        self,
        root_id: RootId,
        limit: Optional[int] = None,
        time_range: Optional[str] = None,
    ) -> list[Comment]:
        """Highest scoring comments in a time window.

        ``limit`` defaults to 10 and is capped at 100. Unknown time ranges
        fall back to ``day``.
        """
        if limit is None or limit <= 0:
            limit = self.settings.default_top_limit
        limit = min(limit, self.settings.max_top_limit)
        try:
            window = TimeRange(time_range)
        except ValueError:
            window = TimeRange.DAY

        with logfire.span(
            "comment_service.get_top_comments",
            root_id=root_id,
            limit=limit,
            time_range=window.value,
        ):
            self._require(root_id, "root_id")
            return await self.comment_repository.find_top(root_id, limit, window)

    async def get_user_comment_count(self, user_id: UserId) -> int:
        with logfire.span("comment_service.get_user_comment_count", user_id=user_id):
            self._require(user_id, "user_id")
            return await self.comment_repository.count_by_user(user_id)

    # Maintenance

    async def purge_old_deleted_comments(self, older_than_days: int) -> int:
        """Permanently remove soft-deleted comments older than the cutoff.

        Raises:
            InvalidArgumentError: If ``older_than_days`` is below 1
        """
        with logfire.span(
            "comment_service.purge_old_deleted_comments",
            older_than_days=older_than_days,
        ):
            if older_than_days < 1:
                raise InvalidArgumentError("older_than_days must be at least 1")
            purged = await self.comment_repository.purge_deleted(older_than_days)
            logfire.info(
                "Deleted comments purged",
                older_than_days=older_than_days,
                purged=purged,
            )
            return purged
