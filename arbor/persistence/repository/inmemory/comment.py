"""In-memory comment repository for testing and local development."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional
from uuid import uuid4

from arbor.config import CommentSettings
from arbor.domain.error import (
    CrossRootError,
    DepthExceededError,
    NotAuthorizedError,
    NotFoundError,
)
from arbor.domain.model import (
    Comment,
    CommentFilter,
    CommentStats,
    CommentTreeNode,
    CommentUpdate,
    Vote,
    build_comment_forest,
)
from arbor.domain.model.common import utc_now
from arbor.domain.repository import CommentRepository
from arbor.domain.service.score_service import tally_votes
from arbor.domain.value import (
    CommentId,
    RootId,
    SortField,
    SortOrder,
    TimeRange,
    UserId,
    VoteId,
    VoteTally,
    VoteType,
    derive_child_path,
    is_descendant_prefix,
    split_path,
)


def _sorted(
    comments: list[Comment], sort_by: SortField, sort_order: SortOrder
) -> list[Comment]:
    """Order like the SQL store: missing values last, ties by ID."""
    by_id = sorted(comments, key=lambda comment: str(comment.id))
    present = [x for x in by_id if getattr(x, sort_by.value) is not None]
    missing = [x for x in by_id if getattr(x, sort_by.value) is None]
    present.sort(
        key=lambda comment: getattr(comment, sort_by.value),
        reverse=sort_order == SortOrder.DESC,
    )
    return present + missing


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository.

    Operations never yield to the event loop while mutating, so each one is
    atomic within a single process.
    """

    def __init__(self, settings: Optional[CommentSettings] = None) -> None:
        self.settings = settings or CommentSettings()
        self._comments: dict[CommentId, Comment] = {}
        self._votes: dict[tuple[CommentId, UserId], Vote] = {}

    def _live(self, comment_id: CommentId) -> Comment:
        comment = self._comments.get(comment_id)
        if comment is None or comment.is_deleted:
            raise NotFoundError("Comment", str(comment_id))
        return comment

    def _recount(self, comment_id: CommentId) -> VoteTally:
        tally = tally_votes(
            vote for (cid, _), vote in self._votes.items() if cid == comment_id
        )
        self._comments[comment_id] = self._comments[comment_id].with_tally(tally)
        return tally

    # Reads

    async def get_by_id(self, comment_id: CommentId) -> Comment:
        return self._live(comment_id)

    async def find_comments(self, comment_filter: CommentFilter) -> list[Comment]:
        matches = [c for c in self._comments.values() if comment_filter.matches(c)]
        ordered = _sorted(matches, comment_filter.sort_by, comment_filter.sort_order)

        start = comment_filter.offset
        if comment_filter.limit is None:
            return ordered[start:]
        limit = min(comment_filter.limit, self.settings.max_page_size)
        return ordered[start : start + limit]

    async def find_children(
        self, parent_id: CommentId, max_depth: int
    ) -> list[Comment]:
        parent = self._live(parent_id)
        children = [
            c
            for c in self._comments.values()
            if not c.is_deleted
            and c.id != parent.id
            and is_descendant_prefix(c.path or "", parent.path or "")
            and c.depth <= parent.depth + max_depth
        ]
        children.sort(key=lambda c: (c.path or "", c.created_at))
        return children

    async def find_path(self, comment_id: CommentId) -> list[Comment]:
        comment = self._live(comment_id)
        chain = [
            self._comments[ancestor_id]
            for ancestor_id in split_path(comment.path or str(comment.id))
            if ancestor_id in self._comments
        ]
        return sorted(chain, key=lambda c: c.depth)

    async def find_tree(
        self, root_id: RootId, max_depth: int, sort_by: SortField
    ) -> list[CommentTreeNode]:
        comments = await self.find_comments(
            CommentFilter(root_id=root_id, max_depth=max_depth, sort_by=sort_by)
        )
        return build_comment_forest(comments)

    async def find_top(
        self, root_id: RootId, limit: int, time_range: TimeRange
    ) -> list[Comment]:
        cutoff = utc_now() - time_range.window if time_range.window else None
        comments = [
            c
            for c in self._comments.values()
            if c.root_id == root_id
            and not c.is_deleted
            and (cutoff is None or c.created_at > cutoff)
        ]
        comments.sort(key=lambda c: str(c.id))
        comments.sort(key=lambda c: (c.score, c.created_at), reverse=True)
        return comments[:limit]

    async def get_stats(self, root_id: RootId) -> CommentStats:
        live = [
            c
            for c in self._comments.values()
            if c.root_id == root_id and not c.is_deleted
        ]
        recent_cutoff = utc_now() - timedelta(hours=24)
        total = len(live)
        edited = sum(1 for c in live if c.is_edited)
        total_edits = sum(c.edit_count for c in live)
        return CommentStats(
            root_id=root_id,
            total_count=total,
            total_score=sum(c.score for c in live),
            max_depth=max((c.depth for c in live), default=0),
            recent_count=sum(1 for c in live if c.created_at > recent_cutoff),
            edited_count=edited,
            total_edits=total_edits,
            edit_rate=edited * 100.0 / total if total else 0.0,
            avg_edits_per_comment=total_edits / edited if edited else 0.0,
        )

    async def count_by_user(self, user_id: UserId) -> int:
        return sum(
            1
            for c in self._comments.values()
            if c.user_id == user_id and not c.is_deleted
        )

    # Writes

    async def create(self, comment: Comment) -> Comment:
        parent_path: Optional[str] = None
        parent_depth: Optional[int] = None
        if comment.parent_id is not None:
            parent = self._live(comment.parent_id)
            if parent.root_id != comment.root_id:
                raise CrossRootError(str(parent.id), parent.root_id, comment.root_id)
            if parent.depth >= self.settings.max_depth:
                raise DepthExceededError(str(parent.id), self.settings.max_depth)
            parent_path, parent_depth = parent.path, parent.depth

        path, depth = derive_child_path(comment.id, parent_path, parent_depth)
        stored = comment.model_copy(
            update={
                "path": path,
                "depth": depth,
                "upvotes": 0,
                "downvotes": 0,
                "score": 0,
            }
        )
        self._comments[stored.id] = stored
        return stored

    async def update(self, comment_id: CommentId, changes: CommentUpdate) -> Comment:
        updated = self._live(comment_id).apply_changes(changes)
        self._comments[comment_id] = updated
        return updated

    async def soft_delete(self, comment_id: CommentId, user_id: UserId) -> None:
        comment = self._live(comment_id)
        if comment.user_id != user_id:
            raise NotAuthorizedError("comment", str(comment_id), user_id)
        self._comments[comment_id] = comment.mark_deleted()

    # Votes

    async def cast_vote(
        self, comment_id: CommentId, user_id: UserId, vote_type: VoteType
    ) -> Vote:
        self._live(comment_id)
        now = utc_now()
        existing = self._votes.get((comment_id, user_id))
        if existing:
            vote = existing.model_copy(update={"vote_type": vote_type, "updated_at": now})
        else:
            vote = Vote(
                id=VoteId(uuid4()),
                comment_id=comment_id,
                user_id=user_id,
                vote_type=vote_type,
                created_at=now,
                updated_at=now,
            )
        self._votes[(comment_id, user_id)] = vote
        self._recount(comment_id)
        return vote

    async def remove_vote(self, comment_id: CommentId, user_id: UserId) -> bool:
        if self._votes.pop((comment_id, user_id), None) is None:
            return False
        if comment_id in self._comments:
            self._recount(comment_id)
        return True

    async def find_vote(
        self, comment_id: CommentId, user_id: UserId
    ) -> Optional[Vote]:
        return self._votes.get((comment_id, user_id))

    async def find_votes(self, comment_id: CommentId) -> list[Vote]:
        votes = [v for v in self._votes.values() if v.comment_id == comment_id]
        return sorted(votes, key=lambda v: v.created_at)

    async def find_user_votes(
        self, user_id: UserId, comment_ids: list[CommentId]
    ) -> dict[CommentId, Vote]:
        return {
            cid: self._votes[(cid, user_id)]
            for cid in comment_ids
            if (cid, user_id) in self._votes
        }

    # Maintenance

    async def recompute_score(self, comment_id: CommentId) -> VoteTally:
        if comment_id not in self._comments:
            raise NotFoundError("Comment", str(comment_id))
        return self._recount(comment_id)

    async def recompute_scores(self, comment_ids: list[CommentId]) -> int:
        existing = [cid for cid in dict.fromkeys(comment_ids) if cid in self._comments]
        for comment_id in existing:
            self._recount(comment_id)
        return len(existing)

    async def recompute_all_scores(self) -> int:
        return await self.recompute_scores(list(self._comments))

    async def purge_deleted(self, older_than_days: int) -> int:
        cutoff = utc_now() - timedelta(days=older_than_days)
        purged = 0
        while True:
            parents = {c.parent_id for c in self._comments.values() if c.parent_id}
            doomed = [
                c.id
                for c in self._comments.values()
                if c.is_deleted and c.updated_at < cutoff and c.id not in parents
            ]
            if not doomed:
                return purged
            for comment_id in doomed:
                del self._comments[comment_id]
            self._votes = {
                key: vote
                for key, vote in self._votes.items()
                if vote.comment_id in self._comments
            }
            purged += len(doomed)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        comments, votes = dict(self._comments), dict(self._votes)
        try:
            yield
        except BaseException:
            self._comments, self._votes = comments, votes
            raise

    async def ping(self) -> None:
        pass
