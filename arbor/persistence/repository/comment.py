"""PostgreSQL implementation of Comment repository."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Any, Optional
from uuid import uuid4

import logfire
from sqlalchemy import delete, exists, func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

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
from arbor.domain.value import (
    CommentId,
    RootId,
    SortField,
    SortOrder,
    TimeRange,
    UserId,
    VoteTally,
    VoteType,
    derive_child_path,
    descendant_pattern,
    split_path,
)
from arbor.persistence.error import translate_store_errors
from arbor.persistence.mappers import comment_to_dict, row_to_comment, row_to_vote
from arbor.persistence.tables import comments_table, votes_table

c = comments_table.c

# Columns an update may change
MUTABLE_COLUMNS = {
    "content",
    "media_url",
    "link_url",
    "is_edited",
    "edit_count",
    "original_content",
    "content_updated_at",
    "updated_at",
}


def _order_by(sort_by: SortField, sort_order: SortOrder) -> list[Any]:
    column = comments_table.c[sort_by.value]
    primary = column.asc() if sort_order == SortOrder.ASC else column.desc()
    return [primary.nulls_last(), c.id]


def _count_votes(vote_type: VoteType):
    """Correlated count of a comment's votes in one direction."""
    return (
        select(func.count())
        .select_from(votes_table)
        .where(votes_table.c.comment_id == c.id)
        .where(votes_table.c.vote_type == int(vote_type))
        .scalar_subquery()
    )


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository.

    Vote writes lock the comment row before touching its votes, so the
    recount that follows sees every committed vote and concurrent voters on
    the same comment are serialized.
    """

    def __init__(
        self, session: AsyncSession, settings: Optional[CommentSettings] = None
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            settings: Comment limits (max depth, page cap)
        """
        self.session = session
        self.settings = settings or CommentSettings()

    async def _fetch(
        self,
        comment_id: CommentId,
        include_deleted: bool = False,
        for_update: bool = False,
    ) -> Comment:
        stmt = select(comments_table).where(c.id == comment_id)
        if not include_deleted:
            stmt = stmt.where(c.is_deleted.is_(False))
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if row is None:
            raise NotFoundError("Comment", str(comment_id))
        return row_to_comment(row._asdict())

    async def _select(self, stmt) -> list[Comment]:
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def _recount(self, comment_id: CommentId) -> Optional[VoteTally]:
        """Store fresh vote counts for a comment whose row is already locked."""
        upvotes = _count_votes(VoteType.UP)
        downvotes = _count_votes(VoteType.DOWN)
        stmt = (
            update(comments_table)
            .where(c.id == comment_id)
            .values(
                upvotes=upvotes,
                downvotes=downvotes,
                score=upvotes - downvotes,
                updated_at=utc_now(),
            )
            .returning(c.upvotes, c.downvotes)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if row is None:
            return None
        return VoteTally(upvotes=row.upvotes, downvotes=row.downvotes)

    # Reads

    @logfire.instrument("comment_repository.get_by_id")
    @translate_store_errors
    async def get_by_id(self, comment_id: CommentId) -> Comment:
        return await self._fetch(comment_id)

    @logfire.instrument("comment_repository.find_comments")
    @translate_store_errors
    async def find_comments(self, comment_filter: CommentFilter) -> list[Comment]:
        f = comment_filter
        stmt = select(comments_table).where(c.is_deleted.is_(False))
        if f.root_id is not None:
            stmt = stmt.where(c.root_id == f.root_id)
        if f.user_id is not None:
            stmt = stmt.where(c.user_id == f.user_id)
        if f.parent_id is not None:
            stmt = stmt.where(c.parent_id == f.parent_id)
        if f.max_depth is not None:
            stmt = stmt.where(c.depth <= f.max_depth)
        if f.is_edited is not None:
            stmt = stmt.where(c.is_edited.is_(f.is_edited))
        if f.min_edits is not None:
            stmt = stmt.where(c.edit_count >= f.min_edits)
        if f.max_edits is not None:
            stmt = stmt.where(c.edit_count <= f.max_edits)

        stmt = stmt.order_by(*_order_by(f.sort_by, f.sort_order))
        if f.limit is not None:
            stmt = stmt.limit(min(f.limit, self.settings.max_page_size))
        if f.offset:
            stmt = stmt.offset(f.offset)
        return await self._select(stmt)

    @logfire.instrument("comment_repository.find_children")
    @translate_store_errors
    async def find_children(
        self, parent_id: CommentId, max_depth: int
    ) -> list[Comment]:
        parent = await self._fetch(parent_id)
        stmt = (
            select(comments_table)
            .where(c.path.like(descendant_pattern(parent.path or str(parent.id))))
            .where(c.depth <= parent.depth + max_depth)
            .where(c.is_deleted.is_(False))
            .order_by(c.path, c.created_at)
        )
        return await self._select(stmt)

    @logfire.instrument("comment_repository.find_path")
    @translate_store_errors
    async def find_path(self, comment_id: CommentId) -> list[Comment]:
        comment = await self._fetch(comment_id)
        ancestor_ids = split_path(comment.path or str(comment.id))
        stmt = (
            select(comments_table)
            .where(c.id.in_(ancestor_ids))
            .order_by(c.depth)
        )
        return await self._select(stmt)

    @logfire.instrument("comment_repository.find_tree")
    @translate_store_errors
    async def find_tree(
        self, root_id: RootId, max_depth: int, sort_by: SortField
    ) -> list[CommentTreeNode]:
        comments = await self.find_comments(
            CommentFilter(root_id=root_id, max_depth=max_depth, sort_by=sort_by)
        )
        return build_comment_forest(comments)

    @logfire.instrument("comment_repository.find_top")
    @translate_store_errors
    async def find_top(
        self, root_id: RootId, limit: int, time_range: TimeRange
    ) -> list[Comment]:
        stmt = (
            select(comments_table)
            .where(c.root_id == root_id)
            .where(c.is_deleted.is_(False))
        )
        if time_range.window is not None:
            stmt = stmt.where(c.created_at > utc_now() - time_range.window)
        stmt = stmt.order_by(c.score.desc(), c.created_at.desc(), c.id).limit(limit)
        return await self._select(stmt)

    @logfire.instrument("comment_repository.get_stats")
    @translate_store_errors
    async def get_stats(self, root_id: RootId) -> CommentStats:
        recent_cutoff = utc_now() - timedelta(hours=24)
        stmt = (
            select(
                func.count().label("total_count"),
                func.coalesce(func.sum(c.score), 0).label("total_score"),
                func.coalesce(func.max(c.depth), 0).label("max_depth"),
                func.count()
                .filter(c.created_at > recent_cutoff)
                .label("recent_count"),
                func.count().filter(c.is_edited.is_(True)).label("edited_count"),
                func.coalesce(func.sum(c.edit_count), 0).label("total_edits"),
            )
            .where(c.root_id == root_id)
            .where(c.is_deleted.is_(False))
        )
        row = (await self.session.execute(stmt)).one()

        total, edited = row.total_count, row.edited_count
        return CommentStats(
            root_id=root_id,
            total_count=total,
            total_score=row.total_score,
            max_depth=row.max_depth,
            recent_count=row.recent_count,
            edited_count=edited,
            total_edits=row.total_edits,
            edit_rate=edited * 100.0 / total if total else 0.0,
            avg_edits_per_comment=row.total_edits / edited if edited else 0.0,
        )

    @logfire.instrument("comment_repository.count_by_user")
    @translate_store_errors
    async def count_by_user(self, user_id: UserId) -> int:
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(c.user_id == user_id)
            .where(c.is_deleted.is_(False))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    # Writes

    @logfire.instrument("comment_repository.create")
    @translate_store_errors
    async def create(self, comment: Comment) -> Comment:
        parent_path: Optional[str] = None
        parent_depth: Optional[int] = None
        if comment.parent_id is not None:
            parent = await self._fetch(comment.parent_id)
            if parent.root_id != comment.root_id:
                raise CrossRootError(
                    str(parent.id), parent.root_id, comment.root_id
                )
            if parent.depth >= self.settings.max_depth:
                raise DepthExceededError(str(parent.id), self.settings.max_depth)
            parent_path, parent_depth = parent.path, parent.depth

        path, depth = derive_child_path(comment.id, parent_path, parent_depth)
        values = {
            **comment_to_dict(comment),
            "path": path,
            "depth": depth,
            "upvotes": 0,
            "downvotes": 0,
            "score": 0,
        }
        stmt = comments_table.insert().values(**values).returning(comments_table)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return row_to_comment(result.one()._asdict())

    @logfire.instrument("comment_repository.update")
    @translate_store_errors
    async def update(self, comment_id: CommentId, changes: CommentUpdate) -> Comment:
        current = await self._fetch(comment_id, for_update=True)
        updated = current.apply_changes(changes)
        if updated is current:
            return current

        stmt = (
            update(comments_table)
            .where(c.id == comment_id)
            .values(**updated.model_dump(include=MUTABLE_COLUMNS))
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return row_to_comment(result.one()._asdict())

    @logfire.instrument("comment_repository.soft_delete")
    @translate_store_errors
    async def soft_delete(self, comment_id: CommentId, user_id: UserId) -> None:
        comment = await self._fetch(comment_id, for_update=True)
        if comment.user_id != user_id:
            raise NotAuthorizedError("comment", str(comment_id), user_id)

        stmt = (
            update(comments_table)
            .where(c.id == comment_id)
            .values(is_deleted=True, updated_at=utc_now())
        )
        await self.session.execute(stmt)
        await self.session.flush()

    # Votes

    @logfire.instrument("comment_repository.cast_vote")
    @translate_store_errors
    async def cast_vote(
        self, comment_id: CommentId, user_id: UserId, vote_type: VoteType
    ) -> Vote:
        await self._fetch(comment_id, for_update=True)

        now = utc_now()
        stmt = pg_insert(votes_table).values(
            id=uuid4(),
            comment_id=comment_id,
            user_id=user_id,
            vote_type=int(vote_type),
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[votes_table.c.comment_id, votes_table.c.user_id],
            set_={
                "vote_type": stmt.excluded.vote_type,
                "updated_at": stmt.excluded.updated_at,
            },
        ).returning(votes_table)
        result = await self.session.execute(stmt)
        vote = row_to_vote(result.one()._asdict())

        await self._recount(comment_id)
        await self.session.flush()
        return vote

    @logfire.instrument("comment_repository.remove_vote")
    @translate_store_errors
    async def remove_vote(self, comment_id: CommentId, user_id: UserId) -> bool:
        try:
            await self._fetch(comment_id, include_deleted=True, for_update=True)
        except NotFoundError:
            return False

        stmt = (
            delete(votes_table)
            .where(votes_table.c.comment_id == comment_id)
            .where(votes_table.c.user_id == user_id)
        )
        result = await self.session.execute(stmt)
        if not result.rowcount:
            return False

        await self._recount(comment_id)
        await self.session.flush()
        return True

    @logfire.instrument("comment_repository.find_vote")
    @translate_store_errors
    async def find_vote(
        self, comment_id: CommentId, user_id: UserId
    ) -> Optional[Vote]:
        stmt = (
            select(votes_table)
            .where(votes_table.c.comment_id == comment_id)
            .where(votes_table.c.user_id == user_id)
        )
        row = (await self.session.execute(stmt)).fetchone()
        return row_to_vote(row._asdict()) if row else None

    @logfire.instrument("comment_repository.find_votes")
    @translate_store_errors
    async def find_votes(self, comment_id: CommentId) -> list[Vote]:
        stmt = (
            select(votes_table)
            .where(votes_table.c.comment_id == comment_id)
            .order_by(votes_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    @logfire.instrument("comment_repository.find_user_votes")
    @translate_store_errors
    async def find_user_votes(
        self, user_id: UserId, comment_ids: list[CommentId]
    ) -> dict[CommentId, Vote]:
        if not comment_ids:
            return {}
        stmt = (
            select(votes_table)
            .where(votes_table.c.user_id == user_id)
            .where(votes_table.c.comment_id.in_(comment_ids))
        )
        result = await self.session.execute(stmt)
        votes = [row_to_vote(row._asdict()) for row in result.fetchall()]
        return {vote.comment_id: vote for vote in votes}

    # Maintenance

    @logfire.instrument("comment_repository.recompute_score")
    @translate_store_errors
    async def recompute_score(self, comment_id: CommentId) -> VoteTally:
        await self._fetch(comment_id, include_deleted=True, for_update=True)
        tally = await self._recount(comment_id)
        await self.session.flush()
        if tally is None:
            raise NotFoundError("Comment", str(comment_id))
        return tally

    async def _recount_locked(self, where) -> int:
        """Lock the selected rows in ID order, then recount them in one statement."""
        lock = select(c.id).order_by(c.id).with_for_update()
        if where is not None:
            lock = lock.where(where)
        ids = list((await self.session.execute(lock)).scalars())
        if not ids:
            return 0

        upvotes = _count_votes(VoteType.UP)
        downvotes = _count_votes(VoteType.DOWN)
        stmt = (
            update(comments_table)
            .where(c.id.in_(ids))
            .values(
                upvotes=upvotes,
                downvotes=downvotes,
                score=upvotes - downvotes,
                updated_at=utc_now(),
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    @logfire.instrument("comment_repository.recompute_scores")
    @translate_store_errors
    async def recompute_scores(self, comment_ids: list[CommentId]) -> int:
        if not comment_ids:
            return 0
        return await self._recount_locked(c.id.in_(comment_ids))

    @logfire.instrument("comment_repository.recompute_all_scores")
    @translate_store_errors
    async def recompute_all_scores(self) -> int:
        return await self._recount_locked(None)

    @logfire.instrument("comment_repository.purge_deleted")
    @translate_store_errors
    async def purge_deleted(self, older_than_days: int) -> int:
        cutoff = utc_now() - timedelta(days=older_than_days)
        child = comments_table.alias("child")
        stmt = (
            delete(comments_table)
            .where(c.is_deleted.is_(True))
            .where(c.updated_at < cutoff)
            .where(~exists().where(child.c.parent_id == c.id))
        )

        # Each pass frees the parents of the tombstones it removed
        purged = 0
        while True:
            result = await self.session.execute(stmt)
            if not result.rowcount:
                break
            purged += result.rowcount
        await self.session.flush()
        return purged

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        async with self.session.begin_nested():
            yield

    @translate_store_errors
    async def ping(self) -> None:
        await self.session.execute(select(1))
