"""Comment entity.

Comments form one forest per root. Each comment stores its materialized
path (ancestor IDs plus its own ID) and its depth, both fixed at creation.
Deleting a comment only marks it; the row stays so that descendants keep a
complete ancestor chain.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from arbor.domain.model.common import DomainModel, utc_now
from arbor.domain.value import (
    MAX_EXTERNAL_ID_LENGTH,
    CommentId,
    CommentState,
    RootId,
    SortField,
    SortOrder,
    UserId,
    VoteTally,
)


class CommentUpdate(DomainModel):
    """Partial update of a comment.

    Only fields explicitly set are applied. An empty string for a URL clears
    it.
    """

    content: Optional[str] = Field(default=None, min_length=1)
    media_url: Optional[str] = None
    link_url: Optional[str] = None

    def provided(self) -> dict[str, Optional[str]]:
        """Fields explicitly set on this update, with cleared URLs as None."""
        values = self.model_dump(exclude_unset=True)
        for url_field in ("media_url", "link_url"):
            if values.get(url_field) == "":
                values[url_field] = None
        return values


class Comment(DomainModel):
    """Comment entity.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - depth: Nesting level (0 for top-level, increments with each reply)
    - path: Materialized path, assigned by the repository on create
    """

    id: CommentId
    root_id: RootId = Field(min_length=1, max_length=MAX_EXTERNAL_ID_LENGTH)
    user_id: UserId = Field(min_length=1, max_length=MAX_EXTERNAL_ID_LENGTH)
    parent_id: Optional[CommentId] = None
    depth: int = Field(default=0, ge=0)
    path: Optional[str] = None  # Set by CommentRepository.create

    content: str = Field(min_length=1)
    media_url: Optional[str] = None
    link_url: Optional[str] = None

    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    score: int = 0

    is_deleted: bool = False

    # Edit tracking
    is_edited: bool = False
    edit_count: int = Field(default=0, ge=0)
    original_content: Optional[str] = None
    content_updated_at: Optional[datetime] = None

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def state(self) -> CommentState:
        """Lifecycle state derived from the soft-delete flag."""
        return CommentState.DELETED if self.is_deleted else CommentState.ACTIVE

    def apply_changes(
        self, changes: CommentUpdate, now: Optional[datetime] = None
    ) -> "Comment":
        """Return a copy with ``changes`` applied and edit tracking updated.

        An update that sets no fields returns the comment unchanged. When at
        least one editable field actually changes, the comment is marked
        edited, its edit count increases and ``original_content`` is captured
        the first time only.
        """
        values = changes.provided()
        if not values:
            return self

        now = now or utc_now()
        update: dict[str, object] = {**values, "updated_at": now}

        changed = [f for f, v in values.items() if getattr(self, f) != v]
        if changed:
            update["is_edited"] = True
            update["edit_count"] = self.edit_count + 1
            update["content_updated_at"] = now
            if not self.is_edited:
                update["original_content"] = self.content

        return self.model_copy(update=update)

    def mark_deleted(self, now: Optional[datetime] = None) -> "Comment":
        """Return a soft-deleted copy."""
        return self.model_copy(
            update={"is_deleted": True, "updated_at": now or utc_now()}
        )

    def with_tally(self, tally: VoteTally, now: Optional[datetime] = None) -> "Comment":
        """Return a copy carrying the given vote counts."""
        return self.model_copy(
            update={
                "upvotes": tally.upvotes,
                "downvotes": tally.downvotes,
                "score": tally.score,
                "updated_at": now or utc_now(),
            }
        )


class CommentFilter(DomainModel):
    """Filter, ordering and page for comment listings.

    Soft-deleted comments are never matched. A ``limit`` of None returns
    every match.
    """

    root_id: Optional[RootId] = None
    user_id: Optional[UserId] = None
    parent_id: Optional[CommentId] = None
    max_depth: Optional[int] = Field(default=None, ge=0)

    is_edited: Optional[bool] = None
    min_edits: Optional[int] = Field(default=None, ge=0)
    max_edits: Optional[int] = Field(default=None, ge=0)

    sort_by: SortField = SortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC
    limit: Optional[int] = Field(default=None, ge=1)
    offset: int = Field(default=0, ge=0)

    def matches(self, comment: Comment) -> bool:
        """Return True if ``comment`` passes every filter (ignores paging)."""
        if comment.is_deleted:
            return False
        if self.root_id is not None and comment.root_id != self.root_id:
            return False
        if self.user_id is not None and comment.user_id != self.user_id:
            return False
        if self.parent_id is not None and comment.parent_id != self.parent_id:
            return False
        if self.max_depth is not None and comment.depth > self.max_depth:
            return False
        if self.is_edited is not None and comment.is_edited != self.is_edited:
            return False
        if self.min_edits is not None and comment.edit_count < self.min_edits:
            return False
        if self.max_edits is not None and comment.edit_count > self.max_edits:
            return False
        return True


class CommentStats(DomainModel):
    """Aggregate figures over the live comments of one root."""

    root_id: RootId
    total_count: int = 0
    total_score: int = 0
    max_depth: int = 0
    recent_count: int = 0  # Created in the last 24 hours

    edited_count: int = 0
    total_edits: int = 0
    edit_rate: float = 0.0  # Percentage of comments that were edited
    avg_edits_per_comment: float = 0.0  # Per edited comment
