"""Shared request/response models for comment use cases."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, ValidationError

from arbor.domain.error import InvalidArgumentError
from arbor.domain.model import Comment, CommentFilter, CommentTreeNode
from arbor.domain.value import CommentId, SortField, SortOrder


def parse_comment_id(value: str) -> CommentId:
    """Parse a comment ID string.

    Raises:
        InvalidArgumentError: If the value is not a UUID
    """
    try:
        return CommentId(UUID(value))
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"Invalid comment ID: {value!r}")


class CommentItem(BaseModel):
    """Comment item in response.

    Soft-deleted comments only appear in ancestor chains; their content and
    URLs are withheld.
    """

    comment_id: str
    root_id: str
    parent_id: str | None
    user_id: str
    content: str | None
    media_url: str | None
    link_url: str | None
    upvotes: int
    downvotes: int
    score: int
    depth: int
    path: str | None
    is_deleted: bool
    is_edited: bool
    edit_count: int
    original_content: str | None
    content_updated_at: datetime | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, comment: Comment) -> "CommentItem":
        hidden = comment.is_deleted
        return cls(
            comment_id=str(comment.id),
            root_id=comment.root_id,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            user_id=comment.user_id,
            content=None if hidden else comment.content,
            media_url=None if hidden else comment.media_url,
            link_url=None if hidden else comment.link_url,
            upvotes=comment.upvotes,
            downvotes=comment.downvotes,
            score=comment.score,
            depth=comment.depth,
            path=comment.path,
            is_deleted=comment.is_deleted,
            is_edited=comment.is_edited,
            edit_count=comment.edit_count,
            original_content=None if hidden else comment.original_content,
            content_updated_at=comment.content_updated_at,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )


class CommentTreeNodeResponse(BaseModel):
    """Comment tree node for API response.

    Recursive structure mirroring the domain tree.
    """

    comment: CommentItem
    children: list["CommentTreeNodeResponse"]

    @classmethod
    def from_domain(cls, node: CommentTreeNode) -> "CommentTreeNodeResponse":
        """Convert a domain tree node, converting children recursively."""
        return cls(
            comment=CommentItem.from_domain(node.comment),
            children=[cls.from_domain(child) for child in node.children],
        )


class ListOptions(BaseModel):
    """Filtering, ordering and paging options shared by listings."""

    parent_id: str | None = None
    max_depth: int | None = Field(default=None, ge=0)
    is_edited: bool | None = None
    min_edits: int | None = Field(default=None, ge=0)
    max_edits: int | None = Field(default=None, ge=0)
    sort_by: SortField = SortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC
    limit: int | None = Field(default=None, ge=1)
    offset: int = Field(default=0, ge=0)

    def to_filter(self) -> CommentFilter:
        """Build the domain filter (root/user scoping is added by the service)."""
        try:
            return CommentFilter(
                parent_id=parse_comment_id(self.parent_id) if self.parent_id else None,
                max_depth=self.max_depth,
                is_edited=self.is_edited,
                min_edits=self.min_edits,
                max_edits=self.max_edits,
                sort_by=self.sort_by,
                sort_order=self.sort_order,
                limit=self.limit,
                offset=self.offset,
            )
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid listing options: {e}")
