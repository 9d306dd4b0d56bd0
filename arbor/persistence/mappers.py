"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from arbor.domain.model import Comment, Vote
from arbor.domain.value import CommentId, RootId, UserId, VoteId, VoteType


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(_uuid(row["id"])),
        root_id=RootId(row["root_id"]),
        parent_id=CommentId(_uuid(row["parent_id"])) if row.get("parent_id") else None,
        user_id=UserId(row["user_id"]),
        depth=row["depth"],
        path=row["path"],
        content=row["content"],
        media_url=row.get("media_url"),
        link_url=row.get("link_url"),
        upvotes=row["upvotes"],
        downvotes=row["downvotes"],
        score=row["score"],
        is_deleted=row["is_deleted"],
        is_edited=row.get("is_edited", False),
        edit_count=row.get("edit_count", 0),
        original_content=row.get("original_content"),
        content_updated_at=row.get("content_updated_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return comment.model_dump()


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(_uuid(row["id"])),
        comment_id=CommentId(_uuid(row["comment_id"])),
        user_id=UserId(row["user_id"]),
        vote_type=VoteType(row["vote_type"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
