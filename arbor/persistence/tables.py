"""SQLAlchemy table definitions for arbor.

These table definitions are used for SQLAlchemy Core queries.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    SmallInteger,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("root_id", String(255), nullable=False),  # External content ID
    Column(
        "parent_id",
        UUID(as_uuid=True),
        ForeignKey("comments.id", ondelete="RESTRICT"),
        nullable=True,
    ),
    Column("user_id", String(255), nullable=False),  # External user ID
    Column("content", Text, nullable=False),
    Column("media_url", Text, nullable=True),
    Column("link_url", Text, nullable=True),
    Column("upvotes", Integer, nullable=False, server_default="0"),
    Column("downvotes", Integer, nullable=False, server_default="0"),
    Column("score", Integer, nullable=False, server_default="0"),
    Column("depth", Integer, nullable=False, server_default="0"),
    Column("path", Text, nullable=False),  # Dot-joined ancestor IDs plus own ID
    Column("is_deleted", Boolean, nullable=False, server_default="false"),
    # Edit tracking
    Column("is_edited", Boolean, nullable=False, server_default="false"),
    Column("edit_count", Integer, nullable=False, server_default="0"),
    Column("original_content", Text, nullable=True),
    Column("content_updated_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "char_length(content) BETWEEN 1 AND 10000", name="ck_comments_content_length"
    ),
    CheckConstraint("upvotes >= 0", name="ck_comments_upvotes"),
    CheckConstraint("downvotes >= 0", name="ck_comments_downvotes"),
    CheckConstraint("depth >= 0", name="ck_comments_depth"),
    CheckConstraint("edit_count >= 0", name="ck_comments_edit_count"),
)

Index(
    "idx_comments_root_created",
    comments_table.c.root_id,
    comments_table.c.created_at.desc(),
    postgresql_where=comments_table.c.is_deleted.is_(False),
)
Index(
    "idx_comments_root_score",
    comments_table.c.root_id,
    comments_table.c.score.desc(),
    postgresql_where=comments_table.c.is_deleted.is_(False),
)
Index(
    "idx_comments_user_created",
    comments_table.c.user_id,
    comments_table.c.created_at.desc(),
    postgresql_where=comments_table.c.is_deleted.is_(False),
)
Index("idx_comments_parent_id", comments_table.c.parent_id)
# text_pattern_ops lets LIKE 'prefix%' use the index
Index(
    "idx_comments_path",
    comments_table.c.path,
    postgresql_ops={"path": "text_pattern_ops"},
)
Index(
    "idx_comments_deleted_updated",
    comments_table.c.updated_at,
    postgresql_where=comments_table.c.is_deleted.is_(True),
)

# ============================================================================
# VOTES TABLE
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "comment_id",
        UUID(as_uuid=True),
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", String(255), nullable=False),
    Column("vote_type", SmallInteger, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("vote_type IN (-1, 1)", name="ck_votes_vote_type"),
    UniqueConstraint("comment_id", "user_id", name="uq_votes_comment_user"),
)

Index("idx_votes_user_id", votes_table.c.user_id)
