"""initial_schema

Create the comment tree schema:
- Comments (materialized path, denormalized vote counters, soft delete)
- Votes (one per user per comment, +1 or -1)

Revision ID: 3c1f9a2d7b40
Revises:
Create Date: 2026-01-12 10:04:18.512903

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a2d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("root_id", sa.String(length=255), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("media_url", sa.Text(), nullable=True),
        sa.Column("link_url", sa.Text(), nullable=True),
        sa.Column("upvotes", sa.Integer(), server_default="0", nullable=False),
        sa.Column("downvotes", sa.Integer(), server_default="0", nullable=False),
        sa.Column("score", sa.Integer(), server_default="0", nullable=False),
        sa.Column("depth", sa.Integer(), server_default="0", nullable=False),
        sa.Column("path", sa.Text(), nullable=False),
        sa.Column("is_deleted", sa.Boolean(), server_default="false", nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"], ondelete="RESTRICT"),
        sa.CheckConstraint(
            "char_length(content) BETWEEN 1 AND 10000",
            name="ck_comments_content_length",
        ),
        sa.CheckConstraint("upvotes >= 0", name="ck_comments_upvotes"),
        sa.CheckConstraint("downvotes >= 0", name="ck_comments_downvotes"),
        sa.CheckConstraint("depth >= 0", name="ck_comments_depth"),
    )

    # Listing indexes only cover live rows
    op.create_index(
        "idx_comments_root_created",
        "comments",
        ["root_id", sa.text("created_at DESC")],
        postgresql_where=sa.text("NOT is_deleted"),
    )
    op.create_index(
        "idx_comments_root_score",
        "comments",
        ["root_id", sa.text("score DESC")],
        postgresql_where=sa.text("NOT is_deleted"),
    )
    op.create_index(
        "idx_comments_user_created",
        "comments",
        ["user_id", sa.text("created_at DESC")],
        postgresql_where=sa.text("NOT is_deleted"),
    )
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])
    op.create_index(
        "idx_comments_path",
        "comments",
        ["path"],
        postgresql_ops={"path": "text_pattern_ops"},
    )
    op.create_index(
        "idx_comments_deleted_updated",
        "comments",
        ["updated_at"],
        postgresql_where=sa.text("is_deleted"),
    )

    # ========================================================================
    # VOTES table
    # ========================================================================
    op.create_table(
        "votes",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("comment_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("vote_type", sa.SmallInteger(), nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="CASCADE"),
        sa.CheckConstraint("vote_type IN (-1, 1)", name="ck_votes_vote_type"),
        sa.UniqueConstraint("comment_id", "user_id", name="uq_votes_comment_user"),
    )
    op.create_index("idx_votes_user_id", "votes", ["user_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_votes_user_id", table_name="votes")
    op.drop_table("votes")

    op.drop_index("idx_comments_deleted_updated", table_name="comments")
    op.drop_index("idx_comments_path", table_name="comments")
    op.drop_index("idx_comments_parent_id", table_name="comments")
    op.drop_index("idx_comments_user_created", table_name="comments")
    op.drop_index("idx_comments_root_score", table_name="comments")
    op.drop_index("idx_comments_root_created", table_name="comments")
    op.drop_table("comments")
