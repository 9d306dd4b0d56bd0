"""add_edit_tracking

Track comment edits: whether a comment was edited, how many times, its
first content, and when the content last changed.

Revision ID: 9e4b6d15c2a8
Revises: 3c1f9a2d7b40
Create Date: 2026-02-03 16:27:51.230114

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "9e4b6d15c2a8"
down_revision: Union[str, Sequence[str], None] = "3c1f9a2d7b40"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.add_column(
        "comments",
        sa.Column("is_edited", sa.Boolean(), server_default="false", nullable=False),
    )
    op.add_column(
        "comments",
        sa.Column("edit_count", sa.Integer(), server_default="0", nullable=False),
    )
    op.add_column("comments", sa.Column("original_content", sa.Text(), nullable=True))
    op.add_column(
        "comments",
        sa.Column(
            "content_updated_at", postgresql.TIMESTAMP(timezone=True), nullable=True
        ),
    )
    op.create_check_constraint("ck_comments_edit_count", "comments", "edit_count >= 0")


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_constraint("ck_comments_edit_count", "comments", type_="check")
    op.drop_column("comments", "content_updated_at")
    op.drop_column("comments", "original_content")
    op.drop_column("comments", "edit_count")
    op.drop_column("comments", "is_edited")
