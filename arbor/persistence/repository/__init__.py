"""PostgreSQL repository implementations."""

from arbor.persistence.repository.comment import PostgresCommentRepository

__all__ = [
    "PostgresCommentRepository",
]
