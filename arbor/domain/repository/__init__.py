"""Repository interfaces for the arbor domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from arbor.domain.repository.comment import CommentRepository

__all__ = [
    "CommentRepository",
]
