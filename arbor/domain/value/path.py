"""Materialized path encoding for comment trees.

A comment's path is the chain of ancestor IDs ending with its own ID, joined
by ``PATH_DELIMITER``::

    top-level comment   A           depth 0
    reply               A.B         depth 1
    reply to the reply  A.B.C       depth 2

IDs are canonical UUID strings, which never contain the delimiter. Paths are
written once at creation and never rewritten.
"""

from uuid import UUID

from arbor.domain.value.identifiers import CommentId

PATH_DELIMITER = "."


def derive_child_path(
    child_id: CommentId,
    parent_path: str | None = None,
    parent_depth: int | None = None,
) -> tuple[str, int]:
    """Compute the path and depth of a new comment.

    Args:
        child_id: ID of the comment being created
        parent_path: Path of the parent, or None for a top-level comment
        parent_depth: Depth of the parent, or None for a top-level comment

    Returns:
        Tuple of (path, depth)
    """
    if parent_path is None:
        return str(child_id), 0
    if parent_depth is None:
        raise ValueError("parent_depth is required when parent_path is given")
    return f"{parent_path}{PATH_DELIMITER}{child_id}", parent_depth + 1


def split_path(path: str) -> list[CommentId]:
    """Return the IDs along ``path``, from the top-level ancestor to the node itself."""
    return [CommentId(UUID(part)) for part in path.split(PATH_DELIMITER)]


def is_descendant_prefix(path: str, ancestor_path: str) -> bool:
    """Return True if ``path`` is ``ancestor_path`` or lies in its subtree."""
    return path == ancestor_path or path.startswith(ancestor_path + PATH_DELIMITER)


def descendant_pattern(ancestor_path: str) -> str:
    """SQL LIKE pattern matching strict descendants of ``ancestor_path``."""
    return f"{ancestor_path}{PATH_DELIMITER}%"
