"""In-memory assembly of comment forests."""

from dataclasses import dataclass, field

from arbor.domain.model.comment import Comment
from arbor.domain.value import CommentId


@dataclass
class CommentTreeNode:
    """Comment plus its replies within a fetched set."""

    comment: Comment
    children: list["CommentTreeNode"] = field(default_factory=list)

    def size(self) -> int:
        """Number of comments in this subtree, including this one."""
        return 1 + sum(child.size() for child in self.children)


def build_comment_forest(comments: list[Comment]) -> list[CommentTreeNode]:
    """Assemble a flat list of comments into a forest.

    Siblings keep the relative order they have in ``comments``. A comment
    whose parent is not part of the list (top-level, cut off by a depth
    limit, or filtered out) becomes a root of the returned forest.
    """
    nodes: dict[CommentId, CommentTreeNode] = {
        comment.id: CommentTreeNode(comment=comment) for comment in comments
    }

    roots: list[CommentTreeNode] = []
    for comment in comments:
        node = nodes[comment.id]
        parent = nodes.get(comment.parent_id) if comment.parent_id else None
        if parent is None:
            roots.append(node)
        else:
            parent.children.append(node)
    return roots
