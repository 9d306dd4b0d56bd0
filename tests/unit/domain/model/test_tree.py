"""Unit tests for comment forest assembly."""

from uuid import uuid4

from arbor.domain.model import build_comment_forest
from arbor.domain.value import CommentId
from tests.conftest import make_comment


class TestBuildCommentForest:
    """Tests for build_comment_forest."""

    def test_empty_list_gives_empty_forest(self):
        assert build_comment_forest([]) == []

    def test_replies_attach_to_parents_in_input_order(self):
        """Children keep the order of the flat list."""
        # Arrange
        top = make_comment(content="top")
        first = make_comment(content="first", parent_id=top.id, depth=1)
        second = make_comment(content="second", parent_id=top.id, depth=1)
        nested = make_comment(content="nested", parent_id=first.id, depth=2)

        # Act
        forest = build_comment_forest([top, second, first, nested])

        # Assert
        assert len(forest) == 1
        assert [n.comment.content for n in forest[0].children] == ["second", "first"]
        assert forest[0].children[1].children[0].comment.content == "nested"
        assert forest[0].size() == 4

    def test_orphans_become_roots(self):
        """A reply whose parent is missing from the list is promoted."""
        # Arrange
        top = make_comment(content="top")
        orphan = make_comment(
            content="orphan", parent_id=CommentId(uuid4()), depth=11
        )

        # Act
        forest = build_comment_forest([top, orphan])

        # Assert
        assert [n.comment.content for n in forest] == ["top", "orphan"]

    def test_child_listed_before_parent_still_attaches(self):
        """Attachment does not depend on parents appearing first."""
        top = make_comment(content="top")
        reply = make_comment(content="reply", parent_id=top.id, depth=1)

        forest = build_comment_forest([reply, top])

        assert len(forest) == 1
        assert forest[0].comment.id == top.id
        assert forest[0].children[0].comment.id == reply.id
