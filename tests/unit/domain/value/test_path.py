"""Unit tests for materialized path encoding."""

from uuid import uuid4

import pytest

from arbor.domain.value import (
    CommentId,
    derive_child_path,
    descendant_pattern,
    is_descendant_prefix,
    split_path,
)


class TestDeriveChildPath:
    """Tests for derive_child_path."""

    def test_top_level_path_is_own_id(self):
        """A comment without parent has its ID as path and depth 0."""
        comment_id = CommentId(uuid4())

        path, depth = derive_child_path(comment_id)

        assert path == str(comment_id)
        assert depth == 0

    def test_reply_extends_parent_path(self):
        """A reply appends its ID to the parent's path and adds one level."""
        parent_id, child_id = CommentId(uuid4()), CommentId(uuid4())
        parent_path, parent_depth = derive_child_path(parent_id)

        path, depth = derive_child_path(child_id, parent_path, parent_depth)

        assert path == f"{parent_id}.{child_id}"
        assert depth == 1

    def test_depth_equals_number_of_delimiters(self):
        """Depth always matches the number of ancestors in the path."""
        path, depth = derive_child_path(CommentId(uuid4()))
        for _ in range(5):
            path, depth = derive_child_path(CommentId(uuid4()), path, depth)

        assert depth == 5
        assert path.count(".") == depth

    def test_parent_path_without_depth_raises(self):
        """Parent path and parent depth must be given together."""
        with pytest.raises(ValueError):
            derive_child_path(CommentId(uuid4()), parent_path="abc")


class TestSplitPath:
    """Tests for split_path."""

    def test_split_returns_ancestors_then_self(self):
        """IDs come back from the top-level ancestor down to the node."""
        ids = [CommentId(uuid4()) for _ in range(3)]
        path, depth = derive_child_path(ids[0])
        path, depth = derive_child_path(ids[1], path, depth)
        path, depth = derive_child_path(ids[2], path, depth)

        assert split_path(path) == ids

    def test_split_rejects_malformed_segment(self):
        """Segments must be UUIDs."""
        with pytest.raises(ValueError):
            split_path("not-a-uuid")


class TestDescendantMatching:
    """Tests for prefix matching helpers."""

    def test_prefix_matches_self_and_descendants(self):
        """A path lies in its own subtree and in its ancestors' subtrees."""
        parent = str(uuid4())
        child = f"{parent}.{uuid4()}"

        assert is_descendant_prefix(parent, parent)
        assert is_descendant_prefix(child, parent)
        assert not is_descendant_prefix(parent, child)

    def test_prefix_requires_segment_boundary(self):
        """A path sharing leading characters is not a descendant."""
        assert not is_descendant_prefix("abcdef", "abc")

    def test_descendant_pattern_excludes_self(self):
        """The LIKE pattern only matches strict descendants."""
        parent = str(uuid4())

        assert descendant_pattern(parent) == f"{parent}.%"
