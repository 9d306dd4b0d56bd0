"""Test configuration and fixtures."""

from uuid import uuid4

import logfire
import pytest

from arbor.domain.model import Comment
from arbor.domain.value import CommentId, RootId, UserId

# Keep spans local; no console noise and nothing sent to the cloud
logfire.configure(send_to_logfire=False, console=False)


def make_comment(
    root_id: str = "post-1",
    user_id: str = "alice",
    content: str = "Test comment",
    parent_id: CommentId | None = None,
    **fields,
) -> Comment:
    """Build an unsaved comment for repository tests."""
    return Comment(
        id=CommentId(uuid4()),
        root_id=RootId(root_id),
        user_id=UserId(user_id),
        parent_id=parent_id,
        content=content,
        **fields,
    )


@pytest.fixture
def root_id() -> RootId:
    """A root ID unique to the test."""
    return RootId(f"post-{uuid4().hex[:8]}")
