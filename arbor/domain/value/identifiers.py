"""Strongly typed identifiers for arbor domain entities.

Comment and vote IDs are generated here and are UUIDs. Root and user IDs come
from the embedding application and are treated as opaque strings.
"""

from typing import NewType
from uuid import UUID

CommentId = NewType("CommentId", UUID)
VoteId = NewType("VoteId", UUID)

# External identifiers
RootId = NewType("RootId", str)
UserId = NewType("UserId", str)

# Root and user IDs are stored in VARCHAR(255) columns
MAX_EXTERNAL_ID_LENGTH = 255
