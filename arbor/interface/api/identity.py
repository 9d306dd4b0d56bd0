"""Caller identity resolution.

Authentication happens upstream; the gateway forwards the authenticated user
in the ``X-User-ID`` header. A ``user_id`` query parameter is accepted for
tools that cannot set headers.
"""

from typing import Annotated

from fastapi import Depends, Header, Query

from arbor.domain.value import MAX_EXTERNAL_ID_LENGTH
from arbor.interface.error import MissingIdentityError


def get_caller_id(
    x_user_id: str | None = Header(default=None, max_length=MAX_EXTERNAL_ID_LENGTH),
    user_id: str | None = Query(default=None, max_length=MAX_EXTERNAL_ID_LENGTH),
) -> str:
    """Return the caller's user ID.

    Raises:
        MissingIdentityError: If neither the header nor the query param is set
    """
    caller = (x_user_id or user_id or "").strip()
    if not caller:
        raise MissingIdentityError()
    return caller


CallerId = Annotated[str, Depends(get_caller_id)]
