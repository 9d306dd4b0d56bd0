"""Shared query parameters for comment listings."""

from fastapi import Query

from arbor.application.usecase.comment import ListOptions
from arbor.domain.value import SortField, SortOrder


def list_options(
    parent_id: str | None = Query(default=None),
    max_depth: int | None = Query(default=None, ge=0),
    is_edited: bool | None = Query(default=None),
    min_edits: int | None = Query(default=None, ge=0),
    max_edits: int | None = Query(default=None, ge=0),
    sort_by: SortField = Query(default=SortField.CREATED_AT),
    sort_order: SortOrder = Query(default=SortOrder.DESC),
    limit: int | None = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
) -> ListOptions:
    """Collect filter, ordering and paging parameters into ListOptions."""
    return ListOptions(
        parent_id=parent_id,
        max_depth=max_depth,
        is_edited=is_edited,
        min_edits=min_edits,
        max_edits=max_edits,
        sort_by=sort_by,
        sort_order=sort_order,
        limit=limit,
        offset=offset,
    )
