"""
Member endpoints for API v1.

These routes expose the ``/members`` resource: a filtered, sorted
listing plus create, partial update and delete.  Errors are returned
as plain text (``Name is required``, ``Member not found``) by the
exception handlers registered in ``main.py``.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import PlainTextResponse

from club_directory_api.app.api.deps import get_member_store
from club_directory_api.app.schemas.member import MemberCreate, MemberRead, MemberUpdate
from club_directory_api.app.services.member_query import MemberQuery, MemberQueryEngine
from club_directory_api.app.services.member_store import MemberStore


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[MemberRead], response_model_exclude_none=True)
async def list_members(
    query: Optional[str] = Query(None, description="Case‑insensitive substring of the member name"),
    name: Optional[str] = Query(None, description="Alias of ``query`` used by older clients"),
    rating: Optional[str] = Query(None, description="Exact rating; leading integer is used, no integer matches nothing"),
    activities: Optional[str] = Query(None, description="Activity the member must have"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="`name` or `activities`"),
    order: Optional[str] = Query(None, description="`asc` (default) or `desc`"),
    store: MemberStore = Depends(get_member_store),
) -> List[Dict[str, Any]]:
    """List members with search, filters and sorting.

    - **query** (or **name**): case‑insensitive substring of the name.
    - **rating**: exact rating; the leading integer of the value is used.
    - **activities**: an activity the member must have.
    - **sortBy**: `name` or `activities`; **order**: `asc`/`desc`.
    """
    params = MemberQuery(
        query=query or name,
        rating=rating,
        activities=activities,
        sort_by=sort_by,
        order=order,
    )
    logger.debug("GET /members with filters %s", params)
    return MemberQueryEngine.run(store.list(), params)


@router.post(
    "",
    response_model=MemberRead,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_member(
    member_in: Optional[MemberCreate] = Body(None),
    store: MemberStore = Depends(get_member_store),
) -> Dict[str, Any]:
    """Create a member.

    ``name`` is required; ``activities`` defaults to an empty list.
    The response contains the id assigned by the store.
    """
    payload = member_in.model_dump(exclude_unset=True) if member_in else {}
    return store.create(payload)


@router.patch("/{member_id}", response_model=Dict[str, Any])
async def update_member(
    member_id: str,
    patch: Optional[MemberUpdate] = Body(None),
    store: MemberStore = Depends(get_member_store),
) -> Dict[str, Any]:
    """Partially update a member.

    Only the fields present in the body are changed.  The response
    echoes the accepted patch, not the merged member; clients that
    need the full record should list members again.
    """
    changes = patch.model_dump(exclude_unset=True) if patch else {}
    return store.update(member_id, changes)


@router.delete("/{member_id}", response_class=PlainTextResponse)
async def delete_member(
    member_id: str,
    store: MemberStore = Depends(get_member_store),
) -> PlainTextResponse:
    """Delete a member."""
    store.delete(member_id)
    return PlainTextResponse("Member removed successfully")
