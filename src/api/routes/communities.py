"""
Community API Routes

Community creation, postable communities and the community audit trail.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from config import ApplicationConfig
from src.api.error import parse_uuid, raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.communities import (
    AuditEventsResponse,
    CommunityInfo,
    CreateCommunityCommand,
    CreateCommunityUseCase,
    GetCommunityAuditEventsUseCase,
    GetPostableCommunitiesUseCase,
    PostableCommunityInfo,
)
from src.depends import get_current_user_id, get_unit_of_work

router = APIRouter(prefix="/communities", tags=["Community"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CommunityInfo)
async def create_community(
    request: CreateCommunityCommand,
    actor_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create a community; the creator becomes its admin

    Raises:
        - 403 Forbidden: FORBIDDEN (no create_community in the target org)
        - 404 Not Found: ORG_NOT_FOUND
        - 409 Conflict: SLUG_TAKEN
    """
    result = await CreateCommunityUseCase(uow).execute(actor_id, request)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/postable",
    status_code=status.HTTP_200_OK,
    response_model=List[PostableCommunityInfo],
)
async def get_postable_communities(
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Communities the caller may create posts in, each with the reason"""
    result = await GetPostableCommunitiesUseCase(uow).execute(user_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/{community_id}/audit-events",
    status_code=status.HTTP_200_OK,
    response_model=AuditEventsResponse,
)
async def get_community_audit_events(
    community_id: str,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of events to return"),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
):
    """
    Membership and role audit trail of a community, newest first

    Query Parameters:
        - limit: Maximum number of events to return (1-100, default 50)
        - cursor: Pagination cursor for fetching next page

    Raises:
        - 403 Forbidden: FORBIDDEN (needs manage_community_members)
        - 404 Not Found: COMMUNITY_NOT_FOUND
    """
    community_uuid = parse_uuid(community_id, "INVALID_COMMUNITY_ID")
    use_case = GetCommunityAuditEventsUseCase(
        uow, org_admin_implicit_access=ApplicationConfig.ORG_ADMIN_IMPLICIT_COMMUNITY_ACCESS
    )
    result = await use_case.execute(user_id, community_uuid, limit=limit, cursor=cursor)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
