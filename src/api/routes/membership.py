"""
Membership API Routes

Join/follow requests, their review, leaving, kicking and bulk org-member adds.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from src.api.error import parse_uuid, raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.membership import (
    AddOrgMembersResponse,
    AddOrgMembersToCommunityUseCase,
    ApproveRequestUseCase,
    CancelRequestUseCase,
    LeaveCommunityUseCase,
    ListOrgMembersNotInCommunityUseCase,
    ListPendingRequestsUseCase,
    ListUserPendingRequestsUseCase,
    MemberRequestInfo,
    OrgMemberInfo,
    OrgMemberToAdd,
    RejectRequestUseCase,
    RemoveUserFromCommunityUseCase,
    RequestFollowUseCase,
    RequestJoinUseCase,
    RequestOutcomeResponse,
    ReviewRequestResponse,
    StatusResponse,
)
from src.depends import get_current_user_id, get_unit_of_work

router = APIRouter(tags=["Membership"])


def _implicit_access() -> bool:
    return ApplicationConfig.ORG_ADMIN_IMPLICIT_COMMUNITY_ACCESS


class JoinRequest(BaseModel):
    message: Optional[str] = Field(None, max_length=1000, description="Note for the reviewers")


class AddOrgMembersRequest(BaseModel):
    users: List[OrgMemberToAdd] = Field(..., description="Org members and their roles")


@router.post(
    "/communities/{community_id}/join",
    status_code=status.HTTP_200_OK,
    response_model=RequestOutcomeResponse,
)
async def join_community(
    community_id: str,
    request: Optional[JoinRequest] = None,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Join a community

    Public communities approve immediately; otherwise a pending request is created.

    Raises:
        - 404 Not Found: COMMUNITY_NOT_FOUND
        - 409 Conflict: ALREADY_MEMBER, REQUEST_ALREADY_PENDING
    """
    community_uuid = parse_uuid(community_id, "INVALID_COMMUNITY_ID")
    use_case = RequestJoinUseCase(
        uow, auto_approve_public=ApplicationConfig.PUBLIC_AUTO_APPROVE_JOIN
    )
    result = await use_case.execute(
        user_id, community_uuid, request.message if request else None
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/communities/{community_id}/follow",
    status_code=status.HTTP_200_OK,
    response_model=RequestOutcomeResponse,
)
async def follow_community(
    community_id: str,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    community_uuid = parse_uuid(community_id, "INVALID_COMMUNITY_ID")
    result = await RequestFollowUseCase(uow).execute(user_id, community_uuid)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/communities/{community_id}/leave",
    status_code=status.HTTP_200_OK,
    response_model=StatusResponse,
)
async def leave_community(
    community_id: str,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Leave a community

    Raises:
        - 400 Bad Request: NOT_A_MEMBER
        - 403 Forbidden: CREATOR_CANNOT_LEAVE
    """
    community_uuid = parse_uuid(community_id, "INVALID_COMMUNITY_ID")
    result = await LeaveCommunityUseCase(uow).execute(user_id, community_uuid)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/communities/{community_id}/requests",
    status_code=status.HTTP_200_OK,
    response_model=List[MemberRequestInfo],
)
async def list_pending_requests(
    community_id: str,
    actor_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Pending requests of a community (needs manage_community_members)"""
    community_uuid = parse_uuid(community_id, "INVALID_COMMUNITY_ID")
    use_case = ListPendingRequestsUseCase(uow, org_admin_implicit_access=_implicit_access())
    result = await use_case.execute(actor_id, community_uuid)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/communities/{community_id}/requests/mine",
    status_code=status.HTTP_200_OK,
    response_model=List[MemberRequestInfo],
)
async def list_my_pending_requests(
    community_id: str,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    community_uuid = parse_uuid(community_id, "INVALID_COMMUNITY_ID")
    result = await ListUserPendingRequestsUseCase(uow).execute(user_id, community_uuid)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/requests/{request_id}/approve",
    status_code=status.HTTP_200_OK,
    response_model=ReviewRequestResponse,
)
async def approve_request(
    request_id: str,
    actor_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Approve a pending request

    Raises:
        - 403 Forbidden: FORBIDDEN
        - 404 Not Found: REQUEST_NOT_FOUND
        - 409 Conflict: REQUEST_ALREADY_PROCESSED
    """
    request_uuid = parse_uuid(request_id, "INVALID_REQUEST_ID")
    use_case = ApproveRequestUseCase(uow, org_admin_implicit_access=_implicit_access())
    result = await use_case.execute(actor_id, request_uuid)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/requests/{request_id}/reject",
    status_code=status.HTTP_200_OK,
    response_model=ReviewRequestResponse,
)
async def reject_request(
    request_id: str,
    actor_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    request_uuid = parse_uuid(request_id, "INVALID_REQUEST_ID")
    use_case = RejectRequestUseCase(uow, org_admin_implicit_access=_implicit_access())
    result = await use_case.execute(actor_id, request_uuid)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete(
    "/requests/{request_id}",
    status_code=status.HTTP_200_OK,
    response_model=StatusResponse,
)
async def cancel_request(
    request_id: str,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Withdraw one's own pending request"""
    request_uuid = parse_uuid(request_id, "INVALID_REQUEST_ID")
    result = await CancelRequestUseCase(uow).execute(user_id, request_uuid)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete(
    "/communities/{community_id}/members/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=StatusResponse,
)
async def remove_member(
    community_id: str,
    user_id: str,
    actor_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Remove a user from a community

    Raises:
        - 403 Forbidden: FORBIDDEN, INSUFFICIENT_RANK, CANNOT_MODIFY_CREATOR
        - 404 Not Found: COMMUNITY_NOT_FOUND, MEMBERSHIP_NOT_FOUND
        - 409 Conflict: CANNOT_MODIFY_SELF
    """
    community_uuid = parse_uuid(community_id, "INVALID_COMMUNITY_ID")
    target_id = parse_uuid(user_id, "INVALID_USER_ID")
    use_case = RemoveUserFromCommunityUseCase(uow, org_admin_implicit_access=_implicit_access())
    result = await use_case.execute(actor_id, community_uuid, target_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/communities/{community_id}/org-members",
    status_code=status.HTTP_200_OK,
    response_model=List[OrgMemberInfo],
)
async def list_org_members_not_in_community(
    community_id: str,
    search: Optional[str] = Query(None, description="Filter by name or email"),
    actor_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    community_uuid = parse_uuid(community_id, "INVALID_COMMUNITY_ID")
    use_case = ListOrgMembersNotInCommunityUseCase(
        uow, org_admin_implicit_access=_implicit_access()
    )
    result = await use_case.execute(actor_id, community_uuid, search=search)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/communities/{community_id}/org-members",
    status_code=status.HTTP_200_OK,
    response_model=AddOrgMembersResponse,
)
async def add_org_members(
    community_id: str,
    request: AddOrgMembersRequest,
    actor_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Add organization members to a community; existing members are skipped

    Raises:
        - 400 Bad Request: NOT_ORG_MEMBERS, INVALID_ROLE, COMMUNITY_HAS_NO_ORG
        - 403 Forbidden: FORBIDDEN, INSUFFICIENT_RANK
    """
    community_uuid = parse_uuid(community_id, "INVALID_COMMUNITY_ID")
    use_case = AddOrgMembersToCommunityUseCase(uow, org_admin_implicit_access=_implicit_access())
    result = await use_case.execute(actor_id, community_uuid, request.users)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
