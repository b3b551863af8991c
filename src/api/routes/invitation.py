from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from src.api.error import parse_uuid, raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.invites import (
    CreateInviteUseCase,
    GetInviteInfoUseCase,
    InviteInfo,
    JoinViaInviteResponse,
    JoinViaInviteUseCase,
)
from src.depends import get_current_user_id, get_unit_of_work
from src.domain.entities import CommunityRole

router = APIRouter(tags=["Invitations"])


class CreateInviteRequest(BaseModel):
    """
    Create invite HTTP request payload

    Validates incoming request for inviting users into a community.
    """

    role: CommunityRole = Field(CommunityRole.member, description="Role granted on acceptance")
    email: Optional[EmailStr] = Field(None, description="Restrict the invite to this address")
    expires_in_days: Optional[int] = Field(None, description="Invite lifetime in days")


@router.post(
    "/communities/{community_id}/invites",
    status_code=status.HTTP_201_CREATED,
    response_model=InviteInfo,
)
async def create_invite(
    community_id: str,
    request: CreateInviteRequest,
    actor_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create a community invite

    Raises:
        - 400 Bad Request: INVALID_EXPIRY
        - 403 Forbidden: FORBIDDEN, INSUFFICIENT_RANK
        - 404 Not Found: COMMUNITY_NOT_FOUND
    """
    community_uuid = parse_uuid(community_id, "INVALID_COMMUNITY_ID")
    use_case = CreateInviteUseCase(
        uow,
        default_expiry_days=ApplicationConfig.INVITE_DEFAULT_EXPIRY_DAYS,
        max_expiry_days=ApplicationConfig.INVITE_MAX_EXPIRY_DAYS,
        org_admin_implicit_access=ApplicationConfig.ORG_ADMIN_IMPLICIT_COMMUNITY_ACCESS,
    )
    result = await use_case.execute(
        actor_id,
        community_uuid,
        role=request.role,
        email=str(request.email) if request.email else None,
        expires_in_days=request.expires_in_days,
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/invites/{code}", status_code=status.HTTP_200_OK, response_model=InviteInfo)
async def get_invite(
    code: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Invite details for the join page (no session required)

    Raises:
        - 404 Not Found: INVITE_NOT_FOUND
        - 409 Conflict: INVITE_ALREADY_USED
        - 410 Gone: INVITE_EXPIRED
    """
    result = await GetInviteInfoUseCase(uow).execute(code)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/invites/{code}/accept",
    status_code=status.HTTP_200_OK,
    response_model=JoinViaInviteResponse,
)
async def accept_invite(
    code: str,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Accept an invite, bypassing the request workflow

    Raises:
        - 400 Bad Request: INVITE_EMAIL_MISMATCH, CROSS_ORG_INVITE
        - 404 Not Found: INVITE_NOT_FOUND
        - 409 Conflict: INVITE_ALREADY_USED
        - 410 Gone: INVITE_EXPIRED
    """
    result = await JoinViaInviteUseCase(uow).execute(user_id, code)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
