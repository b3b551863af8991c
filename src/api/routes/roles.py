"""
Community Role API Routes
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from config import ApplicationConfig
from src.api.error import parse_uuid, raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.roles import (
    AssignAdminUseCase,
    AssignModeratorUseCase,
    ChangeCommunityRoleUseCase,
    RemoveAdminUseCase,
    RemoveModeratorUseCase,
    RoleChangeResponse,
)
from src.depends import get_current_user_id, get_unit_of_work

router = APIRouter(prefix="/communities", tags=["Community Roles"])


async def _change_role(
    use_case: ChangeCommunityRoleUseCase, actor_id: UUID, community_id: str, user_id: str
):
    community_uuid = parse_uuid(community_id, "INVALID_COMMUNITY_ID")
    target_id = parse_uuid(user_id, "INVALID_USER_ID")
    result = await use_case.execute(actor_id, community_uuid, target_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


def _implicit_access() -> bool:
    return ApplicationConfig.ORG_ADMIN_IMPLICIT_COMMUNITY_ACCESS


@router.post(
    "/{community_id}/moderators/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=RoleChangeResponse,
)
async def assign_moderator(
    community_id: str,
    user_id: str,
    actor_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Promote a member to moderator

    Raises:
        - 400 Bad Request: NOT_A_MEMBER
        - 403 Forbidden: FORBIDDEN, INSUFFICIENT_RANK, CANNOT_MODIFY_CREATOR
        - 409 Conflict: ALREADY_MODERATOR, ALREADY_ADMIN, CANNOT_MODIFY_SELF
    """
    use_case = AssignModeratorUseCase(uow, org_admin_implicit_access=_implicit_access())
    return await _change_role(use_case, actor_id, community_id, user_id)


@router.delete(
    "/{community_id}/moderators/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=RoleChangeResponse,
)
async def remove_moderator(
    community_id: str,
    user_id: str,
    actor_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = RemoveModeratorUseCase(uow, org_admin_implicit_access=_implicit_access())
    return await _change_role(use_case, actor_id, community_id, user_id)


@router.post(
    "/{community_id}/admins/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=RoleChangeResponse,
)
async def assign_admin(
    community_id: str,
    user_id: str,
    actor_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = AssignAdminUseCase(uow, org_admin_implicit_access=_implicit_access())
    return await _change_role(use_case, actor_id, community_id, user_id)


@router.delete(
    "/{community_id}/admins/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=RoleChangeResponse,
)
async def remove_admin(
    community_id: str,
    user_id: str,
    actor_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = RemoveAdminUseCase(uow, org_admin_implicit_access=_implicit_access())
    return await _change_role(use_case, actor_id, community_id, user_id)
