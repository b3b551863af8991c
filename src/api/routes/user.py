from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from uuid import UUID

from src.api.error import parse_uuid, raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users import (
    ChangeAppRoleUseCase,
    GetPermissionsUseCase,
    PermissionsResponse,
)
from src.depends import get_current_user_id, get_unit_of_work

router = APIRouter(tags=["User"])


@router.get("/permissions", status_code=status.HTTP_200_OK, response_model=PermissionsResponse)
async def get_permissions(
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Roles of the calling user

    Returns the app role, org role and every community role, loaded fresh.

    Raises:
        - 401 Unauthorized: Invalid or expired session
        - 404 Not Found: USER_NOT_FOUND
    """
    result = await GetPermissionsUseCase(uow).execute(user_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


class ChangeAppRoleRequest(BaseModel):
    role: str = Field(..., description="New app role (user/admin)")


class ChangeAppRoleResponse(BaseModel):
    status: str
    user: dict


@router.put(
    "/users/{user_id}/app-role",
    status_code=status.HTTP_200_OK,
    response_model=ChangeAppRoleResponse,
)
async def change_app_role(
    user_id: str,
    request: ChangeAppRoleRequest,
    actor_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change a user's app role (app admins only)

    Raises:
        - 400 Bad Request: INVALID_USER_ID, INVALID_ROLE
        - 403 Forbidden: FORBIDDEN
        - 404 Not Found: USER_NOT_FOUND
        - 409 Conflict: CANNOT_MODIFY_SELF
    """
    target_id = parse_uuid(user_id, "INVALID_USER_ID")
    result = await ChangeAppRoleUseCase(uow).execute(actor_id, target_id, request.role)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
