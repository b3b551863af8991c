from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.api.error import parse_uuid, raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.orgs import MakeOrgAdminUseCase
from src.depends import get_current_user_id, get_unit_of_work

router = APIRouter(prefix="/orgs", tags=["Organization"])


class MakeOrgAdminResponse(BaseModel):
    status: str
    org_member: dict


@router.post(
    "/{org_id}/admins/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=MakeOrgAdminResponse,
)
async def make_org_admin(
    org_id: str,
    user_id: str,
    actor_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Promote an organization member to org admin

    Raises:
        - 400 Bad Request: invalid IDs, NOT_A_MEMBER
        - 403 Forbidden: FORBIDDEN
        - 404 Not Found: ORG_NOT_FOUND, USER_NOT_FOUND
        - 409 Conflict: ALREADY_ADMIN, CANNOT_MODIFY_SELF
    """
    org_uuid = parse_uuid(org_id, "INVALID_ORG_ID")
    target_id = parse_uuid(user_id, "INVALID_USER_ID")
    result = await MakeOrgAdminUseCase(uow).execute(actor_id, org_uuid, target_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
