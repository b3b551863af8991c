"""
Get Permissions Use Case

Loads the calling user's roles for the session.
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from libs.result import Result, Return
from src.app.services.permissions import ServerPermissions
from src.app.services.unit_of_work import UnitOfWork


class CommunityRoleInfo(BaseModel):
    community_id: str
    role: str
    org_id: Optional[str] = None


class PermissionsResponse(BaseModel):
    """Roles of the caller; the client derives UI state from these"""

    user_id: str
    app_role: Optional[str] = None
    org_role: Optional[str] = None
    org_id: Optional[str] = None
    community_roles: List[CommunityRoleInfo]


class GetPermissionsUseCase:
    """
    Use case for reading the caller's roles.

    Business Rules:
    - Snapshot is loaded fresh on every call, never cached
    - Missing user -> USER_NOT_FOUND
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[PermissionsResponse]:
        async with self.uow:
            perms_result = await ServerPermissions.from_user_id(self.uow, user_id)
            if perms_result.is_err():
                return Return.err(perms_result.error)
            permissions = perms_result.value

            app_role = permissions.get_app_role()
            org_role = permissions.get_org_role()
            org_id = permissions.get_org_id()
            return Return.ok(
                PermissionsResponse(
                    user_id=str(user_id),
                    app_role=app_role.value if app_role else None,
                    org_role=org_role.value if org_role else None,
                    org_id=str(org_id) if org_id else None,
                    community_roles=[
                        CommunityRoleInfo(
                            community_id=str(r.community_id),
                            role=r.role.value,
                            org_id=str(r.org_id) if r.org_id else None,
                        )
                        for r in permissions.get_community_roles()
                    ],
                )
            )
