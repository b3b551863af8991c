"""
Change App Role Use Case

Handles changing a user's platform-wide role.
"""

import logging
from typing import Any, Dict
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.permissions import ServerPermissions
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AppRole, AuditEvent

logger = logging.getLogger(__name__)


class ChangeAppRoleUseCase:
    """
    Use case for changing a user's app role.

    Business Rules:
    - Only app admins can change app roles (FORBIDDEN)
    - App admins cannot demote themselves (CANNOT_MODIFY_SELF)
    - Validate role is valid (INVALID_ROLE)
    - Target user must exist
    - Creates audit event for compliance tracking
    - Sessions carry only the user id, so the change applies on the next request
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor_id: UUID, target_user_id: UUID, new_role: str
    ) -> Result[Dict[str, Any]]:
        """
        Execute change app role use case.

        Args:
            actor_id: App admin making the change
            target_user_id: User whose role is being changed
            new_role: New role to assign (user/admin)

        Returns:
            Result with updated user info, or Error
        """
        try:
            app_role = AppRole(new_role)
        except ValueError:
            return Return.err(
                Error(
                    "INVALID_ROLE",
                    f"Invalid role: {new_role}. Must be one of: user, admin",
                )
            )

        async with self.uow:
            perms_result = await ServerPermissions.from_user_id(self.uow, actor_id)
            if perms_result.is_err():
                return Return.err(perms_result.error)

            if not perms_result.value.is_app_admin():
                return Return.err(
                    Error("FORBIDDEN", "Only app admins can change app roles")
                )

            if actor_id == target_user_id:
                return Return.err(
                    Error("CANNOT_MODIFY_SELF", "You cannot change your own role")
                )

            target = await self.uow.users.get_by_id(target_user_id)
            if target is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            old_role = target.role.value
            target.role = app_role
            await self.uow.users.update(target)

            await self.uow.audit_events.create(
                AuditEvent(
                    org_id=target.org_id,
                    user_id=actor_id,
                    action="app_role_changed",
                    event_metadata={
                        "target_user_id": str(target_user_id),
                        "old_role": old_role,
                        "new_role": app_role.value,
                    },
                )
            )

            await self.uow.commit()
            logger.info(
                "App role of %s changed %s -> %s by %s",
                target_user_id,
                old_role,
                app_role.value,
                actor_id,
            )
            return Return.ok(
                {
                    "status": "updated",
                    "user": {"id": str(target_user_id), "role": app_role.value},
                }
            )
