"""
Make Org Admin Use Case

Handles promoting a member of an organization to org admin.
"""

import logging
from typing import Any, Dict
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.permissions import ServerPermissions
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, OrgMember, OrgMemberRole, OrgMemberStatus
from src.domain.permissions import Action

logger = logging.getLogger(__name__)


class MakeOrgAdminUseCase:
    """
    Use case for promoting a user to admin of their organization.

    Business Rules:
    - Organization must exist (ORG_NOT_FOUND)
    - Actor is an app admin, or holds manage_org_members in that same org
      (FORBIDDEN); org admins never act on other organizations
    - Actor never promotes themselves (CANNOT_MODIFY_SELF)
    - Target must belong to the org (NOT_A_MEMBER)
    - Already an active admin -> ALREADY_ADMIN
    - The org membership row is created if missing; a pending row is
      activated along with the promotion
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor_id: UUID, org_id: UUID, target_user_id: UUID
    ) -> Result[Dict[str, Any]]:
        """
        Execute make org admin use case.

        Args:
            actor_id: User making the change
            org_id: Organization
            target_user_id: User being promoted

        Returns:
            Result with the updated org membership, or Error
        """
        async with self.uow:
            org = await self.uow.orgs.get_by_id(org_id)
            if org is None:
                return Return.err(Error("ORG_NOT_FOUND", "Organization not found"))

            perms_result = await ServerPermissions.from_user_id(self.uow, actor_id)
            if perms_result.is_err():
                return Return.err(perms_result.error)
            permissions = perms_result.value

            same_org = permissions.get_org_id() == org_id
            if not permissions.is_app_admin() and not (
                same_org and permissions.check_org_permission(Action.MANAGE_ORG_MEMBERS)
            ):
                return Return.err(
                    Error("FORBIDDEN", "You do not have permission to manage this organization")
                )

            if actor_id == target_user_id:
                return Return.err(
                    Error("CANNOT_MODIFY_SELF", "You cannot change your own role")
                )

            target = await self.uow.users.get_by_id(target_user_id)
            if target is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))
            if target.org_id != org_id:
                return Return.err(
                    Error("NOT_A_MEMBER", "User is not a member of this organization")
                )

            org_member = await self.uow.org_members.get_by_user_and_org(target_user_id, org_id)
            if org_member is None:
                org_member = await self.uow.org_members.create(
                    OrgMember(
                        user_id=target_user_id,
                        org_id=org_id,
                        role=OrgMemberRole.admin,
                        status=OrgMemberStatus.active,
                    )
                )
            elif (
                org_member.role == OrgMemberRole.admin
                and org_member.status == OrgMemberStatus.active
            ):
                return Return.err(
                    Error("ALREADY_ADMIN", "User is already an admin of this organization")
                )
            else:
                org_member.role = OrgMemberRole.admin
                org_member.status = OrgMemberStatus.active
                org_member = await self.uow.org_members.update(org_member)

            await self.uow.audit_events.create(
                AuditEvent(
                    org_id=org_id,
                    user_id=actor_id,
                    action="org_admin_granted",
                    event_metadata={"target_user_id": str(target_user_id)},
                )
            )

            await self.uow.commit()
            logger.info("User %s made admin of org %s by %s", target_user_id, org_id, actor_id)
            return Return.ok(
                {
                    "status": "updated",
                    "org_member": {
                        "user_id": str(target_user_id),
                        "org_id": str(org_id),
                        "role": org_member.role.value,
                    },
                }
            )
