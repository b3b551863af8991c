"""
Shared flow of the community role change use cases.

Each concrete use case states which action gates it, which role the target
must (or must not) hold, and which role the target ends up with.
"""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.permissions import ServerPermissions
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, CommunityMember, CommunityRole, MembershipType
from src.domain.permissions import Action
from src.domain.roles import APP_ADMIN_RANK, can_assign_role

from .dtos import RoleChangeResponse

logger = logging.getLogger(__name__)


class ChangeCommunityRoleUseCase:
    """
    Base use case for changing a member's community role.

    Business Rules:
    - Actor needs ``required_action`` in the community (FORBIDDEN)
    - Actor never changes their own role (CANNOT_MODIFY_SELF)
    - Target must be a member, not a follower (NOT_A_MEMBER)
    - The creator is only demoted by an app admin (CANNOT_MODIFY_CREATOR)
    - Actor must outrank the target, or hold admin rank when the target is an
      admin, and cannot grant above their own rank (INSUFFICIENT_RANK)
    """

    required_action: Action
    new_role: CommunityRole
    audit_action = "role_changed"

    def __init__(self, uow: UnitOfWork, org_admin_implicit_access: bool = False):
        self.uow = uow
        self.org_admin_implicit_access = org_admin_implicit_access

    def check_target_state(self, member: CommunityMember) -> Optional[Error]:
        """Error if the target's current role makes the change meaningless"""
        raise NotImplementedError

    async def execute(
        self, actor_id: UUID, community_id: UUID, target_user_id: UUID
    ) -> Result[RoleChangeResponse]:
        """
        Execute role change.

        Args:
            actor_id: User making the change
            community_id: Community the role belongs to
            target_user_id: User whose role changes

        Returns:
            Result with RoleChangeResponse, or Error
        """
        async with self.uow:
            community = await self.uow.communities.get_by_id(community_id)
            if community is None:
                return Return.err(Error("COMMUNITY_NOT_FOUND", "Community not found"))

            perms_result = await ServerPermissions.from_user_id(
                self.uow, actor_id, self.org_admin_implicit_access
            )
            if perms_result.is_err():
                return Return.err(perms_result.error)
            permissions = perms_result.value

            allowed = await permissions.check_community_permission(
                community_id, self.required_action
            )
            if not allowed:
                return Return.err(
                    Error("FORBIDDEN", "You do not have permission to change this role")
                )

            if actor_id == target_user_id:
                return Return.err(
                    Error("CANNOT_MODIFY_SELF", "You cannot change your own role")
                )

            member = await self.uow.community_members.get_by_user_and_community(
                target_user_id, community_id
            )
            if member is None or member.membership_type != MembershipType.member:
                return Return.err(
                    Error("NOT_A_MEMBER", "User is not a member of this community")
                )

            state_error = self.check_target_state(member)
            if state_error is not None:
                return Return.err(state_error)

            actor_rank = permissions.community_rank(community_id)
            is_creator = community.created_by == target_user_id
            if is_creator and actor_rank < APP_ADMIN_RANK:
                return Return.err(
                    Error(
                        "CANNOT_MODIFY_CREATOR",
                        "Only an app admin can change the creator's role",
                    )
                )

            if not can_assign_role(actor_rank, member.role, self.new_role, is_creator):
                return Return.err(
                    Error(
                        "INSUFFICIENT_RANK",
                        "You cannot change the role of a user of the same or higher role",
                    )
                )

            old_role = member.role
            member.role = self.new_role
            member.updated_at = datetime.utcnow()
            await self.uow.community_members.update(member)

            await self.uow.audit_events.create(
                AuditEvent(
                    org_id=community.org_id,
                    community_id=community_id,
                    user_id=actor_id,
                    action=self.audit_action,
                    event_metadata={
                        "target_user_id": str(target_user_id),
                        "old_role": old_role.value,
                        "new_role": self.new_role.value,
                    },
                )
            )

            await self.uow.commit()
            logger.info(
                "Role of %s in community %s changed %s -> %s by %s",
                target_user_id,
                community_id,
                old_role.value,
                self.new_role.value,
                actor_id,
            )
            return Return.ok(
                RoleChangeResponse(
                    user_id=str(target_user_id),
                    community_id=str(community_id),
                    old_role=old_role.value,
                    new_role=self.new_role.value,
                )
            )
