"""
Remove User From Community Use Case

Handles a community manager kicking a member or follower.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.permissions import ServerPermissions
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, CommunityRole, MembershipType
from src.domain.permissions import Action
from src.domain.roles import APP_ADMIN_RANK, can_kick_member

from .dtos import StatusResponse

logger = logging.getLogger(__name__)


class RemoveUserFromCommunityUseCase:
    """
    Use case for removing a user from a community.

    Business Rules:
    - Actor needs manage_community_members in the community (FORBIDDEN)
    - Target must have a row in the community (MEMBERSHIP_NOT_FOUND)
    - Nobody kicks themselves (CANNOT_MODIFY_SELF); leaving is a separate path
    - The creator can only be removed by an app admin (CANNOT_MODIFY_CREATOR)
    - Actor must outrank the target (INSUFFICIENT_RANK): moderators remove
      members only, admins remove moderators, members and fellow admins
    - Removing an admin also needs remove_community_admin (FORBIDDEN)
    - Deletes the row and every request of the target in the community
    """

    def __init__(self, uow: UnitOfWork, org_admin_implicit_access: bool = False):
        self.uow = uow
        self.org_admin_implicit_access = org_admin_implicit_access

    async def execute(
        self, actor_id: UUID, community_id: UUID, target_user_id: UUID
    ) -> Result[StatusResponse]:
        """
        Execute remove user use case.

        Args:
            actor_id: User performing the removal
            community_id: Community to remove from
            target_user_id: User being removed

        Returns:
            Result with StatusResponse, or Error
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
                community_id, Action.MANAGE_COMMUNITY_MEMBERS
            )
            if not allowed:
                return Return.err(
                    Error("FORBIDDEN", "You do not have permission to remove members")
                )

            target = await self.uow.community_members.get_by_user_and_community(
                target_user_id, community_id
            )
            if target is None:
                return Return.err(
                    Error("MEMBERSHIP_NOT_FOUND", "User is not in this community")
                )

            if actor_id == target_user_id:
                return Return.err(
                    Error("CANNOT_MODIFY_SELF", "Use leave to remove yourself")
                )

            actor_rank = permissions.community_rank(community_id)
            is_creator = community.created_by == target_user_id
            if is_creator and actor_rank < APP_ADMIN_RANK:
                return Return.err(
                    Error(
                        "CANNOT_MODIFY_CREATOR",
                        "Only an app admin can remove the community creator",
                    )
                )

            # Followers hold no community role
            target_role = (
                target.role if target.membership_type == MembershipType.member else None
            )
            if not can_kick_member(actor_rank, target_role, is_creator, actor_is_target=False):
                return Return.err(
                    Error(
                        "INSUFFICIENT_RANK",
                        "You cannot remove a user of the same or higher role",
                    )
                )

            if target_role == CommunityRole.admin:
                may_remove_admin = await permissions.check_community_permission(
                    community_id, Action.REMOVE_COMMUNITY_ADMIN
                )
                if not may_remove_admin:
                    return Return.err(
                        Error("FORBIDDEN", "You do not have permission to remove admins")
                    )

            await self.uow.community_members.delete(target)
            deleted_requests = await self.uow.member_requests.delete_by_user_and_community(
                target_user_id, community_id
            )

            await self.uow.audit_events.create(
                AuditEvent(
                    org_id=community.org_id,
                    community_id=community_id,
                    user_id=actor_id,
                    action="member_removed",
                    event_metadata={
                        "removed_user_id": str(target_user_id),
                        "removed_user_role": target.role.value,
                        "membership_type": target.membership_type.value,
                        "deleted_requests": deleted_requests,
                    },
                )
            )

            await self.uow.commit()
            logger.info(
                "User %s removed from community %s by %s",
                target_user_id,
                community_id,
                actor_id,
            )
            return Return.ok(StatusResponse(status="removed"))
