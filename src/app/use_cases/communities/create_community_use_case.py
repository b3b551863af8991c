"""
Create Community Use Case
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.permissions import ServerPermissions
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    AuditEvent,
    Community,
    CommunityMember,
    CommunityMemberStatus,
    CommunityRole,
    MembershipType,
)
from src.domain.permissions import Action

from .dtos import CommunityInfo, CreateCommunityCommand

logger = logging.getLogger(__name__)


class CreateCommunityUseCase:
    """
    Use case for creating a community.

    Business Rules:
    - App admins create anywhere, including communities without an org
    - Everyone else needs create_community in their org scope and may only
      create inside their own organization (FORBIDDEN)
    - Slug must be unique (SLUG_TAKEN)
    - Creator becomes an admin member of the new community
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor_id: UUID, command: CreateCommunityCommand
    ) -> Result[CommunityInfo]:
        """
        Execute create community use case.

        Args:
            actor_id: User creating the community
            command: Validated community fields

        Returns:
            Result with CommunityInfo, or Error
        """
        async with self.uow:
            perms_result = await ServerPermissions.from_user_id(self.uow, actor_id)
            if perms_result.is_err():
                return Return.err(perms_result.error)
            permissions = perms_result.value

            org_id = command.org_id
            if permissions.is_app_admin():
                if org_id is not None and await self.uow.orgs.get_by_id(org_id) is None:
                    return Return.err(Error("ORG_NOT_FOUND", "Organization not found"))
            else:
                if org_id is None:
                    org_id = permissions.get_org_id()
                if (
                    org_id is None
                    or org_id != permissions.get_org_id()
                    or not permissions.check_org_permission(Action.CREATE_COMMUNITY)
                ):
                    return Return.err(
                        Error(
                            "FORBIDDEN",
                            "You do not have permission to create communities here",
                        )
                    )

            if await self.uow.communities.get_by_slug(command.slug) is not None:
                return Return.err(
                    Error("SLUG_TAKEN", f"Slug '{command.slug}' is already in use")
                )

            community = await self.uow.communities.create(
                Community(
                    name=command.name,
                    slug=command.slug,
                    description=command.description,
                    type=command.type,
                    post_creation_min_role=command.post_creation_min_role,
                    org_id=org_id,
                    created_by=actor_id,
                )
            )
            await self.uow.community_members.create(
                CommunityMember(
                    user_id=actor_id,
                    community_id=community.id,
                    role=CommunityRole.admin,
                    membership_type=MembershipType.member,
                    status=CommunityMemberStatus.active,
                )
            )
            await self.uow.audit_events.create(
                AuditEvent(
                    org_id=org_id,
                    community_id=community.id,
                    user_id=actor_id,
                    action="community_created",
                    event_metadata={"slug": community.slug, "type": community.type.value},
                )
            )

            await self.uow.commit()
            logger.info("Community %s (%s) created by %s", community.id, community.slug, actor_id)
            return Return.ok(CommunityInfo.from_entity(community))
