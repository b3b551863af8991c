"""
Create Invite Use Case

Generates a single-use invite code into a community.
"""

import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.permissions import ServerPermissions
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, CommunityInvite, CommunityRole
from src.domain.permissions import Action
from src.domain.roles import community_role_rank

from .dtos import InviteInfo

logger = logging.getLogger(__name__)


class CreateInviteUseCase:
    """
    Use case for inviting users into a community.

    Business Rules:
    - Actor needs invite_community_members (FORBIDDEN)
    - Inviting as admin also needs assign_community_admin
    - Actor cannot invite above their own rank (INSUFFICIENT_RANK)
    - Expiry between 1 and max_expiry_days days (INVALID_EXPIRY)
    - Code is random and URL-safe
    - Email, when given, restricts who can accept
    """

    def __init__(
        self,
        uow: UnitOfWork,
        default_expiry_days: int = 7,
        max_expiry_days: int = 30,
        org_admin_implicit_access: bool = False,
    ):
        self.uow = uow
        self.default_expiry_days = default_expiry_days
        self.max_expiry_days = max_expiry_days
        self.org_admin_implicit_access = org_admin_implicit_access

    async def execute(
        self,
        actor_id: UUID,
        community_id: UUID,
        role: CommunityRole = CommunityRole.member,
        email: Optional[str] = None,
        expires_in_days: Optional[int] = None,
    ) -> Result[InviteInfo]:
        """
        Execute create invite use case.

        Args:
            actor_id: User creating the invite
            community_id: Community to invite into
            role: Role granted on acceptance
            email: Optional address the invite is restricted to
            expires_in_days: Lifetime in days (default_expiry_days when omitted)

        Returns:
            Result with InviteInfo (code and link), or Error
        """
        days = self.default_expiry_days if expires_in_days is None else expires_in_days
        if days < 1 or days > self.max_expiry_days:
            return Return.err(
                Error(
                    "INVALID_EXPIRY",
                    f"Expiry must be between 1 and {self.max_expiry_days} days",
                )
            )

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
                community_id, Action.INVITE_COMMUNITY_MEMBERS
            )
            if allowed and role == CommunityRole.admin:
                allowed = await permissions.check_community_permission(
                    community_id, Action.ASSIGN_COMMUNITY_ADMIN
                )
            if not allowed:
                return Return.err(
                    Error("FORBIDDEN", "You do not have permission to invite members")
                )

            if community_role_rank(role) > permissions.community_rank(community_id):
                return Return.err(
                    Error("INSUFFICIENT_RANK", "You cannot invite above your own role")
                )

            now = datetime.utcnow()
            invite = await self.uow.invites.create(
                CommunityInvite(
                    community_id=community_id,
                    email=email.lower() if email else None,
                    code=secrets.token_urlsafe(24),
                    role=role,
                    org_id=community.org_id,
                    created_by=actor_id,
                    created_at=now,
                    expires_at=now + timedelta(days=days),
                )
            )
            await self.uow.audit_events.create(
                AuditEvent(
                    org_id=community.org_id,
                    community_id=community_id,
                    user_id=actor_id,
                    action="invite_created",
                    event_metadata={
                        "invite_id": str(invite.id),
                        "role": role.value,
                        "email": invite.email,
                    },
                )
            )

            await self.uow.commit()
            logger.info("Invite %s created for community %s", invite.id, community_id)
            return Return.ok(InviteInfo.from_entity(invite, community))
