"""
Join Via Invite Use Case

Accepts an invite, bypassing the request workflow.
"""

import logging
from datetime import datetime
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    AuditEvent,
    CommunityMember,
    CommunityMemberStatus,
    MembershipType,
)
from src.domain.roles import community_role_rank

from .dtos import JoinViaInviteResponse

logger = logging.getLogger(__name__)


class JoinViaInviteUseCase:
    """
    Use case for accepting an invite.

    Business Rules:
    - Invite must exist, be unused and not expired
    - Email-targeted invites only for that email (INVITE_EMAIL_MISMATCH)
    - Users of another organization cannot join an org community
      (CROSS_ORG_INVITE)
    - No row: created with the invite role
    - Follower row or lower role: upgraded to a member with the invite role
    - Equal or higher role: left as is (never downgraded)
    - Invite is stamped used_at/used_by in the same transaction
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, code: str) -> Result[JoinViaInviteResponse]:
        """
        Execute join via invite use case.

        Args:
            user_id: User accepting the invite
            code: Invite code from the link

        Returns:
            Result with JoinViaInviteResponse, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            invite = await self.uow.invites.get_by_code(code)
            if invite is None:
                return Return.err(Error("INVITE_NOT_FOUND", "Invite not found"))
            if invite.is_used():
                return Return.err(
                    Error("INVITE_ALREADY_USED", "Invite has already been used")
                )
            now = datetime.utcnow()
            if invite.is_expired(now):
                return Return.err(Error("INVITE_EXPIRED", "Invite has expired"))

            if invite.email and invite.email.lower() != user.email.lower():
                return Return.err(
                    Error(
                        "INVITE_EMAIL_MISMATCH",
                        "This invite was sent to a different email address",
                    )
                )

            community = await self.uow.communities.get_by_id(invite.community_id)
            if community is None:
                return Return.err(Error("COMMUNITY_NOT_FOUND", "Community not found"))

            if (
                user.org_id is not None
                and community.org_id is not None
                and user.org_id != community.org_id
            ):
                return Return.err(
                    Error(
                        "CROSS_ORG_INVITE",
                        "This community belongs to a different organization",
                    )
                )

            membership = await self.uow.community_members.get_by_user_and_community(
                user_id, community.id
            )
            if membership is None:
                membership = await self.uow.community_members.create(
                    CommunityMember(
                        user_id=user_id,
                        community_id=community.id,
                        role=invite.role,
                        membership_type=MembershipType.member,
                        status=CommunityMemberStatus.active,
                        joined_at=now,
                        updated_at=now,
                    )
                )
                status = "joined"
            elif membership.membership_type == MembershipType.follower or (
                community_role_rank(membership.role) < community_role_rank(invite.role)
            ):
                membership.membership_type = MembershipType.member
                membership.role = invite.role
                membership.status = CommunityMemberStatus.active
                membership.updated_at = now
                membership = await self.uow.community_members.update(membership)
                status = "upgraded"
            else:
                status = "unchanged"

            invite.used_at = now
            invite.used_by = user_id
            await self.uow.invites.update(invite)

            await self.uow.audit_events.create(
                AuditEvent(
                    org_id=community.org_id,
                    community_id=community.id,
                    user_id=user_id,
                    action="invite_accepted",
                    event_metadata={
                        "invite_id": str(invite.id),
                        "role": membership.role.value,
                        "result": status,
                    },
                )
            )

            await self.uow.commit()
            logger.info("User %s accepted invite %s (%s)", user_id, invite.id, status)
            return Return.ok(
                JoinViaInviteResponse(
                    community_id=str(community.id),
                    role=membership.role.value,
                    status=status,
                )
            )
