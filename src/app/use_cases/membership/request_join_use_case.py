"""
Request Join Use Case

Handles a user asking to become a member of a community.
"""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.repositories.community_member_request_repository import (
    DuplicatePendingRequestError,
)
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    AuditEvent,
    CommunityMember,
    CommunityMemberRequest,
    CommunityMemberStatus,
    CommunityRole,
    CommunityType,
    MembershipType,
    RequestStatus,
    RequestType,
)

from .dtos import CommunityMembershipInfo, MemberRequestInfo, RequestOutcomeResponse

logger = logging.getLogger(__name__)


class RequestJoinUseCase:
    """
    Use case for joining a community.

    Business Rules:
    - Community must exist
    - Existing members cannot join again (ALREADY_MEMBER)
    - Only one pending join request per user and community
      (REQUEST_ALREADY_PENDING, also raised by the unique index on a race)
    - Public communities approve immediately when auto_approve_public is set
    - Followers asking to join, and private communities, go through review
    """

    def __init__(self, uow: UnitOfWork, auto_approve_public: bool = True):
        self.uow = uow
        self.auto_approve_public = auto_approve_public

    async def execute(
        self, user_id: UUID, community_id: UUID, message: Optional[str] = None
    ) -> Result[RequestOutcomeResponse]:
        """
        Execute request join use case.

        Args:
            user_id: User asking to join
            community_id: Target community
            message: Optional note for the reviewers

        Returns:
            Result with RequestOutcomeResponse ("approved" or "pending"), or Error
        """
        async with self.uow:
            community = await self.uow.communities.get_by_id(community_id)
            if community is None:
                return Return.err(Error("COMMUNITY_NOT_FOUND", "Community not found"))

            existing = await self.uow.community_members.get_by_user_and_community(
                user_id, community_id
            )
            if existing is not None and existing.membership_type == MembershipType.member:
                return Return.err(
                    Error("ALREADY_MEMBER", "You are already a member of this community")
                )

            pending = await self.uow.member_requests.get_pending(
                user_id, community_id, RequestType.join
            )
            if pending is not None:
                return Return.err(
                    Error(
                        "REQUEST_ALREADY_PENDING",
                        "You already have a pending request to join this community",
                    )
                )

            # Open communities skip review; followers never get upgraded silently
            if (
                existing is None
                and community.type == CommunityType.public
                and self.auto_approve_public
            ):
                now = datetime.utcnow()
                membership = await self.uow.community_members.create(
                    CommunityMember(
                        user_id=user_id,
                        community_id=community_id,
                        role=CommunityRole.member,
                        membership_type=MembershipType.member,
                        status=CommunityMemberStatus.active,
                        joined_at=now,
                        updated_at=now,
                    )
                )
                await self.uow.audit_events.create(
                    AuditEvent(
                        org_id=community.org_id,
                        community_id=community_id,
                        user_id=user_id,
                        action="member_joined",
                        event_metadata={"role": CommunityRole.member.value},
                    )
                )
                await self.uow.commit()
                logger.info("User %s joined public community %s", user_id, community_id)
                return Return.ok(
                    RequestOutcomeResponse(
                        status=RequestStatus.approved.value,
                        membership=CommunityMembershipInfo.from_entity(membership),
                    )
                )

            try:
                request = await self.uow.member_requests.create(
                    CommunityMemberRequest(
                        user_id=user_id,
                        community_id=community_id,
                        request_type=RequestType.join,
                        status=RequestStatus.pending,
                        message=message,
                    )
                )
            except DuplicatePendingRequestError:
                return Return.err(
                    Error(
                        "REQUEST_ALREADY_PENDING",
                        "You already have a pending request to join this community",
                    )
                )

            await self.uow.commit()
            logger.info("User %s requested to join community %s", user_id, community_id)
            return Return.ok(
                RequestOutcomeResponse(
                    status=RequestStatus.pending.value,
                    request=MemberRequestInfo.from_entity(request),
                )
            )
