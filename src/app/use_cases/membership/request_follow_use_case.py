"""
Request Follow Use Case

Handles a user asking to follow a community without joining it.
"""

import logging
from datetime import datetime
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.repositories.community_member_request_repository import (
    DuplicatePendingRequestError,
)
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
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


class RequestFollowUseCase:
    """
    Use case for following a community.

    Business Rules:
    - Community must exist
    - Any existing row (member or follower) blocks following (ALREADY_MEMBER),
      since member and follower are exclusive per community
    - Only one pending follow request per user and community
    - Public communities create the follower row immediately
    - Private communities create a pending follow request
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, community_id: UUID) -> Result[RequestOutcomeResponse]:
        async with self.uow:
            community = await self.uow.communities.get_by_id(community_id)
            if community is None:
                return Return.err(Error("COMMUNITY_NOT_FOUND", "Community not found"))

            existing = await self.uow.community_members.get_by_user_and_community(
                user_id, community_id
            )
            if existing is not None:
                return Return.err(
                    Error(
                        "ALREADY_MEMBER",
                        f"You are already a {existing.membership_type.value} of this community",
                    )
                )

            pending = await self.uow.member_requests.get_pending(
                user_id, community_id, RequestType.follow
            )
            if pending is not None:
                return Return.err(
                    Error(
                        "REQUEST_ALREADY_PENDING",
                        "You already have a pending request to follow this community",
                    )
                )

            if community.type == CommunityType.public:
                now = datetime.utcnow()
                membership = await self.uow.community_members.create(
                    CommunityMember(
                        user_id=user_id,
                        community_id=community_id,
                        role=CommunityRole.member,
                        membership_type=MembershipType.follower,
                        status=CommunityMemberStatus.active,
                        joined_at=now,
                        updated_at=now,
                    )
                )
                await self.uow.commit()
                logger.info("User %s follows community %s", user_id, community_id)
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
                        request_type=RequestType.follow,
                        status=RequestStatus.pending,
                    )
                )
            except DuplicatePendingRequestError:
                return Return.err(
                    Error(
                        "REQUEST_ALREADY_PENDING",
                        "You already have a pending request to follow this community",
                    )
                )

            await self.uow.commit()
            return Return.ok(
                RequestOutcomeResponse(
                    status=RequestStatus.pending.value,
                    request=MemberRequestInfo.from_entity(request),
                )
            )
