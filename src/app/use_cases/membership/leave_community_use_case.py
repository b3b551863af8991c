"""
Leave Community Use Case
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent

from .dtos import StatusResponse

logger = logging.getLogger(__name__)


class LeaveCommunityUseCase:
    """
    Use case for a member or follower leaving a community.

    Business Rules:
    - User must have a row in the community (NOT_A_MEMBER)
    - The creator cannot leave (CREATOR_CANNOT_LEAVE)
    - The row is deleted, returning the pair to the "none" state
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, community_id: UUID) -> Result[StatusResponse]:
        async with self.uow:
            community = await self.uow.communities.get_by_id(community_id)
            if community is None:
                return Return.err(Error("COMMUNITY_NOT_FOUND", "Community not found"))

            membership = await self.uow.community_members.get_by_user_and_community(
                user_id, community_id
            )
            if membership is None:
                return Return.err(
                    Error("NOT_A_MEMBER", "You are not a member of this community")
                )

            if community.created_by == user_id:
                return Return.err(
                    Error(
                        "CREATOR_CANNOT_LEAVE",
                        "The creator of a community cannot leave it",
                    )
                )

            await self.uow.community_members.delete(membership)
            await self.uow.audit_events.create(
                AuditEvent(
                    org_id=community.org_id,
                    community_id=community_id,
                    user_id=user_id,
                    action="member_left",
                    event_metadata={
                        "role": membership.role.value,
                        "membership_type": membership.membership_type.value,
                    },
                )
            )
            await self.uow.commit()
            logger.info("User %s left community %s", user_id, community_id)
            return Return.ok(StatusResponse(status="left"))
