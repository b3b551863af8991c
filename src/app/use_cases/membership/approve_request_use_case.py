"""
Approve Request Use Case

Handles a community manager approving a pending join/follow request.
"""

import logging
from datetime import datetime
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.permissions import ServerPermissions
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    AuditEvent,
    CommunityMember,
    CommunityMemberStatus,
    CommunityRole,
    MembershipType,
    RequestStatus,
    RequestType,
)
from src.domain.permissions import Action

from .dtos import CommunityMembershipInfo, ReviewRequestResponse

logger = logging.getLogger(__name__)


class ApproveRequestUseCase:
    """
    Use case for approving a membership request.

    Business Rules:
    - Request must exist (REQUEST_NOT_FOUND)
    - Actor needs manage_community_members in the request's community (FORBIDDEN)
    - Only pending requests can be reviewed (REQUEST_ALREADY_PROCESSED)
    - Stamps status=approved, reviewed_at and reviewed_by
    - Materializes a membership row: join -> member, follow -> follower
    - A follower approved for join is upgraded to member; other existing rows
      are left untouched
    """

    def __init__(self, uow: UnitOfWork, org_admin_implicit_access: bool = False):
        self.uow = uow
        self.org_admin_implicit_access = org_admin_implicit_access

    async def execute(self, actor_id: UUID, request_id: UUID) -> Result[ReviewRequestResponse]:
        """
        Execute approve request use case.

        Args:
            actor_id: User reviewing the request
            request_id: Request to approve

        Returns:
            Result with ReviewRequestResponse carrying the membership row, or Error
        """
        async with self.uow:
            request = await self.uow.member_requests.get_by_id(request_id)
            if request is None:
                return Return.err(Error("REQUEST_NOT_FOUND", "Request not found"))

            perms_result = await ServerPermissions.from_user_id(
                self.uow, actor_id, self.org_admin_implicit_access
            )
            if perms_result.is_err():
                return Return.err(perms_result.error)

            allowed = await perms_result.value.check_community_permission(
                request.community_id, Action.MANAGE_COMMUNITY_MEMBERS
            )
            if not allowed:
                return Return.err(
                    Error("FORBIDDEN", "You do not have permission to review requests")
                )

            if request.status != RequestStatus.pending:
                return Return.err(
                    Error(
                        "REQUEST_ALREADY_PROCESSED",
                        f"Request has already been {request.status.value}",
                    )
                )

            now = datetime.utcnow()
            request.status = RequestStatus.approved
            request.reviewed_at = now
            request.reviewed_by = actor_id
            await self.uow.member_requests.update(request)

            membership = await self.uow.community_members.get_by_user_and_community(
                request.user_id, request.community_id
            )
            if membership is None:
                membership_type = (
                    MembershipType.member
                    if request.request_type == RequestType.join
                    else MembershipType.follower
                )
                membership = await self.uow.community_members.create(
                    CommunityMember(
                        user_id=request.user_id,
                        community_id=request.community_id,
                        role=CommunityRole.member,
                        membership_type=membership_type,
                        status=CommunityMemberStatus.active,
                        joined_at=now,
                        updated_at=now,
                    )
                )
            elif (
                request.request_type == RequestType.join
                and membership.membership_type == MembershipType.follower
            ):
                membership.membership_type = MembershipType.member
                membership.role = CommunityRole.member
                membership.updated_at = now
                membership = await self.uow.community_members.update(membership)

            community = await self.uow.communities.get_by_id(request.community_id)
            await self.uow.audit_events.create(
                AuditEvent(
                    org_id=community.org_id if community else None,
                    community_id=request.community_id,
                    user_id=actor_id,
                    action="request_approved",
                    event_metadata={
                        "request_id": str(request.id),
                        "request_type": request.request_type.value,
                        "target_user_id": str(request.user_id),
                    },
                )
            )

            await self.uow.commit()
            logger.info(
                "Request %s (%s) approved by %s",
                request.id,
                request.request_type.value,
                actor_id,
            )
            return Return.ok(
                ReviewRequestResponse(
                    status=RequestStatus.approved.value,
                    request_id=str(request.id),
                    membership=CommunityMembershipInfo.from_entity(membership),
                )
            )
