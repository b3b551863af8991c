"""
Reject Request Use Case
"""

import logging
from datetime import datetime
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.permissions import ServerPermissions
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, RequestStatus
from src.domain.permissions import Action

from .dtos import ReviewRequestResponse

logger = logging.getLogger(__name__)


class RejectRequestUseCase:
    """
    Use case for rejecting a membership request.

    Business Rules:
    - Same guards as approval
    - Rejection is terminal: only status and review stamps change, no
      membership row is created now or later
    """

    def __init__(self, uow: UnitOfWork, org_admin_implicit_access: bool = False):
        self.uow = uow
        self.org_admin_implicit_access = org_admin_implicit_access

    async def execute(self, actor_id: UUID, request_id: UUID) -> Result[ReviewRequestResponse]:
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

            request.status = RequestStatus.rejected
            request.reviewed_at = datetime.utcnow()
            request.reviewed_by = actor_id
            await self.uow.member_requests.update(request)

            community = await self.uow.communities.get_by_id(request.community_id)
            await self.uow.audit_events.create(
                AuditEvent(
                    org_id=community.org_id if community else None,
                    community_id=request.community_id,
                    user_id=actor_id,
                    action="request_rejected",
                    event_metadata={
                        "request_id": str(request.id),
                        "request_type": request.request_type.value,
                        "target_user_id": str(request.user_id),
                    },
                )
            )

            await self.uow.commit()
            logger.info("Request %s rejected by %s", request.id, actor_id)
            return Return.ok(
                ReviewRequestResponse(
                    status=RequestStatus.rejected.value, request_id=str(request.id)
                )
            )
