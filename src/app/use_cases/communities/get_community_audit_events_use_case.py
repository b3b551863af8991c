"""
Get Community Audit Events Use Case

Retrieves the membership and role audit trail of a community with pagination.
"""

from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.permissions import ServerPermissions
from src.app.services.unit_of_work import UnitOfWork
from src.domain.permissions import Action

from .dtos import AuditEventInfo, AuditEventsResponse


class GetCommunityAuditEventsUseCase:
    """
    Use case for retrieving audit events for a community.

    Business Rules:
    - Caller needs manage_community_members in the community
    - Results are community-scoped and ordered by newest first
    - Supports cursor-based pagination
    - Each event includes action, user_email, timestamp, metadata
    """

    def __init__(self, uow: UnitOfWork, org_admin_implicit_access: bool = False):
        self.uow = uow
        self.org_admin_implicit_access = org_admin_implicit_access

    async def execute(
        self,
        user_id: UUID,
        community_id: UUID,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Result[AuditEventsResponse]:
        """
        Execute get audit events use case.

        Args:
            user_id: Caller
            community_id: Community whose trail is read
            limit: Maximum number of events to return
            cursor: Pagination cursor (optional)

        Returns:
            Result with events list and next_cursor, or Error
        """
        async with self.uow:
            community = await self.uow.communities.get_by_id(community_id)
            if community is None:
                return Return.err(Error("COMMUNITY_NOT_FOUND", "Community not found"))

            perms_result = await ServerPermissions.from_user_id(
                self.uow, user_id, self.org_admin_implicit_access
            )
            if perms_result.is_err():
                return Return.err(perms_result.error)

            allowed = await perms_result.value.check_community_permission(
                community_id, Action.MANAGE_COMMUNITY_MEMBERS
            )
            if not allowed:
                return Return.err(
                    Error("FORBIDDEN", "You do not have permission to view audit events")
                )

            events, next_cursor = await self.uow.audit_events.get_by_community_paginated(
                community_id, limit=limit, cursor=cursor
            )

            # Resolve actor emails in one query
            actor_ids = list({e.user_id for e in events if e.user_id})
            users = await self.uow.users.get_by_ids(actor_ids) if actor_ids else []
            emails = {u.id: u.email for u in users}

            return Return.ok(
                AuditEventsResponse(
                    events=[
                        AuditEventInfo(
                            action=event.action,
                            user_email=emails.get(event.user_id),
                            timestamp=event.created_at.isoformat() + "Z",
                            metadata=event.event_metadata or {},
                        )
                        for event in events
                    ],
                    next_cursor=next_cursor,
                )
            )
