"""
List Pending Requests Use Cases

Review queue for community managers, and a user's own pending requests.
"""

from typing import List
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.permissions import ServerPermissions
from src.app.services.unit_of_work import UnitOfWork
from src.domain.permissions import Action

from .dtos import MemberRequestInfo


class ListPendingRequestsUseCase:
    """
    Use case for listing a community's pending requests.

    Business Rules:
    - Community must exist
    - Actor needs manage_community_members in the community
    - Newest first
    """

    def __init__(self, uow: UnitOfWork, org_admin_implicit_access: bool = False):
        self.uow = uow
        self.org_admin_implicit_access = org_admin_implicit_access

    async def execute(
        self, actor_id: UUID, community_id: UUID
    ) -> Result[List[MemberRequestInfo]]:
        async with self.uow:
            community = await self.uow.communities.get_by_id(community_id)
            if community is None:
                return Return.err(Error("COMMUNITY_NOT_FOUND", "Community not found"))

            perms_result = await ServerPermissions.from_user_id(
                self.uow, actor_id, self.org_admin_implicit_access
            )
            if perms_result.is_err():
                return Return.err(perms_result.error)

            allowed = await perms_result.value.check_community_permission(
                community_id, Action.MANAGE_COMMUNITY_MEMBERS
            )
            if not allowed:
                return Return.err(
                    Error("FORBIDDEN", "You do not have permission to view requests")
                )

            requests = await self.uow.member_requests.list_pending_by_community(community_id)
            return Return.ok([MemberRequestInfo.from_entity(r) for r in requests])


class ListUserPendingRequestsUseCase:
    """A user's own pending requests in one community"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, community_id: UUID
    ) -> Result[List[MemberRequestInfo]]:
        async with self.uow:
            requests = await self.uow.member_requests.list_pending_by_user_and_community(
                user_id, community_id
            )
            return Return.ok([MemberRequestInfo.from_entity(r) for r in requests])
