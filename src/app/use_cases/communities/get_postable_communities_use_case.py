"""
Get Postable Communities Use Case

Lists the communities a user may create posts in.
"""

from typing import Dict, List
from uuid import UUID

from libs.result import Result, Return
from src.app.services.permissions import ServerPermissions
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Community, OrgRole
from src.domain.roles import meets_min_role

from .dtos import PostableCommunityInfo


class GetPostableCommunitiesUseCase:
    """
    Business Rules:
    - Member rows count when the role meets post_creation_min_role
    - Org admins may post in every community of their org
    - App admins may post everywhere
    - Each community appears once, with the narrowest reason that applies
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[List[PostableCommunityInfo]]:
        async with self.uow:
            perms_result = await ServerPermissions.from_user_id(self.uow, user_id)
            if perms_result.is_err():
                return Return.err(perms_result.error)
            permissions = perms_result.value

            postable: Dict[UUID, PostableCommunityInfo] = {}

            def add(community: Community, reason: str) -> None:
                if community.id not in postable:
                    postable[community.id] = PostableCommunityInfo(
                        id=str(community.id),
                        name=community.name,
                        slug=community.slug,
                        reason=reason,
                    )

            records = {r.community_id: r.role for r in permissions.get_community_roles()}
            for community in await self.uow.communities.get_by_ids(list(records)):
                if meets_min_role(records[community.id], community.post_creation_min_role):
                    add(community, "member")

            if permissions.get_org_role() == OrgRole.admin:
                for community in await self.uow.communities.list_by_org(
                    permissions.get_org_id()
                ):
                    add(community, "org_admin")

            if permissions.is_app_admin():
                for community in await self.uow.communities.list_all():
                    add(community, "super_admin")

            return Return.ok(sorted(postable.values(), key=lambda c: c.name))
