"""
Org Members Use Cases

Bulk-add members of the community's organization, and list the ones that
are not in the community yet.
"""

import logging
from typing import List, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.permissions import ServerPermissions
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    AuditEvent,
    Community,
    CommunityMember,
    CommunityMemberStatus,
    CommunityRole,
    MembershipType,
)
from src.domain.permissions import Action
from src.domain.roles import community_role_rank

from .dtos import AddOrgMembersResponse, OrgMemberInfo, OrgMemberToAdd

logger = logging.getLogger(__name__)

ADDABLE_ROLES = (CommunityRole.member, CommunityRole.moderator)


async def _load_managed_org_community(
    uow: UnitOfWork, actor_id: UUID, community_id: UUID, org_admin_implicit_access: bool
) -> Result[tuple]:
    """Community with an owning org, and the actor's resolver, once manage rights hold"""
    community = await uow.communities.get_by_id(community_id)
    if community is None:
        return Return.err(Error("COMMUNITY_NOT_FOUND", "Community not found"))
    if community.org_id is None:
        return Return.err(
            Error("COMMUNITY_HAS_NO_ORG", "Community does not belong to an organization")
        )

    perms_result = await ServerPermissions.from_user_id(
        uow, actor_id, org_admin_implicit_access
    )
    if perms_result.is_err():
        return Return.err(perms_result.error)

    allowed = await perms_result.value.check_community_permission(
        community_id, Action.MANAGE_COMMUNITY_MEMBERS
    )
    if not allowed:
        return Return.err(
            Error("FORBIDDEN", "You do not have permission to manage members")
        )
    return Return.ok((community, perms_result.value))


class AddOrgMembersToCommunityUseCase:
    """
    Use case for adding organization members to a community in bulk.

    Business Rules:
    - Community must belong to an organization
    - Actor needs manage_community_members in the community
    - Roles are member or moderator (INVALID_ROLE); an actor cannot grant a
      role above their own rank (INSUFFICIENT_RANK)
    - Every user must be a verified member of the community's org
      (NOT_ORG_MEMBERS)
    - Users who already have a row are skipped, not errored; repeating the
      call never creates duplicates
    """

    def __init__(self, uow: UnitOfWork, org_admin_implicit_access: bool = False):
        self.uow = uow
        self.org_admin_implicit_access = org_admin_implicit_access

    async def execute(
        self, actor_id: UUID, community_id: UUID, users: List[OrgMemberToAdd]
    ) -> Result[AddOrgMembersResponse]:
        async with self.uow:
            loaded = await _load_managed_org_community(
                self.uow, actor_id, community_id, self.org_admin_implicit_access
            )
            if loaded.is_err():
                return Return.err(loaded.error)
            community, permissions = loaded.value

            actor_rank = permissions.community_rank(community_id)
            for entry in users:
                if entry.role not in ADDABLE_ROLES:
                    return Return.err(
                        Error("INVALID_ROLE", "Role must be member or moderator")
                    )
                if community_role_rank(entry.role) > actor_rank:
                    return Return.err(
                        Error(
                            "INSUFFICIENT_RANK",
                            "You cannot grant a role above your own",
                        )
                    )

            # Last entry wins for repeated user ids
            requested = {entry.user_id: entry.role for entry in users}
            if not requested:
                return Return.ok(
                    AddOrgMembersResponse(added=[], skipped=[], message="No users given")
                )

            found = await self.uow.users.get_by_ids(list(requested))
            eligible = {
                u.id
                for u in found
                if u.org_id == community.org_id and u.email_verified
            }
            invalid = [uid for uid in requested if uid not in eligible]
            if invalid:
                return Return.err(
                    Error(
                        "NOT_ORG_MEMBERS",
                        "Some users are not verified members of this organization: "
                        + ", ".join(str(uid) for uid in invalid),
                    )
                )

            existing = await self.uow.community_members.get_by_community_and_users(
                community_id, list(requested)
            )
            existing_ids = {m.user_id for m in existing}

            added: List[str] = []
            skipped: List[str] = []
            for user_id, role in requested.items():
                if user_id in existing_ids:
                    skipped.append(str(user_id))
                    continue
                await self.uow.community_members.create(
                    CommunityMember(
                        user_id=user_id,
                        community_id=community_id,
                        role=role,
                        membership_type=MembershipType.member,
                        status=CommunityMemberStatus.active,
                    )
                )
                added.append(str(user_id))

            if added:
                await self.uow.audit_events.create(
                    AuditEvent(
                        org_id=community.org_id,
                        community_id=community_id,
                        user_id=actor_id,
                        action="org_members_added",
                        event_metadata={"added_user_ids": added},
                    )
                )
            await self.uow.commit()

            logger.info(
                "Added %d org members to community %s (%d skipped)",
                len(added),
                community_id,
                len(skipped),
            )
            return Return.ok(
                AddOrgMembersResponse(
                    added=added,
                    skipped=skipped,
                    message=f"Added {len(added)} member(s) to {community.name}",
                )
            )


class ListOrgMembersNotInCommunityUseCase:
    """Verified org members without a row in the community, optionally filtered"""

    def __init__(self, uow: UnitOfWork, org_admin_implicit_access: bool = False):
        self.uow = uow
        self.org_admin_implicit_access = org_admin_implicit_access

    async def execute(
        self, actor_id: UUID, community_id: UUID, search: Optional[str] = None
    ) -> Result[List[OrgMemberInfo]]:
        async with self.uow:
            loaded = await _load_managed_org_community(
                self.uow, actor_id, community_id, self.org_admin_implicit_access
            )
            if loaded.is_err():
                return Return.err(loaded.error)
            community: Community = loaded.value[0]

            org_users = await self.uow.users.list_by_org(
                community.org_id, verified_only=True, search=search
            )
            if not org_users:
                return Return.ok([])

            existing = await self.uow.community_members.get_by_community_and_users(
                community_id, [u.id for u in org_users]
            )
            existing_ids = {m.user_id for m in existing}
            return Return.ok(
                [OrgMemberInfo.from_entity(u) for u in org_users if u.id not in existing_ids]
            )
