"""
Permission Resolver

Builds a per-request snapshot of a user's application, organization and
community roles and answers permission questions against the static table
in ``src.domain.permissions``.

A ``ServerPermissions`` instance is immutable and must be rebuilt for every
logical request: role membership can change between requests, so instances
are never cached or shared.
"""

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Set, Tuple
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    AppRole,
    CommunityMemberStatus,
    CommunityRole,
    MembershipType,
    OrgMemberRole,
    OrgMemberStatus,
    OrgRole,
)
from src.domain.permissions import (
    Action,
    PermissionScope,
    get_all_permissions,
    has_permission,
)
from src.domain.roles import APP_ADMIN_RANK, COMMUNITY_ROLE_RANK, NO_RANK, community_role_rank

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommunityRoleRecord:
    """A role the user holds in one community, with the community's owning org"""

    community_id: UUID
    role: CommunityRole
    org_id: Optional[UUID]


@dataclass(frozen=True)
class UserDetails:
    id: UUID
    name: str
    email: str
    role: AppRole
    org_id: Optional[UUID]


@dataclass(frozen=True)
class PermissionSnapshot:
    """Roles of one user at one point in time; derived, never persisted"""

    app_role: Optional[AppRole]
    org_role: Optional[OrgRole]
    org_id: Optional[UUID]
    community_roles: Tuple[CommunityRoleRecord, ...] = ()
    user_details: Optional[UserDetails] = None
    # Only populated when org admins get implicit access to their org's communities
    org_community_ids: FrozenSet[UUID] = field(default_factory=frozenset)


class ServerPermissions:
    """
    Answers "can this user perform action A in scope S?".

    Business Rules:
    - App admin (wildcard in the app scope) overrides everything
    - Org role grants apply to a community only when the community belongs
      to the user's organization
    - An org admin holding any role in a community of their own org gets the
      community admin set on top of their org set
    - No role anywhere means an empty permission set, not an error
    """

    def __init__(self, snapshot: PermissionSnapshot):
        self._snapshot = snapshot

    @classmethod
    async def from_user_id(
        cls,
        uow: UnitOfWork,
        user_id: UUID,
        org_admin_implicit_access: bool = False,
    ) -> Result["ServerPermissions"]:
        """
        Load the user's roles in one pass.

        Must be called inside an open unit of work; the resolver never
        opens or commits one itself.

        Args:
            uow: Open unit of work
            user_id: User to resolve
            org_admin_implicit_access: Treat org admins as community admins
                of every community of their org, even without a membership row

        Returns:
            Result with ServerPermissions, or Error USER_NOT_FOUND
        """
        user = await uow.users.get_by_id(user_id)
        if user is None:
            return Return.err(Error("USER_NOT_FOUND", "User not found"))

        org_role = None
        if user.org_id is not None:
            org_member = await uow.org_members.get_by_user_and_org(user.id, user.org_id)
            # Pending org rows grant nothing until activated
            is_org_admin = user.role == AppRole.admin or (
                org_member is not None
                and org_member.role == OrgMemberRole.admin
                and org_member.status == OrgMemberStatus.active
            )
            org_role = OrgRole.admin if is_org_admin else OrgRole.member

        rows = await uow.community_members.get_roles_with_org(user.id)
        community_roles = tuple(
            CommunityRoleRecord(
                community_id=member.community_id,
                role=CommunityRole(member.role),
                org_id=community_org_id,
            )
            for member, community_org_id in rows
            if member.membership_type == MembershipType.member
            and member.status == CommunityMemberStatus.active
        )

        org_community_ids: FrozenSet[UUID] = frozenset()
        if org_admin_implicit_access and org_role == OrgRole.admin:
            org_communities = await uow.communities.list_by_org(user.org_id)
            org_community_ids = frozenset(c.id for c in org_communities)

        snapshot = PermissionSnapshot(
            app_role=AppRole(user.role),
            org_role=org_role,
            org_id=user.org_id,
            community_roles=community_roles,
            user_details=UserDetails(
                id=user.id,
                name=user.name,
                email=user.email,
                role=AppRole(user.role),
                org_id=user.org_id,
            ),
            org_community_ids=org_community_ids,
        )
        logger.debug(
            "Loaded permissions for user %s: app=%s org=%s communities=%d",
            user.id,
            snapshot.app_role,
            snapshot.org_role,
            len(community_roles),
        )
        return Return.ok(cls(snapshot))

    @property
    def snapshot(self) -> PermissionSnapshot:
        return self._snapshot

    # ------------------------------------------------------------------
    # Scope checks
    # ------------------------------------------------------------------

    def is_app_admin(self) -> bool:
        return has_permission(PermissionScope.app, self._snapshot.app_role, Action.WILDCARD)

    def check_app_permission(self, action: Action) -> bool:
        return self.is_app_admin() or has_permission(
            PermissionScope.app, self._snapshot.app_role, action
        )

    def check_org_permission(self, action: Action) -> bool:
        # App admins can perform any org action
        if self.is_app_admin():
            return True
        return has_permission(PermissionScope.org, self._snapshot.org_role, action)

    async def check_community_permission(self, community_id: UUID, action: Action) -> bool:
        """Async for call-site symmetry; performs no I/O"""
        return self._community_allows(community_id, action)

    def check_permission(
        self,
        scope: PermissionScope,
        action: Action,
        context_id: Optional[UUID] = None,
    ) -> bool:
        """
        Dispatch a check by scope.

        Raises:
            ValueError: community scope without a community ID
        """
        scope = PermissionScope(scope)
        if scope == PermissionScope.app:
            return self.check_app_permission(action)
        if scope == PermissionScope.org:
            return self.check_org_permission(action)
        if context_id is None:
            raise ValueError("communityId is required for community context")
        return self._community_allows(context_id, action)

    def get_community_permissions(self, community_id: UUID) -> Set[Action]:
        """Effective permission set in a community; {WILDCARD} for app admins"""
        if self.is_app_admin():
            return {Action.WILDCARD}

        rec = self._find_community_role(community_id)
        org_role = self._snapshot.org_role

        if rec is None:
            if self._has_implicit_org_admin_access(community_id):
                return self._org_admin_override_set()
            return set()

        if not self._is_own_org(rec.org_id):
            return get_all_permissions(PermissionScope.community, [rec.role])

        if org_role == OrgRole.admin:
            return self._org_admin_override_set()

        return get_all_permissions(PermissionScope.community, [rec.role]) | get_all_permissions(
            PermissionScope.org, [org_role]
        )

    def community_rank(self, community_id: UUID) -> int:
        """Rank used by the kick/assign rules; app admins sit above community admins"""
        if self.is_app_admin():
            return APP_ADMIN_RANK

        rec = self._find_community_role(community_id)
        org_admin = self._snapshot.org_role == OrgRole.admin
        if rec is None:
            if self._has_implicit_org_admin_access(community_id):
                return COMMUNITY_ROLE_RANK[CommunityRole.admin]
            return NO_RANK
        if org_admin and self._is_own_org(rec.org_id):
            return COMMUNITY_ROLE_RANK[CommunityRole.admin]
        return community_role_rank(rec.role)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get_app_role(self) -> Optional[AppRole]:
        return self._snapshot.app_role

    def get_org_role(self) -> Optional[OrgRole]:
        return self._snapshot.org_role

    def get_org_id(self) -> Optional[UUID]:
        return self._snapshot.org_id

    def get_community_role(self, community_id: UUID) -> Optional[CommunityRole]:
        rec = self._find_community_role(community_id)
        return rec.role if rec else None

    def get_community_roles(self) -> List[CommunityRoleRecord]:
        return list(self._snapshot.community_roles)

    def has_community_role(self, community_id: UUID) -> bool:
        return self._find_community_role(community_id) is not None

    def get_user_details(self) -> Optional[UserDetails]:
        return self._snapshot.user_details

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _community_allows(self, community_id: UUID, action: Action) -> bool:
        if self.is_app_admin():
            return True
        allowed = self.get_community_permissions(community_id)
        return Action.WILDCARD in allowed or action in allowed

    def _find_community_role(self, community_id: UUID) -> Optional[CommunityRoleRecord]:
        for rec in self._snapshot.community_roles:
            if rec.community_id == community_id:
                return rec
        return None

    def _is_own_org(self, community_org_id: Optional[UUID]) -> bool:
        return community_org_id is not None and community_org_id == self._snapshot.org_id

    def _has_implicit_org_admin_access(self, community_id: UUID) -> bool:
        return (
            self._snapshot.org_role == OrgRole.admin
            and community_id in self._snapshot.org_community_ids
        )

    def _org_admin_override_set(self) -> Set[Action]:
        return get_all_permissions(
            PermissionScope.community, [CommunityRole.admin]
        ) | get_all_permissions(PermissionScope.org, [self._snapshot.org_role])


async def check_user_permission(
    uow: UnitOfWork,
    user_id: UUID,
    scope: PermissionScope,
    action: Action,
    context_id: Optional[UUID] = None,
) -> Result[bool]:
    """One-shot check with a freshly loaded snapshot"""
    async with uow:
        result = await ServerPermissions.from_user_id(uow, user_id)
        if result.is_err():
            return Return.err(result.error)
        return Return.ok(result.value.check_permission(scope, action, context_id))


async def get_user_role(
    uow: UnitOfWork,
    user_id: UUID,
    scope: PermissionScope,
    context_id: Optional[UUID] = None,
) -> Result[Optional[str]]:
    """
    Role of a user in a scope, loaded fresh.

    Raises:
        ValueError: community scope without a community ID
    """
    scope = PermissionScope(scope)
    if scope == PermissionScope.community and context_id is None:
        raise ValueError("communityId is required for community context")

    async with uow:
        result = await ServerPermissions.from_user_id(uow, user_id)
        if result.is_err():
            return Return.err(result.error)
        permissions = result.value
        if scope == PermissionScope.app:
            role = permissions.get_app_role()
        elif scope == PermissionScope.org:
            role = permissions.get_org_role()
        else:
            role = permissions.get_community_role(context_id)
        return Return.ok(role.value if role is not None else None)
