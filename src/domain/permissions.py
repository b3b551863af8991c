"""
Role/Permission Table

The only place role semantics are defined. Every permission decision in the
service goes through ``has_permission`` / ``get_all_permissions``.
"""

from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional, Set

from src.domain.entities.enums import AppRole, CommunityRole, OrgRole


class PermissionScope(str, Enum):
    """Scope a role is evaluated in"""

    app = "app"
    org = "org"
    community = "community"


class Action(str, Enum):
    """
    Defines all actions available in the system.

    Actions follow the pattern: VERB_RESOURCE.
    WILDCARD in a role's set means every action of that scope.
    """

    WILDCARD = "*"

    # Organization
    VIEW_ORG = "view_org"
    UPDATE_ORG = "update_org"
    DELETE_ORG = "delete_org"
    MANAGE_ORG_MEMBERS = "manage_org_members"
    INVITE_ORG_MEMBERS = "invite_org_members"

    # Community
    VIEW_COMMUNITY = "view_community"
    EDIT_COMMUNITY = "edit_community"
    DELETE_COMMUNITY = "delete_community"
    CREATE_COMMUNITY = "create_community"
    MANAGE_COMMUNITY_MEMBERS = "manage_community_members"
    INVITE_COMMUNITY_MEMBERS = "invite_community_members"
    ASSIGN_COMMUNITY_ADMIN = "assign_community_admin"
    REMOVE_COMMUNITY_ADMIN = "remove_community_admin"
    REMOVE_COMMUNITY_CREATOR = "remove_community_creator"

    # Posts
    CREATE_POST = "create_post"
    EDIT_POST = "edit_post"
    DELETE_POST = "delete_post"
    VIEW_POST = "view_post"

    # Tags
    CREATE_TAG = "create_tag"
    EDIT_TAG = "edit_tag"
    DELETE_TAG = "delete_tag"
    VIEW_TAG = "view_tag"

    # Badges
    CREATE_BADGE = "create_badge"
    EDIT_BADGE = "edit_badge"
    DELETE_BADGE = "delete_badge"
    VIEW_BADGE = "view_badge"
    ASSIGN_BADGE = "assign_badge"
    UNASSIGN_BADGE = "unassign_badge"


PERMISSIONS: Dict[PermissionScope, Dict[Enum, FrozenSet[Action]]] = {
    PermissionScope.app: {
        AppRole.admin: frozenset({Action.WILDCARD}),
        AppRole.user: frozenset(),
    },
    PermissionScope.org: {
        OrgRole.admin: frozenset(
            {
                Action.VIEW_ORG,
                Action.UPDATE_ORG,
                Action.DELETE_ORG,
                Action.MANAGE_ORG_MEMBERS,
                Action.INVITE_ORG_MEMBERS,
                Action.VIEW_COMMUNITY,
                Action.EDIT_COMMUNITY,
                Action.DELETE_COMMUNITY,
                Action.CREATE_COMMUNITY,
                Action.MANAGE_COMMUNITY_MEMBERS,
                Action.INVITE_COMMUNITY_MEMBERS,
                Action.ASSIGN_COMMUNITY_ADMIN,
                Action.REMOVE_COMMUNITY_ADMIN,
                Action.CREATE_POST,
                Action.EDIT_POST,
                Action.DELETE_POST,
                Action.VIEW_POST,
                Action.CREATE_TAG,
                Action.EDIT_TAG,
                Action.DELETE_TAG,
                Action.VIEW_TAG,
                Action.CREATE_BADGE,
                Action.EDIT_BADGE,
                Action.DELETE_BADGE,
                Action.VIEW_BADGE,
                Action.ASSIGN_BADGE,
                Action.UNASSIGN_BADGE,
            }
        ),
        OrgRole.member: frozenset(
            {
                Action.VIEW_ORG,
                Action.VIEW_COMMUNITY,
                Action.CREATE_POST,
                Action.VIEW_POST,
            }
        ),
    },
    PermissionScope.community: {
        CommunityRole.admin: frozenset(
            {
                Action.VIEW_COMMUNITY,
                Action.EDIT_COMMUNITY,
                Action.DELETE_COMMUNITY,
                Action.MANAGE_COMMUNITY_MEMBERS,
                Action.INVITE_COMMUNITY_MEMBERS,
                Action.ASSIGN_COMMUNITY_ADMIN,
                Action.REMOVE_COMMUNITY_ADMIN,
                Action.CREATE_POST,
                Action.EDIT_POST,
                Action.DELETE_POST,
                Action.VIEW_POST,
            }
        ),
        CommunityRole.moderator: frozenset(
            {
                Action.VIEW_COMMUNITY,
                Action.EDIT_COMMUNITY,
                Action.MANAGE_COMMUNITY_MEMBERS,
                Action.INVITE_COMMUNITY_MEMBERS,
                Action.CREATE_POST,
                Action.EDIT_POST,
                Action.DELETE_POST,
                Action.VIEW_POST,
                Action.CREATE_TAG,
                Action.EDIT_TAG,
                Action.DELETE_TAG,
                Action.VIEW_TAG,
            }
        ),
        CommunityRole.member: frozenset(
            {
                Action.VIEW_COMMUNITY,
                Action.CREATE_POST,
                Action.VIEW_POST,
            }
        ),
    },
}


def _role_actions(scope: PermissionScope, role: Optional[str]) -> Optional[FrozenSet[Action]]:
    if not role:
        return None
    key = getattr(role, "value", role)
    for known_role, actions in PERMISSIONS[PermissionScope(scope)].items():
        if known_role.value == key:
            return actions
    return None


def has_permission(scope: PermissionScope, role: Optional[str], action: Action) -> bool:
    """
    Check if a role has a specific action in a scope.

    Args:
        scope: Scope the role belongs to
        role: Role name (None or unknown roles have no permissions)
        action: Action to validate

    Returns:
        True if the role's set holds the wildcard or the action
    """
    allowed = _role_actions(scope, role)
    if allowed is None:
        return False
    return Action.WILDCARD in allowed or action in allowed


def has_any_permission(
    scope: PermissionScope, roles: Iterable[Optional[str]], action: Action
) -> bool:
    """True if any of the roles has the action"""
    return any(has_permission(scope, role, action) for role in roles)


def get_all_permissions(
    scope: PermissionScope, roles: Iterable[Optional[str]]
) -> Set[Action]:
    """
    Union of the permission sets of the given roles in a scope.

    A role holding the wildcard expands to every action defined in the
    scope, including the wildcard itself.
    """
    out: Set[Action] = set()
    scope_map = PERMISSIONS[PermissionScope(scope)]
    for role in roles:
        allowed = _role_actions(scope, role)
        if allowed is None:
            continue
        if Action.WILDCARD in allowed:
            for actions in scope_map.values():
                out.update(actions)
        else:
            out.update(allowed)
    return out
