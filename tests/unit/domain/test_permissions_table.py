import pytest

from src.domain.entities import AppRole, CommunityRole, OrgRole
from src.domain.permissions import (
    PERMISSIONS,
    Action,
    PermissionScope,
    get_all_permissions,
    has_any_permission,
    has_permission,
)


def test_app_admin_holds_wildcard():
    assert has_permission(PermissionScope.app, AppRole.admin, Action.DELETE_ORG)
    assert has_permission(PermissionScope.app, "admin", Action.REMOVE_COMMUNITY_CREATOR)


def test_app_user_has_nothing():
    assert PERMISSIONS[PermissionScope.app][AppRole.user] == frozenset()
    assert not has_permission(PermissionScope.app, AppRole.user, Action.VIEW_COMMUNITY)


@pytest.mark.parametrize("role", [None, "", "owner", "superuser"])
def test_missing_or_unknown_role_has_no_permission(role):
    for scope in PermissionScope:
        assert not has_permission(scope, role, Action.VIEW_COMMUNITY)
        assert get_all_permissions(scope, [role]) == set()


def test_moderator_cannot_assign_or_remove_admins():
    assert has_permission(
        PermissionScope.community, CommunityRole.moderator, Action.MANAGE_COMMUNITY_MEMBERS
    )
    assert not has_permission(
        PermissionScope.community, CommunityRole.moderator, Action.ASSIGN_COMMUNITY_ADMIN
    )
    assert not has_permission(
        PermissionScope.community, CommunityRole.moderator, Action.REMOVE_COMMUNITY_ADMIN
    )


def test_community_member_set():
    assert get_all_permissions(PermissionScope.community, [CommunityRole.member]) == {
        Action.VIEW_COMMUNITY,
        Action.CREATE_POST,
        Action.VIEW_POST,
    }


def test_removing_the_creator_is_granted_to_no_role():
    for scope, roles in PERMISSIONS.items():
        for role, actions in roles.items():
            if Action.WILDCARD in actions:
                continue
            assert Action.REMOVE_COMMUNITY_CREATOR not in actions, (scope, role)


def test_org_admin_covers_community_administration():
    org_admin = get_all_permissions(PermissionScope.org, [OrgRole.admin])
    assert {
        Action.CREATE_COMMUNITY,
        Action.MANAGE_COMMUNITY_MEMBERS,
        Action.ASSIGN_COMMUNITY_ADMIN,
        Action.REMOVE_COMMUNITY_ADMIN,
    } <= org_admin


def test_get_all_permissions_is_a_union():
    combined = get_all_permissions(
        PermissionScope.community, [CommunityRole.member, CommunityRole.moderator]
    )
    assert combined == set(PERMISSIONS[PermissionScope.community][CommunityRole.moderator])


def test_wildcard_expands_to_every_action_of_the_scope():
    expanded = get_all_permissions(PermissionScope.app, [AppRole.admin])
    assert expanded == {Action.WILDCARD}

    # Every role in the scope is covered by the expansion
    for actions in PERMISSIONS[PermissionScope.app].values():
        assert set(actions) <= expanded


def test_has_any_permission():
    assert has_any_permission(
        PermissionScope.community,
        [CommunityRole.member, CommunityRole.admin],
        Action.DELETE_COMMUNITY,
    )
    assert not has_any_permission(
        PermissionScope.community, [CommunityRole.member, None], Action.DELETE_COMMUNITY
    )
