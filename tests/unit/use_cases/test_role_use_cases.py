from uuid import uuid4

import pytest

from src.app.use_cases.roles import (
    AssignAdminUseCase,
    AssignModeratorUseCase,
    RemoveAdminUseCase,
    RemoveModeratorUseCase,
)
from src.domain.entities import AppRole, CommunityRole, MembershipType, OrgMemberRole
from tests.fixtures.factories import (
    grant_roles,
    make_community,
    make_member,
    make_org_member,
    make_user,
    register_communities,
    register_users,
)


def setup(mock_uow, actor_role, target_role, created_by=None, target_type=MembershipType.member):
    community = make_community(created_by=created_by)
    actor = make_user()
    register_users(mock_uow, actor)
    register_communities(mock_uow, community)
    grant_roles(mock_uow, [(make_member(actor.id, community.id, actor_role), None)])
    target = make_member(
        created_by or uuid4(), community.id, target_role, membership_type=target_type
    )
    mock_uow.community_members.get_by_user_and_community.return_value = target
    return actor, community, target


@pytest.mark.asyncio
async def test_moderator_promotes_member_to_moderator(mock_uow):
    actor, community, target = setup(mock_uow, CommunityRole.moderator, CommunityRole.member)

    result = await AssignModeratorUseCase(mock_uow).execute(actor.id, community.id, target.user_id)

    assert result.is_ok()
    assert result.value.old_role == "member"
    assert result.value.new_role == "moderator"
    assert target.role == CommunityRole.moderator
    audit = mock_uow.audit_events.create.call_args[0][0]
    assert audit.event_metadata == {
        "target_user_id": str(target.user_id),
        "old_role": "member",
        "new_role": "moderator",
    }
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_moderator_cannot_demote_fellow_moderator(mock_uow):
    actor, community, target = setup(mock_uow, CommunityRole.moderator, CommunityRole.moderator)

    result = await RemoveModeratorUseCase(mock_uow).execute(actor.id, community.id, target.user_id)

    assert result.error.code == "INSUFFICIENT_RANK"
    assert target.role == CommunityRole.moderator


@pytest.mark.asyncio
async def test_admin_demotes_moderator(mock_uow):
    actor, community, target = setup(mock_uow, CommunityRole.admin, CommunityRole.moderator)

    result = await RemoveModeratorUseCase(mock_uow).execute(actor.id, community.id, target.user_id)

    assert result.value.new_role == "member"


@pytest.mark.asyncio
async def test_moderator_cannot_assign_admin(mock_uow):
    actor, community, target = setup(mock_uow, CommunityRole.moderator, CommunityRole.member)

    result = await AssignAdminUseCase(mock_uow).execute(actor.id, community.id, target.user_id)

    assert result.error.code == "FORBIDDEN"


@pytest.mark.asyncio
async def test_admin_assigns_admin(mock_uow):
    actor, community, target = setup(mock_uow, CommunityRole.admin, CommunityRole.moderator)

    result = await AssignAdminUseCase(mock_uow).execute(actor.id, community.id, target.user_id)

    assert target.role == CommunityRole.admin
    assert result.value.old_role == "moderator"


@pytest.mark.asyncio
async def test_admin_demotes_fellow_admin(mock_uow):
    actor, community, target = setup(mock_uow, CommunityRole.admin, CommunityRole.admin)

    result = await RemoveAdminUseCase(mock_uow).execute(actor.id, community.id, target.user_id)

    assert result.is_ok()
    assert target.role == CommunityRole.member


@pytest.mark.asyncio
async def test_creator_cannot_be_demoted_by_community_admin(mock_uow):
    creator_id = uuid4()
    actor, community, target = setup(
        mock_uow, CommunityRole.admin, CommunityRole.admin, created_by=creator_id
    )

    result = await RemoveAdminUseCase(mock_uow).execute(actor.id, community.id, creator_id)

    assert result.error.code == "CANNOT_MODIFY_CREATOR"
    assert target.role == CommunityRole.admin


@pytest.mark.asyncio
async def test_app_admin_demotes_creator(mock_uow):
    creator_id = uuid4()
    community = make_community(created_by=creator_id)
    actor = make_user(role=AppRole.admin)
    register_users(mock_uow, actor)
    register_communities(mock_uow, community)
    target = make_member(creator_id, community.id, CommunityRole.admin)
    mock_uow.community_members.get_by_user_and_community.return_value = target

    result = await RemoveAdminUseCase(mock_uow).execute(actor.id, community.id, creator_id)

    assert result.is_ok()


@pytest.mark.asyncio
async def test_cannot_change_own_role(mock_uow):
    actor, community, _ = setup(mock_uow, CommunityRole.admin, CommunityRole.admin)

    result = await RemoveAdminUseCase(mock_uow).execute(actor.id, community.id, actor.id)

    assert result.error.code == "CANNOT_MODIFY_SELF"


@pytest.mark.asyncio
async def test_follower_cannot_be_promoted(mock_uow):
    actor, community, target = setup(
        mock_uow, CommunityRole.admin, CommunityRole.member, target_type=MembershipType.follower
    )

    result = await AssignModeratorUseCase(mock_uow).execute(actor.id, community.id, target.user_id)

    assert result.error.code == "NOT_A_MEMBER"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "use_case_cls, target_role, code",
    [
        (AssignModeratorUseCase, CommunityRole.moderator, "ALREADY_MODERATOR"),
        (AssignModeratorUseCase, CommunityRole.admin, "ALREADY_ADMIN"),
        (AssignAdminUseCase, CommunityRole.admin, "ALREADY_ADMIN"),
        (RemoveModeratorUseCase, CommunityRole.member, "NOT_A_MODERATOR"),
        (RemoveAdminUseCase, CommunityRole.moderator, "NOT_AN_ADMIN"),
    ],
)
async def test_state_checks(mock_uow, use_case_cls, target_role, code):
    actor, community, target = setup(mock_uow, CommunityRole.admin, target_role)

    result = await use_case_cls(mock_uow).execute(actor.id, community.id, target.user_id)

    assert result.error.code == code
    mock_uow.community_members.update.assert_not_called()


@pytest.mark.asyncio
async def test_org_admin_with_row_in_own_org_assigns_admin(mock_uow):
    org_id = uuid4()
    community = make_community(org_id=org_id)
    actor = make_user(org_id=org_id)
    register_users(mock_uow, actor)
    register_communities(mock_uow, community)
    grant_roles(
        mock_uow,
        [(make_member(actor.id, community.id, CommunityRole.member), org_id)],
        org_member=make_org_member(actor.id, org_id, OrgMemberRole.admin),
    )
    target = make_member(uuid4(), community.id, CommunityRole.member)
    mock_uow.community_members.get_by_user_and_community.return_value = target

    result = await AssignAdminUseCase(mock_uow).execute(actor.id, community.id, target.user_id)

    assert result.is_ok()
