from uuid import uuid4

import pytest

from src.app.use_cases.membership import LeaveCommunityUseCase, RemoveUserFromCommunityUseCase
from src.domain.entities import AppRole, CommunityRole, MembershipType
from tests.fixtures.factories import (
    grant_roles,
    make_community,
    make_member,
    make_user,
    register_communities,
    register_users,
)


def setup_actor(mock_uow, community, role=None, app_role=AppRole.user):
    actor = make_user(role=app_role)
    register_users(mock_uow, actor)
    register_communities(mock_uow, community)
    if role is not None:
        grant_roles(mock_uow, [(make_member(actor.id, community.id, role), community.org_id)])
    return actor


@pytest.mark.asyncio
async def test_moderator_removes_member(mock_uow):
    community = make_community()
    actor = setup_actor(mock_uow, community, CommunityRole.moderator)
    target = make_member(uuid4(), community.id, CommunityRole.member)
    mock_uow.community_members.get_by_user_and_community.return_value = target
    mock_uow.member_requests.delete_by_user_and_community.return_value = 2

    result = await RemoveUserFromCommunityUseCase(mock_uow).execute(
        actor.id, community.id, target.user_id
    )

    assert result.is_ok()
    assert result.value.status == "removed"
    mock_uow.community_members.delete.assert_called_once_with(target)
    mock_uow.member_requests.delete_by_user_and_community.assert_called_once_with(
        target.user_id, community.id
    )
    audit = mock_uow.audit_events.create.call_args[0][0]
    assert audit.action == "member_removed"
    assert audit.event_metadata["deleted_requests"] == 2
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
@pytest.mark.parametrize("target_role", [CommunityRole.moderator, CommunityRole.admin])
async def test_moderator_cannot_remove_same_or_higher(mock_uow, target_role):
    community = make_community()
    actor = setup_actor(mock_uow, community, CommunityRole.moderator)
    target = make_member(uuid4(), community.id, target_role)
    mock_uow.community_members.get_by_user_and_community.return_value = target

    result = await RemoveUserFromCommunityUseCase(mock_uow).execute(
        actor.id, community.id, target.user_id
    )

    assert result.error.code == "INSUFFICIENT_RANK"
    mock_uow.community_members.delete.assert_not_called()


@pytest.mark.asyncio
async def test_admin_removes_follower(mock_uow):
    community = make_community()
    actor = setup_actor(mock_uow, community, CommunityRole.admin)
    target = make_member(uuid4(), community.id, membership_type=MembershipType.follower)
    mock_uow.community_members.get_by_user_and_community.return_value = target

    result = await RemoveUserFromCommunityUseCase(mock_uow).execute(
        actor.id, community.id, target.user_id
    )

    assert result.is_ok()


@pytest.mark.asyncio
async def test_admin_removes_fellow_admin(mock_uow):
    community = make_community(created_by=uuid4())
    actor = setup_actor(mock_uow, community, CommunityRole.admin)
    target = make_member(uuid4(), community.id, CommunityRole.admin)
    mock_uow.community_members.get_by_user_and_community.return_value = target

    result = await RemoveUserFromCommunityUseCase(mock_uow).execute(
        actor.id, community.id, target.user_id
    )

    assert result.is_ok()
    mock_uow.community_members.delete.assert_called_once_with(target)
    audit = mock_uow.audit_events.create.call_args[0][0]
    assert audit.event_metadata["removed_user_role"] == "admin"


@pytest.mark.asyncio
async def test_creator_protected_from_community_admin(mock_uow):
    creator_id = uuid4()
    community = make_community(created_by=creator_id)
    actor = setup_actor(mock_uow, community, CommunityRole.admin)
    mock_uow.community_members.get_by_user_and_community.return_value = make_member(
        creator_id, community.id, CommunityRole.member
    )

    result = await RemoveUserFromCommunityUseCase(mock_uow).execute(
        actor.id, community.id, creator_id
    )

    assert result.error.code == "CANNOT_MODIFY_CREATOR"


@pytest.mark.asyncio
async def test_app_admin_removes_creator(mock_uow):
    creator_id = uuid4()
    community = make_community(created_by=creator_id)
    actor = setup_actor(mock_uow, community, app_role=AppRole.admin)
    mock_uow.community_members.get_by_user_and_community.return_value = make_member(
        creator_id, community.id, CommunityRole.admin
    )

    result = await RemoveUserFromCommunityUseCase(mock_uow).execute(
        actor.id, community.id, creator_id
    )

    assert result.is_ok()


@pytest.mark.asyncio
async def test_remove_self_rejected(mock_uow):
    community = make_community()
    actor = setup_actor(mock_uow, community, CommunityRole.admin)
    mock_uow.community_members.get_by_user_and_community.return_value = make_member(
        actor.id, community.id, CommunityRole.admin
    )

    result = await RemoveUserFromCommunityUseCase(mock_uow).execute(
        actor.id, community.id, actor.id
    )

    assert result.error.code == "CANNOT_MODIFY_SELF"


@pytest.mark.asyncio
async def test_member_cannot_remove_anyone(mock_uow):
    community = make_community()
    actor = setup_actor(mock_uow, community, CommunityRole.member)

    result = await RemoveUserFromCommunityUseCase(mock_uow).execute(
        actor.id, community.id, uuid4()
    )

    assert result.error.code == "FORBIDDEN"


@pytest.mark.asyncio
async def test_remove_unknown_membership(mock_uow):
    community = make_community()
    actor = setup_actor(mock_uow, community, CommunityRole.admin)

    result = await RemoveUserFromCommunityUseCase(mock_uow).execute(
        actor.id, community.id, uuid4()
    )

    assert result.error.code == "MEMBERSHIP_NOT_FOUND"


@pytest.mark.asyncio
async def test_leave_deletes_row(mock_uow):
    community = make_community()
    user_id = uuid4()
    row = make_member(user_id, community.id)
    register_communities(mock_uow, community)
    mock_uow.community_members.get_by_user_and_community.return_value = row

    result = await LeaveCommunityUseCase(mock_uow).execute(user_id, community.id)

    assert result.value.status == "left"
    mock_uow.community_members.delete.assert_called_once_with(row)


@pytest.mark.asyncio
async def test_creator_cannot_leave(mock_uow):
    creator_id = uuid4()
    community = make_community(created_by=creator_id)
    register_communities(mock_uow, community)
    mock_uow.community_members.get_by_user_and_community.return_value = make_member(
        creator_id, community.id, CommunityRole.admin
    )

    result = await LeaveCommunityUseCase(mock_uow).execute(creator_id, community.id)

    assert result.error.code == "CREATOR_CANNOT_LEAVE"
    mock_uow.community_members.delete.assert_not_called()


@pytest.mark.asyncio
async def test_leave_without_row(mock_uow):
    community = make_community()
    register_communities(mock_uow, community)

    result = await LeaveCommunityUseCase(mock_uow).execute(uuid4(), community.id)

    assert result.error.code == "NOT_A_MEMBER"
