from datetime import timedelta
from uuid import uuid4

import pytest

from src.app.use_cases.invites import (
    CreateInviteUseCase,
    GetInviteInfoUseCase,
    JoinViaInviteUseCase,
)
from src.domain.entities import CommunityRole, MembershipType
from tests.fixtures.factories import (
    grant_roles,
    make_community,
    make_invite,
    make_member,
    make_user,
    register_communities,
    register_users,
)


@pytest.fixture
def invite_setup(mock_uow):
    community = make_community()
    actor = make_user()
    register_users(mock_uow, actor)
    register_communities(mock_uow, community)
    return actor, community


class TestCreateInvite:
    @pytest.mark.asyncio
    async def test_moderator_creates_member_invite(self, mock_uow, invite_setup):
        actor, community = invite_setup
        grant_roles(mock_uow, [(make_member(actor.id, community.id, CommunityRole.moderator), None)])

        result = await CreateInviteUseCase(mock_uow).execute(
            actor.id, community.id, email="Bob@Example.com"
        )

        assert result.is_ok()
        invite = mock_uow.invites.create.call_args[0][0]
        assert invite.email == "bob@example.com"
        assert invite.expires_at - invite.created_at == timedelta(days=7)
        assert result.value.link == f"/communities/join/{invite.code}"
        mock_uow.commit.assert_called_once()

    @pytest.mark.asyncio
    async def test_member_cannot_invite(self, mock_uow, invite_setup):
        actor, community = invite_setup
        grant_roles(mock_uow, [(make_member(actor.id, community.id), None)])

        result = await CreateInviteUseCase(mock_uow).execute(actor.id, community.id)

        assert result.error.code == "FORBIDDEN"
        mock_uow.invites.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_moderator_cannot_invite_admin(self, mock_uow, invite_setup):
        actor, community = invite_setup
        grant_roles(mock_uow, [(make_member(actor.id, community.id, CommunityRole.moderator), None)])

        result = await CreateInviteUseCase(mock_uow).execute(
            actor.id, community.id, role=CommunityRole.admin
        )

        assert result.error.code == "FORBIDDEN"

    @pytest.mark.asyncio
    async def test_admin_invites_admin(self, mock_uow, invite_setup):
        actor, community = invite_setup
        grant_roles(mock_uow, [(make_member(actor.id, community.id, CommunityRole.admin), None)])

        result = await CreateInviteUseCase(mock_uow).execute(
            actor.id, community.id, role=CommunityRole.admin, expires_in_days=30
        )

        assert result.value.role == "admin"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("days", [0, 31])
    async def test_expiry_out_of_bounds(self, mock_uow, invite_setup, days):
        actor, community = invite_setup

        result = await CreateInviteUseCase(mock_uow, max_expiry_days=30).execute(
            actor.id, community.id, expires_in_days=days
        )

        assert result.error.code == "INVALID_EXPIRY"
        mock_uow.communities.get_by_id.assert_not_called()


class TestGetInviteInfo:
    @pytest.mark.asyncio
    async def test_returns_usable_invite(self, mock_uow, invite_setup):
        actor, community = invite_setup
        invite = make_invite(community.id, actor.id)
        mock_uow.invites.get_by_code.return_value = invite

        result = await GetInviteInfoUseCase(mock_uow).execute(invite.code)

        assert result.value.community_name == community.name

    @pytest.mark.asyncio
    async def test_unknown_code(self, mock_uow):
        result = await GetInviteInfoUseCase(mock_uow).execute("nope")

        assert result.error.code == "INVITE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_expired(self, mock_uow, invite_setup):
        actor, community = invite_setup
        mock_uow.invites.get_by_code.return_value = make_invite(
            community.id, actor.id, expires_in=timedelta(days=-1)
        )

        result = await GetInviteInfoUseCase(mock_uow).execute("code")

        assert result.error.code == "INVITE_EXPIRED"

    @pytest.mark.asyncio
    async def test_used(self, mock_uow, invite_setup):
        actor, community = invite_setup
        mock_uow.invites.get_by_code.return_value = make_invite(community.id, actor.id, used=True)

        result = await GetInviteInfoUseCase(mock_uow).execute("code")

        assert result.error.code == "INVITE_ALREADY_USED"


class TestJoinViaInvite:
    def wire(self, mock_uow, role=CommunityRole.member, email=None, community_org=None, user_org=None):
        community = make_community(org_id=community_org)
        user = make_user(org_id=user_org, email="alice@example.com")
        invite = make_invite(community.id, uuid4(), role=role, email=email)
        register_users(mock_uow, user)
        register_communities(mock_uow, community)
        mock_uow.invites.get_by_code.return_value = invite
        return user, community, invite

    @pytest.mark.asyncio
    async def test_creates_membership_and_consumes_invite(self, mock_uow):
        user, community, invite = self.wire(mock_uow, role=CommunityRole.moderator)

        result = await JoinViaInviteUseCase(mock_uow).execute(user.id, invite.code)

        assert result.value.status == "joined"
        assert result.value.role == "moderator"
        assert invite.used_by == user.id
        assert invite.used_at is not None
        mock_uow.invites.update.assert_called_once_with(invite)
        mock_uow.commit.assert_called_once()

    @pytest.mark.asyncio
    async def test_upgrades_follower(self, mock_uow):
        user, community, invite = self.wire(mock_uow)
        follower = make_member(user.id, community.id, membership_type=MembershipType.follower)
        mock_uow.community_members.get_by_user_and_community.return_value = follower

        result = await JoinViaInviteUseCase(mock_uow).execute(user.id, invite.code)

        assert result.value.status == "upgraded"
        assert follower.membership_type == MembershipType.member

    @pytest.mark.asyncio
    async def test_never_downgrades(self, mock_uow):
        user, community, invite = self.wire(mock_uow, role=CommunityRole.member)
        admin_row = make_member(user.id, community.id, CommunityRole.admin)
        mock_uow.community_members.get_by_user_and_community.return_value = admin_row

        result = await JoinViaInviteUseCase(mock_uow).execute(user.id, invite.code)

        assert result.value.status == "unchanged"
        assert admin_row.role == CommunityRole.admin
        assert invite.used_by == user.id

    @pytest.mark.asyncio
    async def test_email_mismatch(self, mock_uow):
        user, _, invite = self.wire(mock_uow, email="bob@example.com")

        result = await JoinViaInviteUseCase(mock_uow).execute(user.id, invite.code)

        assert result.error.code == "INVITE_EMAIL_MISMATCH"
        assert invite.used_at is None

    @pytest.mark.asyncio
    async def test_email_match_ignores_case(self, mock_uow):
        user, _, invite = self.wire(mock_uow, email="ALICE@example.com")

        result = await JoinViaInviteUseCase(mock_uow).execute(user.id, invite.code)

        assert result.is_ok()

    @pytest.mark.asyncio
    async def test_cross_org(self, mock_uow):
        user, _, invite = self.wire(mock_uow, community_org=uuid4(), user_org=uuid4())

        result = await JoinViaInviteUseCase(mock_uow).execute(user.id, invite.code)

        assert result.error.code == "CROSS_ORG_INVITE"
        mock_uow.community_members.create.assert_not_called()
