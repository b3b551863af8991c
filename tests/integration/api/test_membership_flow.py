import pytest
from httpx import AsyncClient
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from src.domain.entities import (
    CommunityMember,
    CommunityMemberRequest,
    CommunityRole,
    CommunityType,
    MembershipType,
    RequestStatus,
    RequestType,
)
from tests.fixtures.factories import make_community, make_member, make_request, make_user


@pytest.mark.asyncio
async def test_join_public_community(client: AsyncClient, seed, auth_headers):
    user = make_user()
    community = make_community()
    await seed(user, community)

    response = await client.post(
        f"/communities/{community.id}/join", headers=auth_headers(user)
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "approved"
    assert data["membership"]["role"] == "member"
    assert data["membership"]["membership_type"] == "member"

    again = await client.post(f"/communities/{community.id}/join", headers=auth_headers(user))
    assert again.status_code == 409
    assert again.json()["error"]["code"] == "ALREADY_MEMBER"


@pytest.mark.asyncio
async def test_private_join_request_approved_by_moderator(
    client: AsyncClient, db_session, seed, auth_headers
):
    """
    Given a private community with a moderator
    When a user asks to join and the moderator approves
    Then the user becomes a member and the request is stamped
    """
    creator = make_user()
    moderator = make_user()
    applicant = make_user()
    community = make_community(type=CommunityType.private, created_by=creator.id)
    await seed(
        creator,
        moderator,
        applicant,
        community,
        make_member(creator.id, community.id, CommunityRole.admin),
        make_member(moderator.id, community.id, CommunityRole.moderator),
    )

    join = await client.post(
        f"/communities/{community.id}/join",
        json={"message": "Hi there"},
        headers=auth_headers(applicant),
    )
    assert join.status_code == 200
    assert join.json()["status"] == "pending"
    request_id = join.json()["request"]["id"]

    duplicate = await client.post(
        f"/communities/{community.id}/join", headers=auth_headers(applicant)
    )
    assert duplicate.status_code == 409
    assert duplicate.json()["error"]["code"] == "REQUEST_ALREADY_PENDING"

    pending = await client.get(
        f"/communities/{community.id}/requests", headers=auth_headers(moderator)
    )
    assert [r["id"] for r in pending.json()] == [request_id]

    approve = await client.post(f"/requests/{request_id}/approve", headers=auth_headers(moderator))
    assert approve.status_code == 200
    assert approve.json()["status"] == "approved"

    again = await client.post(f"/requests/{request_id}/approve", headers=auth_headers(moderator))
    assert again.status_code == 409
    assert again.json()["error"]["code"] == "REQUEST_ALREADY_PROCESSED"

    result = await db_session.exec(
        select(CommunityMember).where(
            CommunityMember.user_id == applicant.id,
            CommunityMember.community_id == community.id,
        )
    )
    member = result.one()
    assert member.role == CommunityRole.member
    assert member.membership_type == MembershipType.member


@pytest.mark.asyncio
async def test_member_cannot_review_requests(client: AsyncClient, seed, auth_headers):
    member = make_user()
    applicant = make_user()
    community = make_community(type=CommunityType.private)
    request = make_request(applicant.id, community.id)
    await seed(member, applicant, community, make_member(member.id, community.id), request)

    response = await client.post(f"/requests/{request.id}/reject", headers=auth_headers(member))

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.asyncio
async def test_cancel_own_request(client: AsyncClient, seed, auth_headers):
    applicant = make_user()
    community = make_community(type=CommunityType.private)
    request = make_request(applicant.id, community.id)
    await seed(applicant, community, request)

    response = await client.delete(f"/requests/{request.id}", headers=auth_headers(applicant))

    assert response.status_code == 200
    assert response.json() == {"status": "cancelled"}

    mine = await client.get(
        f"/communities/{community.id}/requests/mine", headers=auth_headers(applicant)
    )
    assert mine.json() == []


@pytest.mark.asyncio
async def test_follow_then_join_needs_review(client: AsyncClient, seed, auth_headers):
    user = make_user()
    community = make_community()
    await seed(user, community)

    follow = await client.post(f"/communities/{community.id}/follow", headers=auth_headers(user))
    assert follow.json()["membership"]["membership_type"] == "follower"

    join = await client.post(f"/communities/{community.id}/join", headers=auth_headers(user))
    assert join.json()["status"] == "pending"


@pytest.mark.asyncio
async def test_kick_and_leave(client: AsyncClient, db_session, seed, auth_headers):
    creator = make_user()
    moderator = make_user()
    member = make_user()
    community = make_community(created_by=creator.id)
    await seed(
        creator,
        moderator,
        member,
        community,
        make_member(creator.id, community.id, CommunityRole.admin),
        make_member(moderator.id, community.id, CommunityRole.moderator),
        make_member(member.id, community.id),
    )

    kick_creator = await client.delete(
        f"/communities/{community.id}/members/{creator.id}", headers=auth_headers(moderator)
    )
    assert kick_creator.status_code == 403

    kick = await client.delete(
        f"/communities/{community.id}/members/{member.id}", headers=auth_headers(moderator)
    )
    assert kick.status_code == 200
    assert kick.json() == {"status": "removed"}

    leave = await client.post(f"/communities/{community.id}/leave", headers=auth_headers(moderator))
    assert leave.json() == {"status": "left"}

    creator_leave = await client.post(
        f"/communities/{community.id}/leave", headers=auth_headers(creator)
    )
    assert creator_leave.status_code == 403
    assert creator_leave.json()["error"]["code"] == "CREATOR_CANNOT_LEAVE"

    result = await db_session.exec(
        select(CommunityMember).where(CommunityMember.community_id == community.id)
    )
    assert [m.user_id for m in result.all()] == [creator.id]


@pytest.mark.asyncio
async def test_admin_kicks_fellow_admin_but_not_creator(client: AsyncClient, seed, auth_headers):
    creator = make_user()
    admin = make_user()
    other_admin = make_user()
    community = make_community(created_by=creator.id)
    await seed(
        creator,
        admin,
        other_admin,
        community,
        make_member(creator.id, community.id, CommunityRole.admin),
        make_member(admin.id, community.id, CommunityRole.admin),
        make_member(other_admin.id, community.id, CommunityRole.admin),
    )

    kick = await client.delete(
        f"/communities/{community.id}/members/{other_admin.id}", headers=auth_headers(admin)
    )
    assert kick.status_code == 200

    kick_creator = await client.delete(
        f"/communities/{community.id}/members/{creator.id}", headers=auth_headers(admin)
    )
    assert kick_creator.status_code == 403
    assert kick_creator.json()["error"]["code"] == "CANNOT_MODIFY_CREATOR"


@pytest.mark.asyncio
async def test_second_pending_request_rejected_by_database(db_session, seed):
    user = make_user()
    community = make_community(type=CommunityType.private)
    await seed(user, community, make_request(user.id, community.id))

    db_session.add(
        CommunityMemberRequest(
            user_id=user.id,
            community_id=community.id,
            request_type=RequestType.join,
            status=RequestStatus.pending,
        )
    )
    with pytest.raises(IntegrityError):
        await db_session.flush()
    await db_session.rollback()

    # Only pending rows of the same type collide
    db_session.add(
        CommunityMemberRequest(
            user_id=user.id,
            community_id=community.id,
            request_type=RequestType.follow,
            status=RequestStatus.pending,
        )
    )
    await db_session.flush()


@pytest.mark.asyncio
async def test_rejected_request_does_not_block_new_one(client: AsyncClient, seed, auth_headers):
    user = make_user()
    community = make_community(type=CommunityType.private)
    await seed(
        user,
        community,
        make_request(user.id, community.id, status=RequestStatus.rejected),
    )

    response = await client.post(f"/communities/{community.id}/join", headers=auth_headers(user))

    assert response.status_code == 200
    assert response.json()["status"] == "pending"
