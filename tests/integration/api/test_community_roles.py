import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.entities import AuditEvent, CommunityRole
from tests.fixtures.factories import make_community, make_member, make_user


@pytest.fixture
def roster():
    creator = make_user(name="Creator")
    admin = make_user(name="Admin")
    moderator = make_user(name="Moderator")
    member = make_user(name="Member")
    community = make_community(created_by=creator.id)
    rows = [
        make_member(creator.id, community.id, CommunityRole.admin),
        make_member(admin.id, community.id, CommunityRole.admin),
        make_member(moderator.id, community.id, CommunityRole.moderator),
        make_member(member.id, community.id),
    ]
    return {
        "creator": creator,
        "admin": admin,
        "moderator": moderator,
        "member": member,
        "community": community,
        "entities": [creator, admin, moderator, member, community, *rows],
    }


@pytest.mark.asyncio
async def test_moderator_promotes_member(
    client: AsyncClient, db_session, seed, auth_headers, roster
):
    await seed(*roster["entities"])
    community = roster["community"]

    response = await client.post(
        f"/communities/{community.id}/moderators/{roster['member'].id}",
        headers=auth_headers(roster["moderator"]),
    )

    assert response.status_code == 200
    assert response.json() == {
        "user_id": str(roster["member"].id),
        "community_id": str(community.id),
        "old_role": "member",
        "new_role": "moderator",
    }

    result = await db_session.exec(
        select(AuditEvent).where(AuditEvent.community_id == community.id)
    )
    events = result.all()
    assert [e.action for e in events] == ["role_changed"]
    assert events[0].user_id == roster["moderator"].id


@pytest.mark.asyncio
async def test_moderator_cannot_demote_moderator(client: AsyncClient, seed, auth_headers, roster):
    other = make_user()
    await seed(
        *roster["entities"],
        other,
        make_member(other.id, roster["community"].id, CommunityRole.moderator),
    )

    response = await client.delete(
        f"/communities/{roster['community'].id}/moderators/{other.id}",
        headers=auth_headers(roster["moderator"]),
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "INSUFFICIENT_RANK"


@pytest.mark.asyncio
async def test_admin_promotes_and_demotes_admin(client: AsyncClient, seed, auth_headers, roster):
    await seed(*roster["entities"])
    community = roster["community"]
    headers = auth_headers(roster["admin"])

    promote = await client.post(
        f"/communities/{community.id}/admins/{roster['moderator'].id}", headers=headers
    )
    assert promote.json()["new_role"] == "admin"

    demote = await client.delete(
        f"/communities/{community.id}/admins/{roster['moderator'].id}", headers=headers
    )
    assert demote.json()["new_role"] == "member"


@pytest.mark.asyncio
async def test_creator_is_protected(client: AsyncClient, seed, auth_headers, roster):
    await seed(*roster["entities"])

    response = await client.delete(
        f"/communities/{roster['community'].id}/admins/{roster['creator'].id}",
        headers=auth_headers(roster["admin"]),
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "CANNOT_MODIFY_CREATOR"


@pytest.mark.asyncio
async def test_invalid_community_id(client: AsyncClient, seed, auth_headers, roster):
    await seed(*roster["entities"])

    response = await client.post(
        f"/communities/not-a-uuid/moderators/{roster['member'].id}",
        headers=auth_headers(roster["admin"]),
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_COMMUNITY_ID"
