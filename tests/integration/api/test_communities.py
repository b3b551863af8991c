from uuid import uuid4

import pytest
from httpx import AsyncClient

from src.domain.entities import AppRole, CommunityRole, Organization, OrgMemberRole
from tests.fixtures.factories import make_community, make_member, make_org_member, make_user


@pytest.mark.asyncio
async def test_org_admin_creates_community(client: AsyncClient, seed, auth_headers):
    org = Organization(id=uuid4(), name="Acme", slug="acme")
    admin = make_user(org_id=org.id)
    await seed(org, admin, make_org_member(admin.id, org.id, OrgMemberRole.admin))

    response = await client.post(
        "/communities",
        json={"name": "Rustaceans", "slug": "rust", "type": "private"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 201
    data = response.json()
    assert data["org_id"] == str(org.id)
    assert data["created_by"] == str(admin.id)

    permissions = await client.get("/permissions", headers=auth_headers(admin))
    assert permissions.json()["community_roles"] == [
        {"community_id": data["id"], "role": "admin", "org_id": str(org.id)}
    ]

    duplicate = await client.post(
        "/communities",
        json={"name": "Rust again", "slug": "rust"},
        headers=auth_headers(admin),
    )
    assert duplicate.status_code == 409
    assert duplicate.json()["error"]["code"] == "SLUG_TAKEN"


@pytest.mark.asyncio
async def test_regular_user_cannot_create_community(client: AsyncClient, seed, auth_headers):
    user = make_user()
    await seed(user)

    response = await client.post(
        "/communities", json={"name": "Nope", "slug": "nope"}, headers=auth_headers(user)
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_postable_communities(client: AsyncClient, seed, auth_headers):
    user = make_user()
    open_community = make_community(name="General")
    announcements = make_community(
        name="Announcements", post_creation_min_role=CommunityRole.moderator
    )
    await seed(
        user,
        open_community,
        announcements,
        make_member(user.id, open_community.id),
        make_member(user.id, announcements.id),
    )

    response = await client.get("/communities/postable", headers=auth_headers(user))

    assert response.status_code == 200
    assert [(c["name"], c["reason"]) for c in response.json()] == [("General", "member")]


@pytest.mark.asyncio
async def test_app_admin_may_post_everywhere(client: AsyncClient, seed, auth_headers):
    admin = make_user(role=AppRole.admin)
    await seed(admin, make_community(name="B"), make_community(name="A"))

    response = await client.get("/communities/postable", headers=auth_headers(admin))

    assert [(c["name"], c["reason"]) for c in response.json()] == [
        ("A", "super_admin"),
        ("B", "super_admin"),
    ]


@pytest.mark.asyncio
async def test_audit_trail_newest_first(client: AsyncClient, seed, auth_headers):
    admin = make_user(email="admin@example.com")
    first = make_user()
    second = make_user()
    community = make_community(created_by=admin.id)
    await seed(admin, first, second, community, make_member(admin.id, community.id, CommunityRole.admin))

    for user in (first, second):
        joined = await client.post(
            f"/communities/{community.id}/join", headers=auth_headers(user)
        )
        assert joined.status_code == 200

    page = await client.get(
        f"/communities/{community.id}/audit-events?limit=1", headers=auth_headers(admin)
    )
    assert page.status_code == 200
    data = page.json()
    assert len(data["events"]) == 1
    assert data["events"][0]["action"] == "member_joined"
    assert data["next_cursor"] is not None

    rest = await client.get(
        f"/communities/{community.id}/audit-events",
        params={"limit": 10, "cursor": data["next_cursor"]},
        headers=auth_headers(admin),
    )
    assert len(rest.json()["events"]) == 1
    assert rest.json()["next_cursor"] is None

    denied = await client.get(
        f"/communities/{community.id}/audit-events", headers=auth_headers(first)
    )
    assert denied.status_code == 403
