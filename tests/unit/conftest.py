import pytest
from unittest.mock import AsyncMock, MagicMock

REPOSITORY_METHODS = {
    "users": ["get_by_id", "get_by_ids", "list_by_org", "create", "update"],
    "orgs": ["get_by_id", "create"],
    "org_members": ["get_by_user_and_org", "create", "update"],
    "communities": ["get_by_id", "get_by_slug", "get_by_ids", "list_by_org", "list_all", "create"],
    "community_members": [
        "get_by_user_and_community",
        "get_roles_with_org",
        "get_by_community_and_users",
        "create",
        "update",
        "delete",
    ],
    "member_requests": [
        "get_by_id",
        "get_pending",
        "list_pending_by_community",
        "list_pending_by_user_and_community",
        "create",
        "update",
        "delete",
        "delete_by_user_and_community",
    ],
    "invites": ["get_by_code", "create", "update"],
    "audit_events": ["create", "get_by_community_paginated"],
}


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    for repo_name, methods in REPOSITORY_METHODS.items():
        repo = MagicMock()
        for method in methods:
            setattr(repo, method, AsyncMock(return_value=None))
        setattr(uow, repo_name, repo)

    # Reads that return collections default to empty
    uow.users.get_by_ids.return_value = []
    uow.users.list_by_org.return_value = []
    uow.communities.get_by_ids.return_value = []
    uow.communities.list_by_org.return_value = []
    uow.communities.list_all.return_value = []
    uow.community_members.get_roles_with_org.return_value = []
    uow.community_members.get_by_community_and_users.return_value = []
    uow.member_requests.list_pending_by_community.return_value = []
    uow.member_requests.list_pending_by_user_and_community.return_value = []
    uow.member_requests.delete_by_user_and_community.return_value = 0
    uow.audit_events.get_by_community_paginated.return_value = ([], None)

    # Creates/updates hand back what they were given
    for repo_name, methods in REPOSITORY_METHODS.items():
        repo = getattr(uow, repo_name)
        for method in ("create", "update"):
            if method in methods:
                getattr(repo, method).side_effect = lambda entity: entity
    return uow
