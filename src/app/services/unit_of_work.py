from abc import ABC, abstractmethod

from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.app.repositories.community_invite_repository import ICommunityInviteRepository
from src.app.repositories.community_member_repository import ICommunityMemberRepository
from src.app.repositories.community_member_request_repository import (
    ICommunityMemberRequestRepository,
)
from src.app.repositories.community_repository import ICommunityRepository
from src.app.repositories.org_member_repository import IOrgMemberRepository
from src.app.repositories.organization_repository import IOrganizationRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    orgs: IOrganizationRepository
    org_members: IOrgMemberRepository
    communities: ICommunityRepository
    community_members: ICommunityMemberRepository
    member_requests: ICommunityMemberRequestRepository
    invites: ICommunityInviteRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
