from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.audit_event_repository import AuditEventRepository
from src.adapter.repositories.community_invite_repository import CommunityInviteRepository
from src.adapter.repositories.community_member_repository import CommunityMemberRepository
from src.adapter.repositories.community_member_request_repository import (
    CommunityMemberRequestRepository,
)
from src.adapter.repositories.community_repository import CommunityRepository
from src.adapter.repositories.org_member_repository import OrgMemberRepository
from src.adapter.repositories.organization_repository import OrganizationRepository
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.orgs = OrganizationRepository(self.session)
        self.org_members = OrgMemberRepository(self.session)
        self.communities = CommunityRepository(self.session)
        self.community_members = CommunityMemberRepository(self.session)
        self.member_requests = CommunityMemberRequestRepository(self.session)
        self.invites = CommunityInviteRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
