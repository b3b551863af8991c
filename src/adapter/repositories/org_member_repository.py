from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.org_member_repository import IOrgMemberRepository
from src.domain.entities import OrgMember


class OrgMemberRepository(IOrgMemberRepository):
    """OrgMember repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_and_org(self, user_id: UUID, org_id: UUID) -> Optional[OrgMember]:
        """Get org membership by user and organization"""
        stmt = select(OrgMember).where(
            OrgMember.user_id == user_id, OrgMember.org_id == org_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, org_member: OrgMember) -> OrgMember:
        """Create a new org membership"""
        self.session.add(org_member)
        await self.session.flush()
        await self.session.refresh(org_member)
        return org_member

    async def update(self, org_member: OrgMember) -> OrgMember:
        """Update existing org membership"""
        self.session.add(org_member)
        await self.session.flush()
        await self.session.refresh(org_member)
        return org_member
