from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.community_repository import ICommunityRepository
from src.domain.entities import Community


class CommunityRepository(ICommunityRepository):
    """Community repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, community_id: UUID) -> Optional[Community]:
        """Get community by ID"""
        stmt = select(Community).where(Community.id == community_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_slug(self, slug: str) -> Optional[Community]:
        """Get community by slug"""
        stmt = select(Community).where(Community.slug == slug)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_ids(self, community_ids: List[UUID]) -> List[Community]:
        """Get all communities with the given IDs"""
        if not community_ids:
            return []
        stmt = select(Community).where(Community.id.in_(community_ids))
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_by_org(self, org_id: UUID) -> List[Community]:
        """List communities owned by an organization"""
        stmt = select(Community).where(Community.org_id == org_id).order_by(Community.name)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_all(self) -> List[Community]:
        """List every community"""
        result = await self.session.exec(select(Community).order_by(Community.name))
        return list(result.all())

    async def create(self, community: Community) -> Community:
        """Create a new community"""
        self.session.add(community)
        await self.session.flush()
        await self.session.refresh(community)
        return community
