from typing import Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.community_invite_repository import ICommunityInviteRepository
from src.domain.entities import CommunityInvite


class CommunityInviteRepository(ICommunityInviteRepository):
    """CommunityInvite repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_code(self, code: str) -> Optional[CommunityInvite]:
        """Get invite by its code"""
        stmt = select(CommunityInvite).where(CommunityInvite.code == code)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, invite: CommunityInvite) -> CommunityInvite:
        """Create a new invite"""
        self.session.add(invite)
        await self.session.flush()
        await self.session.refresh(invite)
        return invite

    async def update(self, invite: CommunityInvite) -> CommunityInvite:
        """Update existing invite"""
        self.session.add(invite)
        await self.session.flush()
        await self.session.refresh(invite)
        return invite
