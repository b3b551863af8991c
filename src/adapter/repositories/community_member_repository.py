from typing import List, Optional, Tuple
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.community_member_repository import ICommunityMemberRepository
from src.domain.entities import Community, CommunityMember


class CommunityMemberRepository(ICommunityMemberRepository):
    """CommunityMember repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_and_community(
        self, user_id: UUID, community_id: UUID
    ) -> Optional[CommunityMember]:
        """Get the single membership row of a user in a community"""
        stmt = select(CommunityMember).where(
            CommunityMember.user_id == user_id,
            CommunityMember.community_id == community_id,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_roles_with_org(
        self, user_id: UUID
    ) -> List[Tuple[CommunityMember, Optional[UUID]]]:
        """Get membership rows of a user paired with each community's org ID"""
        stmt = (
            select(CommunityMember, Community.org_id)
            .join(Community, Community.id == CommunityMember.community_id)
            .where(CommunityMember.user_id == user_id)
        )
        result = await self.session.exec(stmt)
        return [(member, org_id) for member, org_id in result.all()]

    async def get_by_community_and_users(
        self, community_id: UUID, user_ids: List[UUID]
    ) -> List[CommunityMember]:
        """Get membership rows of the given users in a community"""
        if not user_ids:
            return []
        stmt = select(CommunityMember).where(
            CommunityMember.community_id == community_id,
            CommunityMember.user_id.in_(user_ids),
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, member: CommunityMember) -> CommunityMember:
        """Create a new membership row"""
        self.session.add(member)
        await self.session.flush()
        await self.session.refresh(member)
        return member

    async def update(self, member: CommunityMember) -> CommunityMember:
        """Update existing membership row"""
        self.session.add(member)
        await self.session.flush()
        await self.session.refresh(member)
        return member

    async def delete(self, member: CommunityMember) -> None:
        """Delete a membership row"""
        await self.session.delete(member)
        await self.session.flush()
