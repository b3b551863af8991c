from typing import List, Optional
from uuid import UUID

from sqlmodel import or_, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_ids(self, user_ids: List[UUID]) -> List[User]:
        """Get all users with the given IDs"""
        if not user_ids:
            return []
        stmt = select(User).where(User.id.in_(user_ids))
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_by_org(
        self, org_id: UUID, verified_only: bool = True, search: Optional[str] = None
    ) -> List[User]:
        """List users whose home organization is org_id"""
        stmt = select(User).where(User.org_id == org_id)
        if verified_only:
            stmt = stmt.where(User.email_verified == True)  # noqa: E712
        if search and search.strip():
            term = f"%{search.strip()}%"
            stmt = stmt.where(or_(User.name.ilike(term), User.email.ilike(term)))
        result = await self.session.exec(stmt.order_by(User.name))
        return list(result.all())

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user
