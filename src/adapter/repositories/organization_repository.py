from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.organization_repository import IOrganizationRepository
from src.domain.entities import Organization


class OrganizationRepository(IOrganizationRepository):
    """Organization repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, org_id: UUID) -> Optional[Organization]:
        """Get organization by ID"""
        stmt = select(Organization).where(Organization.id == org_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, org: Organization) -> Organization:
        """Create a new organization"""
        self.session.add(org)
        await self.session.flush()
        await self.session.refresh(org)
        return org
