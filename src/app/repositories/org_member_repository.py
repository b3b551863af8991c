from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import OrgMember


class IOrgMemberRepository(ABC):
    """OrgMember repository interface - application layer"""

    @abstractmethod
    async def get_by_user_and_org(self, user_id: UUID, org_id: UUID) -> Optional[OrgMember]:
        """Get org membership by user and organization"""
        pass

    @abstractmethod
    async def create(self, org_member: OrgMember) -> OrgMember:
        """Create a new org membership"""
        pass

    @abstractmethod
    async def update(self, org_member: OrgMember) -> OrgMember:
        """Update existing org membership"""
        pass
