from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Community


class ICommunityRepository(ABC):
    """Community repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, community_id: UUID) -> Optional[Community]:
        """Get community by ID"""
        pass

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Optional[Community]:
        """Get community by slug"""
        pass

    @abstractmethod
    async def get_by_ids(self, community_ids: List[UUID]) -> List[Community]:
        """Get all communities with the given IDs"""
        pass

    @abstractmethod
    async def list_by_org(self, org_id: UUID) -> List[Community]:
        """List communities owned by an organization"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Community]:
        """List every community"""
        pass

    @abstractmethod
    async def create(self, community: Community) -> Community:
        """Create a new community"""
        pass
