from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import CommunityInvite


class ICommunityInviteRepository(ABC):
    """CommunityInvite repository interface - application layer"""

    @abstractmethod
    async def get_by_code(self, code: str) -> Optional[CommunityInvite]:
        """Get invite by its code"""
        pass

    @abstractmethod
    async def create(self, invite: CommunityInvite) -> CommunityInvite:
        """Create a new invite"""
        pass

    @abstractmethod
    async def update(self, invite: CommunityInvite) -> CommunityInvite:
        """Update existing invite"""
        pass
