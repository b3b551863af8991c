from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import CommunityMember


class ICommunityMemberRepository(ABC):
    """CommunityMember repository interface - application layer"""

    @abstractmethod
    async def get_by_user_and_community(
        self, user_id: UUID, community_id: UUID
    ) -> Optional[CommunityMember]:
        """Get the single membership row of a user in a community"""
        pass

    @abstractmethod
    async def get_roles_with_org(
        self, user_id: UUID
    ) -> List[Tuple[CommunityMember, Optional[UUID]]]:
        """
        Get all membership rows of a user, each paired with the owning
        organization ID of its community.
        """
        pass

    @abstractmethod
    async def get_by_community_and_users(
        self, community_id: UUID, user_ids: List[UUID]
    ) -> List[CommunityMember]:
        """Get membership rows of the given users in a community"""
        pass

    @abstractmethod
    async def create(self, member: CommunityMember) -> CommunityMember:
        """Create a new membership row"""
        pass

    @abstractmethod
    async def update(self, member: CommunityMember) -> CommunityMember:
        """Update existing membership row"""
        pass

    @abstractmethod
    async def delete(self, member: CommunityMember) -> None:
        """Delete a membership row"""
        pass
