from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import CommunityMemberRequest, RequestType


class DuplicatePendingRequestError(Exception):
    """Raised when a second pending request of the same type is inserted"""


class ICommunityMemberRequestRepository(ABC):
    """CommunityMemberRequest repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, request_id: UUID) -> Optional[CommunityMemberRequest]:
        """Get request by ID"""
        pass

    @abstractmethod
    async def get_pending(
        self, user_id: UUID, community_id: UUID, request_type: RequestType
    ) -> Optional[CommunityMemberRequest]:
        """Get the pending request of a type for a user in a community"""
        pass

    @abstractmethod
    async def list_pending_by_community(
        self, community_id: UUID
    ) -> List[CommunityMemberRequest]:
        """List pending requests of a community, newest first"""
        pass

    @abstractmethod
    async def list_pending_by_user_and_community(
        self, user_id: UUID, community_id: UUID
    ) -> List[CommunityMemberRequest]:
        """List a user's pending requests in a community"""
        pass

    @abstractmethod
    async def create(self, request: CommunityMemberRequest) -> CommunityMemberRequest:
        """
        Create a new request.

        Raises:
            DuplicatePendingRequestError: a pending request of the same type
                already exists for this user and community
        """
        pass

    @abstractmethod
    async def update(self, request: CommunityMemberRequest) -> CommunityMemberRequest:
        """Update existing request"""
        pass

    @abstractmethod
    async def delete(self, request: CommunityMemberRequest) -> None:
        """Delete a request"""
        pass

    @abstractmethod
    async def delete_by_user_and_community(self, user_id: UUID, community_id: UUID) -> int:
        """Delete every request of a user in a community; returns rows deleted"""
        pass
