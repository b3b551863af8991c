from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import delete, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.community_member_request_repository import (
    DuplicatePendingRequestError,
    ICommunityMemberRequestRepository,
)
from src.domain.entities import CommunityMemberRequest, RequestStatus, RequestType


class CommunityMemberRequestRepository(ICommunityMemberRequestRepository):
    """CommunityMemberRequest repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, request_id: UUID) -> Optional[CommunityMemberRequest]:
        """Get request by ID"""
        stmt = select(CommunityMemberRequest).where(CommunityMemberRequest.id == request_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_pending(
        self, user_id: UUID, community_id: UUID, request_type: RequestType
    ) -> Optional[CommunityMemberRequest]:
        """Get the pending request of a type for a user in a community"""
        stmt = select(CommunityMemberRequest).where(
            CommunityMemberRequest.user_id == user_id,
            CommunityMemberRequest.community_id == community_id,
            CommunityMemberRequest.request_type == request_type,
            CommunityMemberRequest.status == RequestStatus.pending,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list_pending_by_community(
        self, community_id: UUID
    ) -> List[CommunityMemberRequest]:
        """List pending requests of a community, newest first"""
        stmt = (
            select(CommunityMemberRequest)
            .where(
                CommunityMemberRequest.community_id == community_id,
                CommunityMemberRequest.status == RequestStatus.pending,
            )
            .order_by(CommunityMemberRequest.requested_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_pending_by_user_and_community(
        self, user_id: UUID, community_id: UUID
    ) -> List[CommunityMemberRequest]:
        """List a user's pending requests in a community"""
        stmt = select(CommunityMemberRequest).where(
            CommunityMemberRequest.user_id == user_id,
            CommunityMemberRequest.community_id == community_id,
            CommunityMemberRequest.status == RequestStatus.pending,
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, request: CommunityMemberRequest) -> CommunityMemberRequest:
        """Create a new request; the partial unique index rejects a second pending one"""
        self.session.add(request)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise DuplicatePendingRequestError(
                f"Pending {request.request_type} request already exists"
            ) from exc
        await self.session.refresh(request)
        return request

    async def update(self, request: CommunityMemberRequest) -> CommunityMemberRequest:
        """Update existing request"""
        self.session.add(request)
        await self.session.flush()
        await self.session.refresh(request)
        return request

    async def delete(self, request: CommunityMemberRequest) -> None:
        """Delete a request"""
        await self.session.delete(request)
        await self.session.flush()

    async def delete_by_user_and_community(self, user_id: UUID, community_id: UUID) -> int:
        """Delete every request of a user in a community"""
        stmt = delete(CommunityMemberRequest).where(
            CommunityMemberRequest.user_id == user_id,
            CommunityMemberRequest.community_id == community_id,
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
