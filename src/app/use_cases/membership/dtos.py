"""
Membership Use Case DTOs (Data Transfer Objects)

Response classes for the join/follow request workflow and member management.
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import CommunityMember, CommunityMemberRequest, CommunityRole, User


# ============================================================================
# Command DTOs
# ============================================================================


class OrgMemberToAdd(BaseModel):
    """One org member to add to a community, with the role to grant"""

    user_id: UUID
    role: CommunityRole = CommunityRole.member


# ============================================================================
# Shared DTOs
# ============================================================================


class CommunityMembershipInfo(BaseModel):
    """A community membership row"""

    user_id: str
    community_id: str
    role: str
    membership_type: str
    status: str

    @classmethod
    def from_entity(cls, member: CommunityMember) -> "CommunityMembershipInfo":
        return cls(
            user_id=str(member.user_id),
            community_id=str(member.community_id),
            role=member.role.value,
            membership_type=member.membership_type.value,
            status=member.status.value,
        )


class MemberRequestInfo(BaseModel):
    """A join/follow request"""

    id: str
    user_id: str
    community_id: str
    request_type: str
    status: str
    message: Optional[str] = None
    requested_at: str
    reviewed_at: Optional[str] = None
    reviewed_by: Optional[str] = None

    @classmethod
    def from_entity(cls, request: CommunityMemberRequest) -> "MemberRequestInfo":
        return cls(
            id=str(request.id),
            user_id=str(request.user_id),
            community_id=str(request.community_id),
            request_type=request.request_type.value,
            status=request.status.value,
            message=request.message,
            requested_at=request.requested_at.isoformat(),
            reviewed_at=request.reviewed_at.isoformat() if request.reviewed_at else None,
            reviewed_by=str(request.reviewed_by) if request.reviewed_by else None,
        )


class OrgMemberInfo(BaseModel):
    """Organization member available to add to a community"""

    id: str
    name: str
    email: str

    @classmethod
    def from_entity(cls, user: User) -> "OrgMemberInfo":
        return cls(id=str(user.id), name=user.name, email=user.email)


# ============================================================================
# Response DTOs
# ============================================================================


class RequestOutcomeResponse(BaseModel):
    """Response for join/follow use cases"""

    status: str  # "approved" or "pending"
    membership: Optional[CommunityMembershipInfo] = None
    request: Optional[MemberRequestInfo] = None


class ReviewRequestResponse(BaseModel):
    """Response for approve/reject request use cases"""

    status: str
    request_id: str
    membership: Optional[CommunityMembershipInfo] = None


class StatusResponse(BaseModel):
    """Response carrying only a status"""

    status: str


class AddOrgMembersResponse(BaseModel):
    """Response for add org members to community use case"""

    added: List[str]
    skipped: List[str]
    message: str
