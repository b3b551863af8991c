"""
Community Use Case DTOs (Data Transfer Objects)

Command/Response pattern:
- CreateCommunityCommand: validated intent to create a community
- CommunityInfo / PostableCommunityInfo: structured outputs
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import Community, CommunityRole, CommunityType


class CreateCommunityCommand(BaseModel):
    """
    Create community command

    org_id defaults to the creator's organization when omitted.
    """

    name: str
    slug: str
    description: Optional[str] = None
    type: CommunityType = CommunityType.public
    post_creation_min_role: CommunityRole = CommunityRole.member
    org_id: Optional[UUID] = None


class CommunityInfo(BaseModel):
    """Community information in responses"""

    id: str
    name: str
    slug: str
    description: Optional[str] = None
    type: str
    post_creation_min_role: str
    org_id: Optional[str] = None
    created_by: str

    @classmethod
    def from_entity(cls, community: Community) -> "CommunityInfo":
        return cls(
            id=str(community.id),
            name=community.name,
            slug=community.slug,
            description=community.description,
            type=community.type.value,
            post_creation_min_role=community.post_creation_min_role.value,
            org_id=str(community.org_id) if community.org_id else None,
            created_by=str(community.created_by),
        )


class PostableCommunityInfo(BaseModel):
    """A community the user may post in, and why"""

    id: str
    name: str
    slug: str
    reason: str  # "member", "org_admin" or "super_admin"


class AuditEventInfo(BaseModel):
    action: str
    user_email: Optional[str] = None
    timestamp: str
    metadata: Dict[str, Any]


class AuditEventsResponse(BaseModel):
    events: List[AuditEventInfo]
    next_cursor: Optional[str] = None
