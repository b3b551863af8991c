"""
Community Platform Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    AppRole,
    OrgRole,
    OrgMemberRole,
    OrgMemberStatus,
    CommunityType,
    CommunityRole,
    MembershipType,
    CommunityMemberStatus,
    RequestType,
    RequestStatus,
)

# Export all entities
from .user import User
from .organization import Organization
from .org_member import OrgMember
from .community import Community
from .community_member import CommunityMember
from .community_member_request import CommunityMemberRequest
from .community_invite import CommunityInvite
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "AppRole",
    "OrgRole",
    "OrgMemberRole",
    "OrgMemberStatus",
    "CommunityType",
    "CommunityRole",
    "MembershipType",
    "CommunityMemberStatus",
    "RequestType",
    "RequestStatus",
    # Entities
    "User",
    "Organization",
    "OrgMember",
    "Community",
    "CommunityMember",
    "CommunityMemberRequest",
    "CommunityInvite",
    "AuditEvent",
]
