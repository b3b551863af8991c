"""
Community Use Cases

Community lifecycle, postable communities and the audit trail.
"""

from .create_community_use_case import CreateCommunityUseCase
from .dtos import (
    AuditEventInfo,
    AuditEventsResponse,
    CommunityInfo,
    CreateCommunityCommand,
    PostableCommunityInfo,
)
from .get_community_audit_events_use_case import GetCommunityAuditEventsUseCase
from .get_postable_communities_use_case import GetPostableCommunitiesUseCase

__all__ = [
    "CreateCommunityUseCase",
    "GetPostableCommunitiesUseCase",
    "GetCommunityAuditEventsUseCase",
    "CreateCommunityCommand",
    "CommunityInfo",
    "PostableCommunityInfo",
    "AuditEventInfo",
    "AuditEventsResponse",
]
