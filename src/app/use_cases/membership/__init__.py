"""
Membership Use Cases

Join/follow request workflow and member management.
"""

from .approve_request_use_case import ApproveRequestUseCase
from .cancel_request_use_case import CancelRequestUseCase
from .dtos import (
    AddOrgMembersResponse,
    CommunityMembershipInfo,
    MemberRequestInfo,
    OrgMemberInfo,
    OrgMemberToAdd,
    RequestOutcomeResponse,
    ReviewRequestResponse,
    StatusResponse,
)
from .leave_community_use_case import LeaveCommunityUseCase
from .list_pending_requests_use_case import (
    ListPendingRequestsUseCase,
    ListUserPendingRequestsUseCase,
)
from .org_members_use_case import (
    AddOrgMembersToCommunityUseCase,
    ListOrgMembersNotInCommunityUseCase,
)
from .reject_request_use_case import RejectRequestUseCase
from .remove_user_from_community_use_case import RemoveUserFromCommunityUseCase
from .request_follow_use_case import RequestFollowUseCase
from .request_join_use_case import RequestJoinUseCase

__all__ = [
    "RequestJoinUseCase",
    "RequestFollowUseCase",
    "CancelRequestUseCase",
    "ListPendingRequestsUseCase",
    "ListUserPendingRequestsUseCase",
    "ApproveRequestUseCase",
    "RejectRequestUseCase",
    "LeaveCommunityUseCase",
    "RemoveUserFromCommunityUseCase",
    "AddOrgMembersToCommunityUseCase",
    "ListOrgMembersNotInCommunityUseCase",
    "AddOrgMembersResponse",
    "CommunityMembershipInfo",
    "MemberRequestInfo",
    "OrgMemberInfo",
    "OrgMemberToAdd",
    "RequestOutcomeResponse",
    "ReviewRequestResponse",
    "StatusResponse",
]
