"""
Invite Use Cases
"""

from .create_invite_use_case import CreateInviteUseCase
from .dtos import INVITE_LINK_TEMPLATE, InviteInfo, JoinViaInviteResponse
from .get_invite_info_use_case import GetInviteInfoUseCase
from .join_via_invite_use_case import JoinViaInviteUseCase

__all__ = [
    "CreateInviteUseCase",
    "GetInviteInfoUseCase",
    "JoinViaInviteUseCase",
    "InviteInfo",
    "JoinViaInviteResponse",
    "INVITE_LINK_TEMPLATE",
]
