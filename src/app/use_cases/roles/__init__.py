"""
Community Role Use Cases

Moderator and admin assignment within a community.
"""

from .assign_admin_use_case import AssignAdminUseCase
from .assign_moderator_use_case import AssignModeratorUseCase
from .base import ChangeCommunityRoleUseCase
from .dtos import RoleChangeResponse
from .remove_admin_use_case import RemoveAdminUseCase
from .remove_moderator_use_case import RemoveModeratorUseCase

__all__ = [
    "ChangeCommunityRoleUseCase",
    "AssignModeratorUseCase",
    "RemoveModeratorUseCase",
    "AssignAdminUseCase",
    "RemoveAdminUseCase",
    "RoleChangeResponse",
]
