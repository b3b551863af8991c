"""
User Use Cases

Caller permissions and app-wide roles.
"""

from .change_role_use_case import ChangeAppRoleUseCase
from .get_permissions_use_case import (
    CommunityRoleInfo,
    GetPermissionsUseCase,
    PermissionsResponse,
)

__all__ = [
    "GetPermissionsUseCase",
    "ChangeAppRoleUseCase",
    "PermissionsResponse",
    "CommunityRoleInfo",
]
