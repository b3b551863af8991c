"""
Organization Use Cases
"""

from .make_org_admin_use_case import MakeOrgAdminUseCase

__all__ = ["MakeOrgAdminUseCase"]
