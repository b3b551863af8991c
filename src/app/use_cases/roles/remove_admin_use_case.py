from typing import Optional

from libs.result import Error
from src.domain.entities import CommunityMember, CommunityRole
from src.domain.permissions import Action

from .base import ChangeCommunityRoleUseCase


class RemoveAdminUseCase(ChangeCommunityRoleUseCase):
    """
    Demote an admin to member; needs remove_community_admin.

    Admins may demote fellow admins; the creator stays protected.
    """

    required_action = Action.REMOVE_COMMUNITY_ADMIN
    new_role = CommunityRole.member

    def check_target_state(self, member: CommunityMember) -> Optional[Error]:
        if member.role != CommunityRole.admin:
            return Error("NOT_AN_ADMIN", "User is not an admin")
        return None
