from typing import Optional

from libs.result import Error
from src.domain.entities import CommunityMember, CommunityRole
from src.domain.permissions import Action

from .base import ChangeCommunityRoleUseCase


class AssignAdminUseCase(ChangeCommunityRoleUseCase):
    """Promote a member or moderator to admin; needs assign_community_admin"""

    required_action = Action.ASSIGN_COMMUNITY_ADMIN
    new_role = CommunityRole.admin

    def check_target_state(self, member: CommunityMember) -> Optional[Error]:
        if member.role == CommunityRole.admin:
            return Error("ALREADY_ADMIN", "User is already an admin")
        return None
