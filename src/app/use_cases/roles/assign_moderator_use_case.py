from typing import Optional

from libs.result import Error
from src.domain.entities import CommunityMember, CommunityRole
from src.domain.permissions import Action

from .base import ChangeCommunityRoleUseCase


class AssignModeratorUseCase(ChangeCommunityRoleUseCase):
    """Promote a member to moderator; needs manage_community_members"""

    required_action = Action.MANAGE_COMMUNITY_MEMBERS
    new_role = CommunityRole.moderator

    def check_target_state(self, member: CommunityMember) -> Optional[Error]:
        if member.role == CommunityRole.moderator:
            return Error("ALREADY_MODERATOR", "User is already a moderator")
        if member.role == CommunityRole.admin:
            return Error("ALREADY_ADMIN", "User is an admin; remove the admin role instead")
        return None
