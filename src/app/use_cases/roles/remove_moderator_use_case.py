from typing import Optional

from libs.result import Error
from src.domain.entities import CommunityMember, CommunityRole
from src.domain.permissions import Action

from .base import ChangeCommunityRoleUseCase


class RemoveModeratorUseCase(ChangeCommunityRoleUseCase):
    """Demote a moderator to member; moderators cannot demote each other"""

    required_action = Action.MANAGE_COMMUNITY_MEMBERS
    new_role = CommunityRole.member

    def check_target_state(self, member: CommunityMember) -> Optional[Error]:
        if member.role != CommunityRole.moderator:
            return Error("NOT_A_MODERATOR", "User is not a moderator")
        return None
