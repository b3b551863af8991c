"""
Role ranking

Single definition of the "same-or-higher rank" rules used by the membership
workflow and by any client deciding which member actions to offer.
"""

from typing import Optional

from src.domain.entities.enums import CommunityRole

NO_RANK = 0
FOLLOWER_RANK = 0
APP_ADMIN_RANK = 4

COMMUNITY_ROLE_RANK = {
    CommunityRole.member: 1,
    CommunityRole.moderator: 2,
    CommunityRole.admin: 3,
}
ADMIN_RANK = COMMUNITY_ROLE_RANK[CommunityRole.admin]


def community_role_rank(role: Optional[str]) -> int:
    """Numeric rank of a community role; 0 for no role"""
    if not role:
        return NO_RANK
    try:
        return COMMUNITY_ROLE_RANK[CommunityRole(role)]
    except ValueError:
        return NO_RANK


def outranks(actor_rank: int, target_role: Optional[str]) -> bool:
    """True if the actor sits strictly above the target"""
    return actor_rank > community_role_rank(target_role)


def can_kick_member(
    actor_rank: int,
    target_role: Optional[str],
    target_is_creator: bool = False,
    actor_is_target: bool = False,
) -> bool:
    """
    Whether an actor may remove a member from a community.

    - Nobody removes themselves through this path (they leave instead)
    - The creator can only be removed by an app admin
    - Admins may be removed by any actor of at least admin rank
    - Otherwise the actor must outrank the target: moderators manage members
      only, admins manage moderators and members
    """
    if actor_is_target:
        return False
    if target_is_creator and actor_rank < APP_ADMIN_RANK:
        return False
    if community_role_rank(target_role) == ADMIN_RANK:
        return actor_rank >= ADMIN_RANK
    return outranks(actor_rank, target_role)


def should_disable_action_button(
    actor_rank: int,
    target_role: Optional[str],
    target_is_creator: bool = False,
    actor_is_target: bool = False,
) -> bool:
    return not can_kick_member(actor_rank, target_role, target_is_creator, actor_is_target)


def can_assign_role(
    actor_rank: int,
    target_role: Optional[str],
    new_role: str,
    target_is_creator: bool = False,
    actor_is_target: bool = False,
) -> bool:
    """
    Whether an actor may move a target from target_role to new_role.

    Same exclusions as kicking, plus the actor can never hand out a role
    above their own.
    """
    if not can_kick_member(actor_rank, target_role, target_is_creator, actor_is_target):
        return False
    return community_role_rank(new_role) <= actor_rank


def meets_min_role(role: Optional[str], min_role: str) -> bool:
    """True if role is at least min_role (post_creation_min_role gate)"""
    return community_role_rank(role) >= community_role_rank(min_role)

