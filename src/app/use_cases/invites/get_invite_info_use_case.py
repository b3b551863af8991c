"""
Get Invite Info Use Case
"""

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .dtos import InviteInfo


class GetInviteInfoUseCase:
    """Looks up a usable invite by code (INVITE_NOT_FOUND / INVITE_EXPIRED / INVITE_ALREADY_USED)"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, code: str) -> Result[InviteInfo]:
        async with self.uow:
            invite = await self.uow.invites.get_by_code(code)
            if invite is None:
                return Return.err(Error("INVITE_NOT_FOUND", "Invite not found"))
            if invite.is_used():
                return Return.err(
                    Error("INVITE_ALREADY_USED", "Invite has already been used")
                )
            if invite.is_expired():
                return Return.err(Error("INVITE_EXPIRED", "Invite has expired"))

            community = await self.uow.communities.get_by_id(invite.community_id)
            if community is None:
                return Return.err(Error("COMMUNITY_NOT_FOUND", "Community not found"))

            return Return.ok(InviteInfo.from_entity(invite, community))
