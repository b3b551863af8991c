"""
Invite Use Case DTOs
"""

from typing import Optional

from pydantic import BaseModel

from src.domain.entities import Community, CommunityInvite

INVITE_LINK_TEMPLATE = "/communities/join/{code}"


class InviteInfo(BaseModel):
    """Invite details shown to the inviter and to the invitee"""

    code: str
    link: str
    community_id: str
    community_name: str
    role: str
    email: Optional[str] = None
    expires_at: str

    @classmethod
    def from_entity(cls, invite: CommunityInvite, community: Community) -> "InviteInfo":
        return cls(
            code=invite.code,
            link=INVITE_LINK_TEMPLATE.format(code=invite.code),
            community_id=str(invite.community_id),
            community_name=community.name,
            role=invite.role.value,
            email=invite.email,
            expires_at=invite.expires_at.isoformat() + "Z",
        )


class JoinViaInviteResponse(BaseModel):
    community_id: str
    role: str
    status: str  # "joined", "upgraded" or "unchanged"
