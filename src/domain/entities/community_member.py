"""
CommunityMember Entity

Links User to Community with a role and membership type.
"""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from .enums import CommunityMemberStatus, CommunityRole, MembershipType

if TYPE_CHECKING:
    from .community import Community
    from .user import User


class CommunityMember(SQLModel, table=True):
    """
    CommunityMember entity - composite identity (user_id, community_id).

    Business Rules:
    - At most one row per user and community, so member and follower
      are mutually exclusive
    - Leaving or being kicked deletes the row
    """

    __tablename__ = "community_members"

    user_id: UUID = Field(foreign_key="users.id", primary_key=True)
    community_id: UUID = Field(foreign_key="communities.id", primary_key=True)

    role: CommunityRole = Field(default=CommunityRole.member)
    membership_type: MembershipType = Field(default=MembershipType.member)
    status: CommunityMemberStatus = Field(default=CommunityMemberStatus.active)

    joined_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    user: "User" = Relationship(back_populates="community_memberships")
    community: "Community" = Relationship(back_populates="members")

    __table_args__ = (Index("idx_community_member_role", "community_id", "role"),)
