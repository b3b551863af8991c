"""
OrgMember Entity

Links User to Organization with a role.
"""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from .enums import OrgMemberRole, OrgMemberStatus

if TYPE_CHECKING:
    from .organization import Organization


class OrgMember(SQLModel, table=True):
    """
    OrgMember entity - links User to Organization with a role.

    Business Rules:
    - (user_id, org_id) must be unique
    - role=admin derives the "admin" org role for permission checks
    """

    __tablename__ = "org_members"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    org_id: UUID = Field(foreign_key="orgs.id", nullable=False, index=True)

    role: OrgMemberRole = Field(default=OrgMemberRole.user)
    status: OrgMemberStatus = Field(default=OrgMemberStatus.active)

    joined_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    org: "Organization" = Relationship(back_populates="members")

    __table_args__ = (
        Index("idx_org_member_user_org", "user_id", "org_id", unique=True),
    )
