"""
CommunityInvite Entity

Code or email-targeted invitation into a community.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import CommunityRole


class CommunityInvite(SQLModel, table=True):
    """
    CommunityInvite entity.

    Business Rules:
    - code is unique and unguessable
    - Expires at expires_at
    - Single use: used_at/used_by are stamped on acceptance
    - email, when set, restricts acceptance to that address
    - Accepting bypasses the request workflow
    """

    __tablename__ = "community_invites"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    community_id: UUID = Field(foreign_key="communities.id", nullable=False, index=True)
    email: Optional[str] = Field(default=None, max_length=255)
    code: str = Field(unique=True, index=True, max_length=64)

    role: CommunityRole = Field(default=CommunityRole.member)
    org_id: Optional[UUID] = Field(default=None, foreign_key="orgs.id")
    created_by: UUID = Field(foreign_key="users.id", nullable=False)

    created_at: datetime = Field(
        default_factory=datetime.utcnow, sa_column=Column(DateTime)
    )
    expires_at: datetime = Field(sa_column=Column(DateTime))
    used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    used_by: Optional[UUID] = Field(default=None, foreign_key="users.id")

    __table_args__ = (Index("idx_invite_expires_at", "expires_at"),)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return self.expires_at < (now or datetime.utcnow())

    def is_used(self) -> bool:
        return self.used_at is not None
