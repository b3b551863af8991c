"""
Community Entity

A space inside an organization where members post and discuss.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from .enums import CommunityRole, CommunityType

if TYPE_CHECKING:
    from .community_member import CommunityMember


class Community(SQLModel, table=True):
    """
    Community entity.

    Business Rules:
    - slug is globally unique
    - org_id is nullable for legacy/global communities
    - post_creation_min_role gates who may post (member < moderator < admin)
    - The creator can only be demoted or removed by an app admin
    """

    __tablename__ = "communities"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    slug: str = Field(unique=True, index=True, max_length=255)
    description: Optional[str] = None

    type: CommunityType = Field(default=CommunityType.public)
    post_creation_min_role: CommunityRole = Field(default=CommunityRole.member)

    org_id: Optional[UUID] = Field(default=None, foreign_key="orgs.id", index=True)
    created_by: UUID = Field(foreign_key="users.id", nullable=False)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    # Relationships
    members: list["CommunityMember"] = Relationship(
        back_populates="community",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )

    __table_args__ = (Index("idx_community_type", "type"),)
