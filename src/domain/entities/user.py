"""
User Entity

Represents a person with a platform-wide role and an optional organization.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from .enums import AppRole

if TYPE_CHECKING:
    from .community_member import CommunityMember


class User(SQLModel, table=True):
    """
    User entity - identity with an application-wide role.

    Business Rules:
    - Email must be unique across all users
    - role is mutated only by an app admin
    - org_id is the user's home organization (nullable)
    - Deleting a user cascades to memberships and requests
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    email_verified: bool = Field(default=False)

    role: AppRole = Field(default=AppRole.user)
    org_id: Optional[UUID] = Field(default=None, foreign_key="orgs.id", index=True)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    # Relationships
    community_memberships: list["CommunityMember"] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )

    __table_args__ = (Index("idx_user_role", "role"),)
