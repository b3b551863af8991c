"""
Organization Entity

Tenant boundary owning communities and members.
"""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Relationship, SQLModel

if TYPE_CHECKING:
    from .org_member import OrgMember


class Organization(SQLModel, table=True):
    """
    Organization entity - tenant boundary.

    Business Rules:
    - name and slug are globally unique
    - Owns zero or more communities and members
    """

    __tablename__ = "orgs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(unique=True, max_length=255)
    slug: str = Field(unique=True, index=True, max_length=255)

    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    members: list["OrgMember"] = Relationship(back_populates="org")
