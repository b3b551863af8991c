"""
CommunityMemberRequest Entity

Pending join/follow requests awaiting review.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import RequestStatus, RequestType


class CommunityMemberRequest(SQLModel, table=True):
    """
    CommunityMemberRequest entity.

    Business Rules:
    - Many historical requests may exist per user/community
    - At most one pending request per (user, community, request_type),
      backed by a partial unique index
    - rejected is terminal; a new request is needed to join later
    """

    __tablename__ = "community_member_requests"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    community_id: UUID = Field(foreign_key="communities.id", nullable=False, index=True)

    request_type: RequestType = Field(nullable=False)
    status: RequestStatus = Field(default=RequestStatus.pending)
    message: Optional[str] = None

    requested_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    reviewed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    reviewed_by: Optional[UUID] = Field(default=None, foreign_key="users.id")

    __table_args__ = (
        Index(
            "uq_request_one_pending",
            "user_id",
            "community_id",
            "request_type",
            unique=True,
            sqlite_where=text("status = 'pending'"),
            postgresql_where=text("status = 'pending'"),
        ),
        Index("idx_request_community_status", "community_id", "status"),
    )
