"""
Community Platform Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class AppRole(str, Enum):
    """Platform-wide role"""

    user = "user"
    admin = "admin"


class OrgRole(str, Enum):
    """Organization role as seen by the permission table"""

    admin = "admin"
    member = "member"


class OrgMemberRole(str, Enum):
    """Role stored on an org_members row"""

    user = "user"
    admin = "admin"


class OrgMemberStatus(str, Enum):
    """Organization membership status"""

    active = "active"
    pending = "pending"


class CommunityType(str, Enum):
    """Community visibility"""

    public = "public"
    private = "private"


class CommunityRole(str, Enum):
    """User role within a community"""

    member = "member"
    moderator = "moderator"
    admin = "admin"


class MembershipType(str, Enum):
    """Kind of community relationship; member and follower are exclusive"""

    member = "member"
    follower = "follower"


class CommunityMemberStatus(str, Enum):
    """Community membership status"""

    active = "active"
    pending = "pending"


class RequestType(str, Enum):
    """Kind of membership request"""

    join = "join"
    follow = "follow"


class RequestStatus(str, Enum):
    """Membership request review status"""

    pending = "pending"
    approved = "approved"
    rejected = "rejected"
