"""
Community Role Use Case DTOs
"""

from pydantic import BaseModel


class RoleChangeResponse(BaseModel):
    """Response for assign/remove moderator and admin use cases"""

    user_id: str
    community_id: str
    old_role: str
    new_role: str
