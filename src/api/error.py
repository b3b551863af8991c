from typing import NoReturn
from uuid import UUID

from fastapi import status
from libs.result import Error

# Error codes of the use cases mapped to HTTP statuses; anything else is a 500
ERROR_STATUS = {
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "COMMUNITY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "REQUEST_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "MEMBERSHIP_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVITE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "ORG_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "INSUFFICIENT_RANK": status.HTTP_403_FORBIDDEN,
    "CANNOT_MODIFY_CREATOR": status.HTTP_403_FORBIDDEN,
    "CREATOR_CANNOT_LEAVE": status.HTTP_403_FORBIDDEN,
    "CANNOT_MODIFY_SELF": status.HTTP_409_CONFLICT,
    "ALREADY_MEMBER": status.HTTP_409_CONFLICT,
    "REQUEST_ALREADY_PENDING": status.HTTP_409_CONFLICT,
    "REQUEST_ALREADY_PROCESSED": status.HTTP_409_CONFLICT,
    "ALREADY_MODERATOR": status.HTTP_409_CONFLICT,
    "ALREADY_ADMIN": status.HTTP_409_CONFLICT,
    "SLUG_TAKEN": status.HTTP_409_CONFLICT,
    "NOT_A_MODERATOR": status.HTTP_400_BAD_REQUEST,
    "NOT_AN_ADMIN": status.HTTP_400_BAD_REQUEST,
    "NOT_A_MEMBER": status.HTTP_400_BAD_REQUEST,
    "NOT_ORG_MEMBERS": status.HTTP_400_BAD_REQUEST,
    "COMMUNITY_HAS_NO_ORG": status.HTTP_400_BAD_REQUEST,
    "INVALID_ROLE": status.HTTP_400_BAD_REQUEST,
    "INVALID_EXPIRY": status.HTTP_400_BAD_REQUEST,
    "INVITE_EXPIRED": status.HTTP_410_GONE,
    "INVITE_ALREADY_USED": status.HTTP_409_CONFLICT,
    "INVITE_EMAIL_MISMATCH": status.HTTP_400_BAD_REQUEST,
    "CROSS_ORG_INVITE": status.HTTP_400_BAD_REQUEST,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def raise_for_error(error: Error) -> NoReturn:
    """Translate a use case error into the matching HTTP error"""
    status_code = ERROR_STATUS.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)


def parse_uuid(value: str, code: str = "INVALID_ID") -> UUID:
    try:
        return UUID(value)
    except ValueError:
        raise ClientError(Error(code, f"Invalid ID format: {value}"))
