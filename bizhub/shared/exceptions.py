# bizhub/shared/exceptions.py
from typing import Optional

from fastapi import HTTPException, status


class BaseHTTPException(HTTPException):
    """
    HTTPException with class-level defaults.

    Subclasses set ``status_code`` and ``message``; callers may override the
    message per raise.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Request failed"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(
            status_code=type(self).status_code, detail=message or type(self).message
        )


# Authentication & Authorization Exceptions
class InvalidTokenError(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing or invalid token"
        )


class UnlinkedProfileError(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND, detail="User not linked to profile"
        )


class NotAuthorizedError(HTTPException):
    def __init__(self, detail: str = "Not authorized") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


# Resource Not Found Exceptions
class ProfileNotFoundError(HTTPException):
    def __init__(self, detail: str = "Profile not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


# Validation / Request Exceptions
class InvalidDataError(HTTPException):
    def __init__(self, message: str = "Invalid request data") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


# Persistence Exceptions
class PersistenceError(HTTPException):
    def __init__(self, message: str = "Database request failed") -> None:
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message
        )
