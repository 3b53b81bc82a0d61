from typing import Optional

from fastapi import status


class UserApiError(Exception):
    """Base error; rendered as the failure envelope by the app's exception handlers."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, error: Optional[str] = None):
        self.message = message or self.default_message
        self.error = error
        super().__init__(self.message)


class InvalidInputError(UserApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class UnauthorizedError(UserApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class NotFoundError(UserApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found"


class ConflictError(UserApiError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "User with this email already exists"


class InternalError(UserApiError):
    pass
