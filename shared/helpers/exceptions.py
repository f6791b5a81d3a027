"""
Application error taxonomy.

Every error is an ``HTTPException`` so the shared exception handler renders it
into the ``JsonOutResult`` envelope, while service code and tests can still
catch the precise type.
"""
from typing import Optional
from fastapi import HTTPException, status

from shared.utils.app_status_code import AppStatusCode


class AppError(HTTPException):
    """Base class for expected, non-retryable failures."""
    http_status = status.HTTP_400_BAD_REQUEST
    app_status_code = AppStatusCode.OPERATION_FAILED

    def __init__(self, message: str, app_status_code: Optional[str] = None, headers: Optional[dict] = None):
        self.message = message
        if app_status_code is not None:
            self.app_status_code = app_status_code
        super().__init__(status_code=self.http_status,
                         detail=message, headers=headers)


class InvalidArgumentError(AppError):
    http_status = status.HTTP_400_BAD_REQUEST
    app_status_code = AppStatusCode.INVALID_INPUT


class ConflictError(AppError):
    http_status = status.HTTP_409_CONFLICT
    app_status_code = AppStatusCode.DUPLICATE_ADD_ERROR


class NotFoundError(AppError):
    http_status = status.HTTP_404_NOT_FOUND
    app_status_code = AppStatusCode.NOT_FOUND


class UnauthorizedError(AppError):
    http_status = status.HTTP_401_UNAUTHORIZED
    app_status_code = AppStatusCode.AUTHENTICATION_TOKEN_INVALID

    def __init__(self, message: str, app_status_code: Optional[str] = None):
        super().__init__(message, app_status_code,
                         headers={"WWW-Authenticate": "Bearer"})


class ForbiddenError(AppError):
    http_status = status.HTTP_403_FORBIDDEN
    app_status_code = AppStatusCode.AUTHORIZATION_FORBIDDEN
