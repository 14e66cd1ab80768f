from typing import Any, Dict, Optional
from fastapi import status


class AppError(Exception):
    """Base error for service operations. The HTTP layer maps it by ``status_code``."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "BAD_REQUEST"


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHORIZED"


class AuthorizationError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"


class CertificateNotEligibleError(AuthorizationError):
    def __init__(self, message: str = "Course not yet completed.") -> None:
        super().__init__(message)


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"


class InternalError(AppError):
    """Store or file-system failure. The message is safe to show to clients."""

    def __init__(self, message: str = "An unexpected error occurred", details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, details)
