"""
Domain errors raised by the service layer.

Every error is raised before any write happens, so callers never observe a
partially applied operation. The HTTP layer renders them through a single
exception handler registered in ``main.py``.
"""

from typing import Any, Optional


class AppError(Exception):
    """Base class for errors that map to a user-visible response"""
    status_code = 400
    error_code = "error"
    default_message = "Request failed"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class InvalidCredentials(AppError):
    status_code = 401
    error_code = "invalid_credentials"
    default_message = "Invalid username or password"


class AccountDisabled(AppError):
    status_code = 403
    error_code = "account_disabled"
    default_message = "Account is disabled"


class Forbidden(AppError):
    status_code = 403
    error_code = "forbidden"
    default_message = "Not allowed"


class DuplicateUsername(AppError):
    status_code = 409
    error_code = "duplicate_username"
    default_message = "Username already exists"


class ValidationError(AppError):
    status_code = 422
    error_code = "validation_error"
    default_message = "Invalid data"


class NotFound(AppError):
    status_code = 404
    error_code = "not_found"
    default_message = "Not found"

    def __init__(self, resource: str = "Resource", details: Any = None):
        super().__init__(f"{resource} not found", details)


class InvalidQuota(AppError):
    status_code = 422
    error_code = "invalid_quota"
    default_message = "Event quota is out of range"


class QuotaExceeded(AppError):
    status_code = 409
    error_code = "quota_exceeded"
    default_message = "Event quota exhausted"
