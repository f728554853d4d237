# backend/utils/errors.py
from typing import Any, Optional


# Base class for every error the application raises on purpose
class SOSError(Exception):
    status_code = 500
    detail = "Internal server error"

    def __init__(self, detail: Optional[Any] = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class ValidationError(SOSError):
    """Missing or out-of-domain input. Raised before anything is written."""
    status_code = 400
    detail = "Validation failed"


class Unauthorized(SOSError):
    status_code = 401
    detail = "Could not validate credentials"


class InvalidToken(Unauthorized):
    detail = "Invalid or expired token"


class Forbidden(SOSError):
    status_code = 403
    detail = "Forbidden"


class DuplicateIdentity(SOSError):
    status_code = 409
    detail = "User with this email already exists"


class StorageFailure(SOSError):
    """Unexpected persistence error. The message never carries driver details."""
    status_code = 500
    detail = "Storage failure"


class CreationFailed(StorageFailure):
    detail = "Failed to create resource"
