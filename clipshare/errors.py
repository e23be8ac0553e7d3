from __future__ import annotations
from typing import Any, Dict, Optional

from .contracts import ErrorPayload


class ClipshareError(Exception):
    """Base error. Subclasses carry the wire type, default code and HTTP status."""

    type: str = "INTERNAL"
    code: str = "INTERNAL"
    message: str = "Internal server error"
    status_code: int = 500

    def __init__(self, message: Optional[str] = None, *, code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        self.message = message or self.message
        self.code = code or self.code
        self.details = details
        super().__init__(self.message)

    @property
    def payload(self) -> ErrorPayload:
        return ErrorPayload(type=self.type, code=self.code, message=self.message, details=self.details)


class ValidationError(ClipshareError):
    type = "VALIDATION"
    code = "VALIDATION_ERROR"
    message = "Validation error"
    status_code = 400


class ConflictError(ClipshareError):
    type = "CONFLICT"
    code = "CONFLICT"
    message = "Resource already exists"
    status_code = 400


class AuthenticationError(ClipshareError):
    type = "AUTH_ERROR"
    code = "AUTH_FAILED"
    message = "Authentication failed"
    status_code = 401


class InternalError(ClipshareError):
    pass
