from __future__ import annotations
from typing import Optional
from ..errors import AuthenticationError, ConflictError, InternalError, ValidationError

def make_auth_error(code: str, message: str, *, details: Optional[dict] = None) -> AuthenticationError:
    return AuthenticationError(message, code=code, details=details)

def make_validation_error(code: str, message: str, *, details: Optional[dict] = None) -> ValidationError:
    return ValidationError(message, code=code, details=details)

def make_conflict_error(code: str, message: str, *, details: Optional[dict] = None) -> ConflictError:
    return ConflictError(message, code=code, details=details)

__all__ = [
    "AuthenticationError",
    "ConflictError",
    "InternalError",
    "ValidationError",
    "make_auth_error",
    "make_conflict_error",
    "make_validation_error",
]
