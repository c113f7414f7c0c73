"""
Domain error taxonomy.

Every error raised by the auth and task layers carries an ``ErrorKind``.
The HTTP boundary (``api/errors.py``) maps kinds to status codes in one
place, so the services never deal with HTTP.

    TaskManagerError (base)
    ├── ValidationError      kind=validation
    ├── ConflictError        kind=conflict
    ├── AuthError            kind=auth
    ├── NotFoundError        kind=not_found
    ├── ConfigurationError   kind=configuration
    └── IdentityError        kind=internal
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    CONFLICT = "conflict"
    AUTH = "auth"
    NOT_FOUND = "not_found"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


class TaskManagerError(Exception):
    """
    Base exception for all task-manager errors.

    Attributes:
        message: Short, caller-safe description
        details: Extra context for the response body
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.kind.value, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(TaskManagerError):
    """Malformed client input, e.g. an unknown status value."""

    kind = ErrorKind.VALIDATION


class ConflictError(TaskManagerError):
    """The write would violate a uniqueness rule."""

    kind = ErrorKind.CONFLICT


class AuthError(TaskManagerError):
    """Bad credentials or a missing / invalid / expired token."""

    kind = ErrorKind.AUTH


class NotFoundError(TaskManagerError):
    """Missing resource, or one owned by somebody else."""

    kind = ErrorKind.NOT_FOUND


class ConfigurationError(TaskManagerError):
    """Fatal misconfiguration detected while building the application."""

    kind = ErrorKind.CONFIGURATION

    def __init__(self, setting_name: str, issue: str):
        super().__init__(
            message=f"Configuration error for '{setting_name}': {issue}",
            details={"setting_name": setting_name},
        )


class IdentityError(TaskManagerError):
    """A token passed validation but its subject is not a usable user id."""

    kind = ErrorKind.INTERNAL
