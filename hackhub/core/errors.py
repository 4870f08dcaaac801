# hackhub/core/errors.py
"""
Typed failures raised by the service layer.

Every error carries the HTTP status and a stable machine-readable code so
the exception handlers in hackhub.main can turn it into a JSON body without
inspecting messages.
"""

from typing import Dict, List, Optional


class HackhubError(Exception):
    status_code = 500
    code = "internal_error"
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.code, "message": self.message}


class ValidationError(HackhubError):
    """Malformed or missing input. Lists every violated field."""

    status_code = 400
    code = "validation_error"
    default_message = "Invalid request data"

    def __init__(self, errors: List[Dict[str, str]], message: Optional[str] = None):
        super().__init__(message)
        self.errors = errors

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls([{"field": field, "message": message}], message)

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["errors"] = self.errors
        return body


class InvalidState(HackhubError):
    status_code = 400
    code = "invalid_state"
    default_message = "Operation not allowed in the current state"


class CapacityExceeded(HackhubError):
    status_code = 400
    code = "capacity_exceeded"
    default_message = "Event is full"


class DuplicateRegistration(HackhubError):
    status_code = 400
    code = "duplicate_registration"
    default_message = "Already registered for this event"


class Unauthenticated(HackhubError):
    status_code = 401
    code = "unauthenticated"
    default_message = "Could not validate credentials"


class Forbidden(HackhubError):
    status_code = 403
    code = "forbidden"
    default_message = "Insufficient permissions"


class NotFound(HackhubError):
    status_code = 404
    code = "not_found"
    default_message = "Resource not found"


class InternalError(HackhubError):
    pass
