"""
Domain errors raised by the service layer.

Routes never build HTTP errors for these themselves; the handlers registered
in ``main.py`` turn them into the standard error envelope.
"""

from typing import Any, Optional


class ServiceError(Exception):
    """Base class for errors with a user-visible message"""

    status_code = 500
    error_code = "internal_error"

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(ServiceError):
    """Missing or invalid identity: token, booking reference or id"""

    status_code = 404
    error_code = "not_found"


class ValidationError(ServiceError):
    """Malformed or policy-violating input"""

    status_code = 400
    error_code = "validation_error"


class CapacityExceededError(ValidationError):
    """Seat allocation or itinerary capacity would be exceeded"""

    error_code = "capacity_exceeded"


class InternalError(ServiceError):
    """Unexpected store failure; the message is safe to show to guests"""

    def __init__(self, message: str = "Internal server error", details: Optional[Any] = None):
        super().__init__(message, details)
