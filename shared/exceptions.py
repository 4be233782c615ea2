"""
Domain exceptions shared by every service.

Services raise these; the handlers registered in ``main.py`` turn them into
the ``{success, error, message}`` envelope with the matching status code.
"""

from typing import Any


class ShopBotError(Exception):
    """Base exception for all ShopBot errors."""

    status_code = 500
    error = "Server error"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class NotFoundError(ShopBotError):
    """Raised when a product, cart line or conversation does not exist."""

    status_code = 404
    error = "Not found"


class ValidationError(ShopBotError):
    """Raised when a write body is missing or has malformed fields."""

    status_code = 422
    error = "Validation failed"

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        self.field = field
        super().__init__(message, details)


class ConflictError(ShopBotError):
    """Raised when a write loses a race against a uniqueness rule."""

    status_code = 409
    error = "Conflict"


class SessionRequiredError(ShopBotError):
    """Raised when a session-scoped route is called without a session id."""

    status_code = 400
    error = "Session required"
