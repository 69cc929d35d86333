"""Typed failures raised by the data layer and translated at the HTTP boundary."""


class RecipePalError(Exception):
    """Base class for failures that map to a client-facing response."""

    status_code = 500
    reason = "internal_error"

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message


class ValidationError(RecipePalError):
    """Missing or malformed required fields."""

    status_code = 400
    reason = "validation_error"


class ConflictError(RecipePalError):
    """A unique key is already taken (e.g. email)."""

    status_code = 400
    reason = "conflict"


class UnauthorizedError(RecipePalError):
    """Missing, invalid or expired credential, or bad login."""

    status_code = 401
    reason = "unauthorized"


class NotFoundError(RecipePalError):
    """Resource absent, or not owned by the caller."""

    status_code = 404
    reason = "not_found"
