"""
errors.py — Failure taxonomy for the API.
Every error carries the HTTP status it maps to and a message that is safe
to show to the client. main.py renders them into the response envelope.
"""


class FitTrackerError(Exception):
    status_code = 500
    default_message = "Internal server error. Please try again."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(FitTrackerError):
    """Malformed or out-of-range input."""
    status_code = 400
    default_message = "Invalid request"


class AuthenticationError(FitTrackerError):
    status_code = 401
    default_message = "Authentication required"


class NotFoundError(FitTrackerError):
    """Record is absent or belongs to another user; the two are indistinguishable."""
    status_code = 404
    default_message = "Not found"


class ConflictError(FitTrackerError):
    # Duplicate emails surface as a plain 400 so clients see one generic message
    status_code = 400
    default_message = "A user with this email already exists"


class RateLimitError(FitTrackerError):
    status_code = 429
    default_message = "Too many requests. Please try again later."


class InternalError(FitTrackerError):
    status_code = 500
