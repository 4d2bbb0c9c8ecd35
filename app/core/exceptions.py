"""
Domain Exceptions

Every error the API surfaces on purpose derives from AppError and carries
an HTTP status code plus a human-readable message. The FastAPI exception
handler in app.main renders them as ErrorResponse payloads.

Ownership mismatches are raised as NotFoundError so callers cannot tell
"does not exist" apart from "exists but belongs to someone else".
"""


class AppError(Exception):
    """Base class for expected, user-facing errors."""

    status_code: int = 500
    error: str = "Internal Server Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(AppError):
    """Malformed input that passed schema validation but fails a domain rule."""

    status_code = 400
    error = "Bad Request"


class UnauthorizedError(AppError):
    """Missing, invalid or expired session, or a failed code verification."""

    status_code = 401
    error = "Unauthorized"


class NotFoundError(AppError):
    """Resource absent or not owned by the caller."""

    status_code = 404
    error = "Not Found"


class InternalServiceError(AppError):
    """Email delivery or persistence failure. Logged, surfaced generically."""

    status_code = 500
    error = "Internal Server Error"
