"""Application error taxonomy.

Every error carries an HTTP status so the web layer can render it
without knowing which service raised it.
"""


class AppError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    @property
    def status(self) -> str:
        """'fail' for client errors, 'error' for server errors."""
        return "fail" if 400 <= self.status_code < 500 else "error"


class NotFoundError(AppError):
    status_code = 404


class ValidationError(AppError):
    status_code = 400


class AuthError(AppError):
    status_code = 401


class ConflictError(AppError):
    status_code = 409


class UpstreamServiceError(AppError):
    """The AI service failed, is not configured, or answered garbage."""

    status_code = 500


class InvalidUpstreamResponse(UpstreamServiceError):
    """The AI service answered with a structurally invalid payload."""

    status_code = 502
