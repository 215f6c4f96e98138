"""Error taxonomy shared by the services and the HTTP layer.

Every error carries the HTTP status it maps to and a short ``error`` label.
The API renders them as ``{"error": ..., "message": ...}``.
"""


class ThinkInkError(Exception):
    """Base exception for ThinkInk errors."""

    status_code: int = 500
    error: str = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.error
        super().__init__(self.message)


class ValidationError(ThinkInkError):
    """Raised when input is missing or malformed."""

    status_code = 400
    error = "Validation error"


class UnauthorizedError(ThinkInkError):
    """Raised when the session credential is missing, invalid or expired."""

    status_code = 401
    error = "Unauthorized"


class ForbiddenError(ThinkInkError):
    """Raised when an authenticated user does not own the target resource."""

    status_code = 403
    error = "Forbidden"


class NotFoundError(ThinkInkError):
    """Raised when the requested resource does not exist."""

    status_code = 404
    error = "Not found"


class ConflictError(ThinkInkError):
    """Raised when a unique value (username) is already taken."""

    status_code = 400
    error = "Conflict"


class MediaStoreError(ThinkInkError):
    """Raised when the media store fails to complete an operation."""

    status_code = 500
    error = "Media store error"


class UploadFailedError(MediaStoreError):
    """Raised when an upload to the media store fails."""

    error = "Upload failed"
