"""
Error taxonomy shared by stores, services and routes.

Every domain error carries the HTTP status it maps to; the app installs one
handler that renders them as ``{"error": ..., "details": ...}``.
"""
from typing import Optional


class ExamAdminError(Exception):
    """Base class for errors rendered straight to the client."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(ExamAdminError):
    """Missing or malformed input."""
    status_code = 400


class AuthenticationError(ExamAdminError):
    status_code = 401


class NotFoundError(ExamAdminError):
    """Requested record is absent."""
    status_code = 404


class UpstreamStoreError(ExamAdminError):
    """A call to the document or key-tree store failed."""
    status_code = 500


def upstream_failure(message: str, exc: Exception) -> UpstreamStoreError:
    """Wrap an unexpected exception, keeping the underlying message as details."""
    details = getattr(exc, "details", None) or str(exc)
    return UpstreamStoreError(message, details=details)


# Errors a route passes through untouched; anything else becomes a 500
CLIENT_ERRORS = (ValidationError, AuthenticationError, NotFoundError)
