"""
Service-level errors. Routes translate these into HTTP responses via the
handler registered in `lokality.app`.
"""

from __future__ import annotations


class LokalityError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500
    title = "Error"

    def __init__(self, message: str, *, title: str | None = None):
        super().__init__(message)
        self.message = message
        if title:
            self.title = title

    def as_dict(self) -> dict:
        return {"title": self.title, "detail": self.message}


class ValidationError(LokalityError):
    status_code = 400
    title = "Invalid Request"


class AuthenticationError(LokalityError):
    status_code = 401
    title = "Not Logged In"


class PermissionDeniedError(LokalityError):
    status_code = 403
    title = "Not Authorized"


class NotFoundError(LokalityError):
    status_code = 404
    title = "Not Found"
