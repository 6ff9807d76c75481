"""Error types for conditions outside the token policy.

Policy denials are never raised; they come back as result values. These
exceptions cover missing accounts, malformed input and store conflicts, and
carry a code and an HTTP-style status hint for whichever transport wraps the
engine.
"""

from typing import Optional

from orbitrum.core.logging import get_request_id


class AppError(Exception):
    code = "app_error"
    status_code = 500

    def __init__(self, message: str, *, code: Optional[str] = None, status_code: Optional[int] = None, request_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        if status_code:
            self.status_code = status_code
        self.request_id = request_id

    def to_dict(self) -> dict:
        rid = self.request_id or get_request_id()
        return {
            "error": {"code": self.code, "message": self.message, "request_id": rid},
            "detail": self.message,
        }


class ValidationError(AppError, ValueError):
    code = "validation_error"
    status_code = 400


class NotFoundError(AppError, LookupError):
    code = "not_found"
    status_code = 404


class ConflictError(AppError):
    code = "conflict"
    status_code = 409
