# ezgest/core/exceptions.py
"""
Domain exceptions.

Every error the auth core can report derives from ``EzGestError`` and
carries the HTTP status the API answers with. Routes that must answer
``200 {success: false}`` catch them explicitly.
"""
from typing import Optional


class EzGestError(Exception):
    """Base class for expected, client-facing failures"""

    status_code: int = 400
    error_code: str = "error"

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code


class ValidationError(EzGestError):
    status_code = 400
    error_code = "validation_error"


class DuplicateError(EzGestError):
    status_code = 409
    error_code = "duplicate"


class AuthenticationFailure(EzGestError):
    status_code = 401
    error_code = "unauthorized"


class InvalidTokenError(AuthenticationFailure):
    """Malformed token or signature mismatch"""
    error_code = "invalid_token"


class ExpiredTokenError(AuthenticationFailure):
    error_code = "expired_token"


class ForbiddenError(EzGestError):
    status_code = 403
    error_code = "forbidden"


class NotMemberError(ForbiddenError):
    error_code = "not_member"


class NotFoundError(EzGestError):
    status_code = 404
    error_code = "not_found"


class InviteCodeNotFoundError(NotFoundError):
    # Clients treat an unknown invite code as a bad request.
    status_code = 400
    error_code = "wrong_invite_code"
