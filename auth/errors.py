"""
auth/errors.py -- Error taxonomy for the auth service.

Every error carries a machine-readable code (used in the API error envelope)
and the user-facing message the web layer renders. All of them are
recoverable: the routing layer re-renders a form, redirects, or maps the
error to an HTTP status. None is fatal to the process.

InvalidCredentials deliberately covers both "unknown email" and "wrong
password" so the message text never reveals whether an account exists.
"""

from __future__ import annotations


class AuthError(Exception):
    """Base class for all auth service errors."""

    code = "auth_error"
    message = "Authentication error."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message


class InvalidCredentials(AuthError):
    code = "invalid_credentials"
    message = "Invalid email or password"


class EmailTaken(AuthError):
    code = "email_taken"
    message = "Email already taken"


class SignupFailed(AuthError):
    code = "signup_failed"
    message = "Error during signup"


class SessionTeardownFailed(AuthError):
    code = "session_teardown_failed"
    message = "Error logging out"


class Unauthenticated(AuthError):
    code = "unauthenticated"
    message = "Authentication required."


class HashingError(Exception):
    """The password hashing primitive failed (e.g. input rejected by bcrypt)."""
