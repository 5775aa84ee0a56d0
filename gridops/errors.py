"""
gridops/errors.py

Closed error taxonomy for the GridOps API.

Every resource manager, the token service, and the credential store raise
exactly one of these kinds. The HTTP boundary (main.py) maps the kind to a
status code once; handlers never build error responses themselves.

    ApiError
    ├── AuthenticationFailure      401
    │   ├── InvalidToken
    │   └── InvalidCredentials
    ├── ValidationFailure          400
    │   ├── DuplicateUsername
    │   └── IllegalStatusTransition
    ├── NotFound                   404
    └── Unexpected                 500
"""

from __future__ import annotations

from typing import Dict, Optional, Type


class ApiError(Exception):
    """Base class for all errors that cross the HTTP boundary."""

    default_message: str = "server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationFailure(ApiError):
    """Missing, malformed, forged or expired credentials. Detail never leaks."""

    default_message = "unauthorized"


class InvalidToken(AuthenticationFailure):
    pass


class InvalidCredentials(AuthenticationFailure):
    default_message = "Invalid username or password"


class ValidationFailure(ApiError, ValueError):
    """
    Malformed input. Also a ValueError so pydantic validators can raise it
    and have it reported as a request validation error.
    """

    default_message = "invalid input"


class DuplicateUsername(ValidationFailure):
    pass


class IllegalStatusTransition(ValidationFailure):
    pass


class NotFound(ApiError):
    """Resource absent or not owned by the caller. The two cases are merged."""

    def __init__(self, resource: str = "Resource"):
        self.resource = resource
        super().__init__(f"{resource} not found")


class Unexpected(ApiError):
    default_message = "server error"


# Kind -> status code, resolved through the class hierarchy
STATUS_CODES: Dict[Type[ApiError], int] = {
    AuthenticationFailure: 401,
    ValidationFailure: 400,
    NotFound: 404,
    Unexpected: 500,
}


def status_code_for(error: ApiError) -> int:
    for kind in type(error).__mro__:
        if kind in STATUS_CODES:
            return STATUS_CODES[kind]
    return 500


def public_message(error: ApiError) -> str:
    """Message safe to return to the caller."""
    if isinstance(error, ValidationFailure) and not isinstance(error, IllegalStatusTransition):
        return ValidationFailure.default_message
    if isinstance(error, InvalidCredentials):
        return error.message
    if isinstance(error, AuthenticationFailure):
        return AuthenticationFailure.default_message
    if isinstance(error, Unexpected):
        return Unexpected.default_message
    return error.message
