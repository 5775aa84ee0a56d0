"""
gridops/auth_context.py

Request authentication for FastAPI dependency injection.

Contains:
- AuthContext: Immutable identity resolved from a verified bearer token
- authenticate: UNAUTHENTICATED -> AUTHENTICATED transition for one request
- require_auth_context: FastAPI dependency guarding every /api route

Only the token signature is checked per request. The user row is not re-read:
a valid signature is proof of identity.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, ConfigDict

from gridops import tokens
from gridops.config import IS_DEV
from gridops.errors import AuthenticationFailure, InvalidToken

# auto_error=False so a missing header reaches our own 401 instead of FastAPI's default
security = HTTPBearer(auto_error=False)


class AuthContext(BaseModel):
    """
    Identity of the caller, derived from server-side token verification.
    This is the ONLY source of user_id for ownership checks. Never trust
    owner ids from request bodies or query params.
    """
    model_config = ConfigDict(frozen=True)

    user_id: str
    username: str


def authenticate(credentials: Optional[HTTPAuthorizationCredentials]) -> AuthContext:
    """
    Resolve bearer credentials to an AuthContext.

    Raises:
        AuthenticationFailure: header absent, not a bearer credential, token
            segment missing, or token rejected. The reason is not exposed.
    """
    if credentials is None or not credentials.credentials:
        if IS_DEV:
            print("[AUTH] Rejected: no bearer token")
        raise AuthenticationFailure()

    try:
        claims = tokens.verify(credentials.credentials)
    except InvalidToken as e:
        if IS_DEV:
            print(f"[AUTH] Rejected: {e.message}")
        raise AuthenticationFailure() from e

    return AuthContext(user_id=claims.user_id, username=claims.username)


def require_auth_context(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthContext:
    """
    Auth dependency for protected routes. Attaches the identity to
    request.state.auth for anything downstream that only has the request.

    Usage:
        @router.get("")
        def list_things(ctx: AuthContext = Depends(require_auth_context)):
            ...
    """
    ctx = authenticate(credentials)
    request.state.auth = ctx
    return ctx
