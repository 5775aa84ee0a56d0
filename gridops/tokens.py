"""
gridops/tokens.py

Stateless bearer tokens (JWT, HS256).

issue() signs {sub, username, iat[, exp]} with the server secret; verify() is
a pure function of (secret, token) with no shared mutable state, so it is safe
to call concurrently from any worker thread. Claims are readable by the holder
but cannot be forged without SECRET_KEY.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Mapping, Optional, Union

import jwt
from pydantic import BaseModel

from gridops import config
from gridops.errors import InvalidToken
from gridops.models import User


class TokenClaims(BaseModel):
    """Identity carried by a verified token."""
    user_id: str
    username: str


def issue(user: Union[User, Mapping[str, Any]], secret: Optional[str] = None) -> str:
    """Sign a token for user. Adds exp only when ACCESS_TOKEN_MINUTES > 0."""
    if isinstance(user, User):
        user_id, username = user.id, user.username
    else:
        user_id, username = user["id"], user["username"]

    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "username": username,
        "iat": now,
    }
    if config.ACCESS_TOKEN_MINUTES > 0:
        payload["exp"] = now + timedelta(minutes=config.ACCESS_TOKEN_MINUTES)

    return jwt.encode(payload, secret or config.SECRET_KEY, algorithm=config.ALGORITHM)


def verify(token: Optional[str], secret: Optional[str] = None) -> TokenClaims:
    """
    Verify signature and payload shape, returning the identity claims.

    Raises:
        InvalidToken: token absent or empty, signature mismatch, expired,
            or payload missing sub/username.
    """
    if not token or not token.strip():
        raise InvalidToken("token missing")

    try:
        payload = jwt.decode(
            token,
            secret or config.SECRET_KEY,
            algorithms=[config.ALGORITHM],
            options={"require": ["sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise InvalidToken("token expired")
    except jwt.InvalidTokenError:
        raise InvalidToken("token invalid")

    user_id = payload.get("sub")
    username = payload.get("username")
    if not isinstance(user_id, str) or not user_id or not isinstance(username, str):
        raise InvalidToken("token payload malformed")

    return TokenClaims(user_id=user_id, username=username)
