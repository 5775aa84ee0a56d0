"""
gridops/routes_users.py

Public endpoints: registration and sign-in. Both return {token}.
"""

from __future__ import annotations

import sqlite3

from fastapi import APIRouter, Depends

from gridops import credentials, tokens
from gridops.dependencies import get_conn
from gridops.schemas import CredentialsRequest, ErrorResponse, TokenResponse

router = APIRouter(tags=["users"], responses={400: {"model": ErrorResponse}})


@router.post("/user", response_model=TokenResponse)
def create_new_user(request: CredentialsRequest, conn: sqlite3.Connection = Depends(get_conn)) -> TokenResponse:
    """Register a user and return a bearer token for it."""
    user = credentials.register(conn, request.username, request.password)
    return TokenResponse(token=tokens.issue(user))


@router.post("/signin", response_model=TokenResponse, responses={401: {"model": ErrorResponse}})
def signin(request: CredentialsRequest, conn: sqlite3.Connection = Depends(get_conn)) -> TokenResponse:
    """Exchange valid credentials for a bearer token. 401 on any mismatch."""
    user = credentials.verify(conn, request.username, request.password)
    return TokenResponse(token=tokens.issue(user))
