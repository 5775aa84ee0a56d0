"""
gridops/routes_assets.py

Asset CRUD endpoints.

Security guarantees:
- All endpoints require a verified bearer token (require_auth_context)
- Owner id comes from the auth context ONLY, never from the client
- Asset missing and asset owned by someone else are both 404
- Input validation via Pydantic schemas
"""

from __future__ import annotations

import sqlite3
from typing import List

from fastapi import APIRouter, Depends, Path

from gridops.auth_context import AuthContext, require_auth_context
from gridops.dependencies import get_conn
from gridops.models import Asset
from gridops.modules import assets
from gridops.schemas import AssetCreateRequest, AssetUpdateRequest, DataResponse, ErrorResponse

router = APIRouter(
    prefix="/asset",
    tags=["assets"],
    dependencies=[Depends(require_auth_context)],
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.get("", response_model=DataResponse[List[Asset]])
def get_assets(
    ctx: AuthContext = Depends(require_auth_context),
    conn: sqlite3.Connection = Depends(get_conn),
):
    return {"data": assets.list_assets(conn, ctx)}


@router.get("/{asset_id}", response_model=DataResponse[Asset])
def get_one_asset(
    asset_id: str = Path(..., description="Asset ID"),
    ctx: AuthContext = Depends(require_auth_context),
    conn: sqlite3.Connection = Depends(get_conn),
):
    return {"data": assets.get_asset(conn, ctx, asset_id)}


@router.post("", response_model=DataResponse[Asset])
def create_asset(
    request: AssetCreateRequest,
    ctx: AuthContext = Depends(require_auth_context),
    conn: sqlite3.Connection = Depends(get_conn),
):
    return {"data": assets.create_asset(conn, ctx, request)}


@router.put("/{asset_id}", response_model=DataResponse[Asset])
def update_asset(
    request: AssetUpdateRequest,
    asset_id: str = Path(..., description="Asset ID"),
    ctx: AuthContext = Depends(require_auth_context),
    conn: sqlite3.Connection = Depends(get_conn),
):
    return {"data": assets.update_asset(conn, ctx, asset_id, request)}


@router.delete("/{asset_id}", response_model=DataResponse[Asset])
def delete_asset(
    asset_id: str = Path(..., description="Asset ID to delete"),
    ctx: AuthContext = Depends(require_auth_context),
    conn: sqlite3.Connection = Depends(get_conn),
):
    """Delete an asset and, through cascade, its records and their tasks."""
    return {"data": assets.delete_asset(conn, ctx, asset_id)}
