"""
gridops/modules/assets.py

Asset manager: equipment registered by a user (generators, transformers,
panels). Assets are the root of the ownership chain; belongs_to_id is taken
from the caller's AuthContext at creation and never changes.
"""

from __future__ import annotations

import sqlite3
from typing import List

from gridops.auth_context import AuthContext
from gridops.config import IS_DEV
from gridops.db import new_id, now_iso, transaction
from gridops.models import Asset
from gridops.ownership import Level, delete_owned, insert_owned, list_owned, resolve, update_owned
from gridops.schemas import AssetCreateRequest, AssetUpdateRequest


def list_assets(conn: sqlite3.Connection, ctx: AuthContext) -> List[Asset]:
    with transaction(conn, label="list_assets"):
        rows = list_owned(conn, ctx, Level.ASSET)
    if IS_DEV:
        print(f"[ASSETS] List: user_id={ctx.user_id}, results={len(rows)}")
    return [Asset.model_validate(row) for row in rows]


def get_asset(conn: sqlite3.Connection, ctx: AuthContext, asset_id: str) -> Asset:
    with transaction(conn, label="get_asset"):
        row = resolve(conn, ctx, Level.ASSET, asset_id)
    return Asset.model_validate(row)


def create_asset(conn: sqlite3.Connection, ctx: AuthContext, request: AssetCreateRequest) -> Asset:
    now = now_iso()
    with transaction(conn, label="create_asset"):
        row = insert_owned(conn, ctx, Level.ASSET, {
            "id": new_id(),
            "name": request.name,
            "created_at": now,
            "updated_at": now,
        })
    if IS_DEV:
        print(f"[ASSETS] Created asset_id={row['id']}, user_id={ctx.user_id}")
    return Asset.model_validate(row)


def update_asset(conn: sqlite3.Connection, ctx: AuthContext, asset_id: str, request: AssetUpdateRequest) -> Asset:
    with transaction(conn, label="update_asset"):
        row = update_owned(conn, ctx, Level.ASSET, asset_id, request.changes(), now=now_iso())
    if IS_DEV:
        print(f"[ASSETS] Updated asset_id={asset_id}, user_id={ctx.user_id}")
    return Asset.model_validate(row)


def delete_asset(conn: sqlite3.Connection, ctx: AuthContext, asset_id: str) -> Asset:
    """Delete an asset; its maintenance records and their tasks cascade with it."""
    with transaction(conn, label="delete_asset"):
        row = delete_owned(conn, ctx, Level.ASSET, asset_id)
    if IS_DEV:
        print(f"[ASSETS] Deleted asset_id={asset_id}, user_id={ctx.user_id}")
    return Asset.model_validate(row)
