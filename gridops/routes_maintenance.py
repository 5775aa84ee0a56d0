"""
gridops/routes_maintenance.py

Maintenance record endpoints. A record is reachable only through an asset
the caller owns; the parent asset in POST bodies is checked the same way.
"""

from __future__ import annotations

import sqlite3
from typing import List

from fastapi import APIRouter, Depends, Path

from gridops.auth_context import AuthContext, require_auth_context
from gridops.dependencies import get_conn
from gridops.models import MaintenanceRecord
from gridops.modules import maintenance
from gridops.schemas import DataResponse, ErrorResponse, MaintenanceRecordCreateRequest, MaintenanceRecordUpdateRequest

router = APIRouter(
    prefix="/maintenance",
    tags=["maintenance"],
    dependencies=[Depends(require_auth_context)],
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.get("", response_model=DataResponse[List[MaintenanceRecord]])
def get_maintenance_records(
    ctx: AuthContext = Depends(require_auth_context),
    conn: sqlite3.Connection = Depends(get_conn),
):
    return {"data": maintenance.list_maintenance_records(conn, ctx)}


@router.get("/{record_id}", response_model=DataResponse[MaintenanceRecord])
def get_one_maintenance_record(
    record_id: str = Path(..., description="Maintenance record ID"),
    ctx: AuthContext = Depends(require_auth_context),
    conn: sqlite3.Connection = Depends(get_conn),
):
    return {"data": maintenance.get_maintenance_record(conn, ctx, record_id)}


@router.post("", response_model=DataResponse[MaintenanceRecord])
def create_maintenance_record(
    request: MaintenanceRecordCreateRequest,
    ctx: AuthContext = Depends(require_auth_context),
    conn: sqlite3.Connection = Depends(get_conn),
):
    return {"data": maintenance.create_maintenance_record(conn, ctx, request)}


@router.put("/{record_id}", response_model=DataResponse[MaintenanceRecord])
def update_maintenance_record(
    request: MaintenanceRecordUpdateRequest,
    record_id: str = Path(..., description="Maintenance record ID"),
    ctx: AuthContext = Depends(require_auth_context),
    conn: sqlite3.Connection = Depends(get_conn),
):
    return {"data": maintenance.update_maintenance_record(conn, ctx, record_id, request)}


@router.delete("/{record_id}", response_model=DataResponse[MaintenanceRecord])
def delete_maintenance_record(
    record_id: str = Path(..., description="Maintenance record ID"),
    ctx: AuthContext = Depends(require_auth_context),
    conn: sqlite3.Connection = Depends(get_conn),
):
    return {"data": maintenance.delete_maintenance_record(conn, ctx, record_id)}
