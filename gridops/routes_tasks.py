"""
gridops/routes_tasks.py

Checklist task endpoints. Ownership is proven through task -> record -> asset.
"""

from __future__ import annotations

import sqlite3
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query

from gridops.auth_context import AuthContext, require_auth_context
from gridops.dependencies import get_conn
from gridops.models import ChecklistTask
from gridops.modules import tasks
from gridops.schemas import ChecklistTaskCreateRequest, ChecklistTaskUpdateRequest, DataResponse, ErrorResponse

router = APIRouter(
    prefix="/task",
    tags=["tasks"],
    dependencies=[Depends(require_auth_context)],
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.get("", response_model=DataResponse[List[ChecklistTask]])
def get_checklist_tasks(
    maintenance_record_id: Optional[str] = Query(
        None,
        alias="maintenanceRecordId",
        description="Only tasks of this maintenance record",
    ),
    ctx: AuthContext = Depends(require_auth_context),
    conn: sqlite3.Connection = Depends(get_conn),
):
    return {"data": tasks.list_checklist_tasks(conn, ctx, maintenance_record_id)}


@router.get("/{task_id}", response_model=DataResponse[ChecklistTask])
def get_one_checklist_task(
    task_id: str = Path(..., description="Checklist task ID"),
    ctx: AuthContext = Depends(require_auth_context),
    conn: sqlite3.Connection = Depends(get_conn),
):
    return {"data": tasks.get_checklist_task(conn, ctx, task_id)}


@router.post("", response_model=DataResponse[ChecklistTask])
def create_checklist_task(
    request: ChecklistTaskCreateRequest,
    ctx: AuthContext = Depends(require_auth_context),
    conn: sqlite3.Connection = Depends(get_conn),
):
    return {"data": tasks.create_checklist_task(conn, ctx, request)}


@router.put("/{task_id}", response_model=DataResponse[ChecklistTask])
def update_checklist_task(
    request: ChecklistTaskUpdateRequest,
    task_id: str = Path(..., description="Checklist task ID"),
    ctx: AuthContext = Depends(require_auth_context),
    conn: sqlite3.Connection = Depends(get_conn),
):
    return {"data": tasks.update_checklist_task(conn, ctx, task_id, request)}


@router.delete("/{task_id}", response_model=DataResponse[ChecklistTask])
def delete_checklist_task(
    task_id: str = Path(..., description="Checklist task ID"),
    ctx: AuthContext = Depends(require_auth_context),
    conn: sqlite3.Connection = Depends(get_conn),
):
    return {"data": tasks.delete_checklist_task(conn, ctx, task_id)}
