"""
gridops/modules/tasks.py

Checklist task manager. Tasks are the individual checks ticked off during a
record (name plus the observed result). Leaf of the ownership chain; access
is proven through record -> asset -> owner.
"""

from __future__ import annotations

import sqlite3
from typing import List, Optional

from gridops.auth_context import AuthContext
from gridops.config import IS_DEV
from gridops.db import new_id, now_iso, transaction
from gridops.models import ChecklistTask
from gridops.ownership import Level, delete_owned, insert_owned, list_owned, resolve, update_owned
from gridops.schemas import ChecklistTaskCreateRequest, ChecklistTaskUpdateRequest


def list_checklist_tasks(
    conn: sqlite3.Connection,
    ctx: AuthContext,
    maintenance_record_id: Optional[str] = None,
) -> List[ChecklistTask]:
    """
    Tasks across all of the caller's records, or only those of one record.

    Raises:
        NotFound("Maintenance record"): filter record missing or not owned
    """
    with transaction(conn, label="list_checklist_tasks"):
        if maintenance_record_id is not None:
            resolve(conn, ctx, Level.MAINTENANCE_RECORD, maintenance_record_id)
        rows = list_owned(conn, ctx, Level.CHECKLIST_TASK, parent_id=maintenance_record_id)
    if IS_DEV:
        print(f"[TASKS] List: user_id={ctx.user_id}, record={maintenance_record_id}, results={len(rows)}")
    return [ChecklistTask.model_validate(row) for row in rows]


def get_checklist_task(conn: sqlite3.Connection, ctx: AuthContext, task_id: str) -> ChecklistTask:
    with transaction(conn, label="get_checklist_task"):
        row = resolve(conn, ctx, Level.CHECKLIST_TASK, task_id)
    return ChecklistTask.model_validate(row)


def create_checklist_task(conn: sqlite3.Connection, ctx: AuthContext, request: ChecklistTaskCreateRequest) -> ChecklistTask:
    with transaction(conn, label="create_checklist_task"):
        row = insert_owned(conn, ctx, Level.CHECKLIST_TASK, {
            "id": new_id(),
            "name": request.name,
            "description": request.description,
            "maintenance_record_id": request.maintenance_record_id,
            "created_at": now_iso(),
        })
    if IS_DEV:
        print(f"[TASKS] Created task_id={row['id']}, record_id={request.maintenance_record_id}")
    return ChecklistTask.model_validate(row)


def update_checklist_task(
    conn: sqlite3.Connection,
    ctx: AuthContext,
    task_id: str,
    request: ChecklistTaskUpdateRequest,
) -> ChecklistTask:
    changes = request.changes()
    with transaction(conn, label="update_checklist_task"):
        row = update_owned(conn, ctx, Level.CHECKLIST_TASK, task_id, changes)
    if IS_DEV:
        print(f"[TASKS] Updated task_id={task_id}, fields={sorted(changes)}")
    return ChecklistTask.model_validate(row)


def delete_checklist_task(conn: sqlite3.Connection, ctx: AuthContext, task_id: str) -> ChecklistTask:
    with transaction(conn, label="delete_checklist_task"):
        row = delete_owned(conn, ctx, Level.CHECKLIST_TASK, task_id)
    if IS_DEV:
        print(f"[TASKS] Deleted task_id={task_id}, user_id={ctx.user_id}")
    return ChecklistTask.model_validate(row)
