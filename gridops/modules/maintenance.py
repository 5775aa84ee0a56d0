"""
gridops/modules/maintenance.py

Maintenance record manager. A record is one service visit on an asset: what
was done (title), the technician's write-up (body), where the job stands
(status, see lifecycle.py) and, for controllers and relays, the firmware
left installed (version, optional).
"""

from __future__ import annotations

import sqlite3
from typing import List, Optional

from gridops.auth_context import AuthContext
from gridops.config import IS_DEV
from gridops.db import new_id, now_iso, transaction
from gridops.lifecycle import DEFAULT_STATUS, MaintenanceStatus, allowed_predecessors, parse_status, transition_error
from gridops.models import MaintenanceRecord
from gridops.ownership import Level, UpdateGuard, delete_owned, insert_owned, list_owned, resolve, update_owned
from gridops.schemas import MaintenanceRecordCreateRequest, MaintenanceRecordUpdateRequest


def _status_guard(new_status: MaintenanceStatus) -> UpdateGuard:
    """Fold the lifecycle table into the UPDATE so the transition check is atomic."""
    predecessors = allowed_predecessors(new_status)
    return UpdateGuard(
        sql=f"status IN ({', '.join('?' for _ in predecessors)})" if predecessors else "0",
        params=[status.value for status in predecessors],
        rejected=lambda current: transition_error(current["status"], new_status),
    )


def list_maintenance_records(conn: sqlite3.Connection, ctx: AuthContext) -> List[MaintenanceRecord]:
    """Records across every asset the caller owns."""
    with transaction(conn, label="list_maintenance_records"):
        rows = list_owned(conn, ctx, Level.MAINTENANCE_RECORD)
    if IS_DEV:
        print(f"[MAINTENANCE] List: user_id={ctx.user_id}, results={len(rows)}")
    return [MaintenanceRecord.model_validate(row) for row in rows]


def get_maintenance_record(conn: sqlite3.Connection, ctx: AuthContext, record_id: str) -> MaintenanceRecord:
    with transaction(conn, label="get_maintenance_record"):
        row = resolve(conn, ctx, Level.MAINTENANCE_RECORD, record_id)
    return MaintenanceRecord.model_validate(row)


def create_maintenance_record(
    conn: sqlite3.Connection,
    ctx: AuthContext,
    request: MaintenanceRecordCreateRequest,
) -> MaintenanceRecord:
    """
    Create a record under an asset the caller owns.

    Raises:
        NotFound("Asset"): asset missing or owned by someone else
    """
    now = now_iso()
    status = request.status or DEFAULT_STATUS
    with transaction(conn, label="create_maintenance_record"):
        row = insert_owned(conn, ctx, Level.MAINTENANCE_RECORD, {
            "id": new_id(),
            "title": request.title,
            "body": request.body,
            "status": status.value,
            "version": request.version,
            "asset_id": request.asset_id,
            "created_at": now,
            "updated_at": now,
        })
    if IS_DEV:
        print(f"[MAINTENANCE] Created record_id={row['id']}, asset_id={request.asset_id}, status={status.value}")
    return MaintenanceRecord.model_validate(row)


def update_maintenance_record(
    conn: sqlite3.Connection,
    ctx: AuthContext,
    record_id: str,
    request: MaintenanceRecordUpdateRequest,
) -> MaintenanceRecord:
    """
    Partial update of title/body/status/version.

    Raises:
        NotFound: record missing or not owned
        IllegalStatusTransition: owned, but the lifecycle refuses the new status
    """
    changes = request.changes()
    guard: Optional[UpdateGuard] = None
    if "status" in changes:
        guard = _status_guard(parse_status(changes["status"]))

    with transaction(conn, label="update_maintenance_record"):
        row = update_owned(conn, ctx, Level.MAINTENANCE_RECORD, record_id, changes, now=now_iso(), guard=guard)
    if IS_DEV:
        print(f"[MAINTENANCE] Updated record_id={record_id}, fields={sorted(changes)}")
    return MaintenanceRecord.model_validate(row)


def delete_maintenance_record(conn: sqlite3.Connection, ctx: AuthContext, record_id: str) -> MaintenanceRecord:
    """Delete a record; its checklist tasks cascade with it. The asset is untouched."""
    with transaction(conn, label="delete_maintenance_record"):
        row = delete_owned(conn, ctx, Level.MAINTENANCE_RECORD, record_id)
    if IS_DEV:
        print(f"[MAINTENANCE] Deleted record_id={record_id}, user_id={ctx.user_id}")
    return MaintenanceRecord.model_validate(row)
