"""
gridops/ownership.py

Ownership-chain resolver.

Every owned resource traces back to exactly one asset, and the asset's
belongs_to_id is the only ownership fact in the system:

    checklist_tasks t -> maintenance_records m -> assets a -> a.belongs_to_id

All reads and writes of owned tables go through this module. Each statement
joins the candidate row up to its asset and filters on a.belongs_to_id in the
same query, so a row that does not exist and a row owned by someone else
produce the same NotFound. Mutations are single UPDATE/DELETE/INSERT
statements that carry the filter themselves: there is no separate check step.

Nothing here is cached between requests.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Sequence

from gridops.auth_context import AuthContext
from gridops.config import IS_DEV
from gridops.db import row_to_dict
from gridops.errors import ApiError, NotFound, Unexpected


class Level(str, Enum):
    ASSET = "asset"
    MAINTENANCE_RECORD = "maintenance_record"
    CHECKLIST_TASK = "checklist_task"


@dataclass(frozen=True)
class OwnershipChain:
    """How one level joins up to its asset."""
    level: Level
    table: str
    alias: str
    joins: str
    label: str
    order_by: str
    mutable_columns: FrozenSet[str]
    parent: Optional[Level] = None
    parent_column: Optional[str] = None
    touches_updated_at: bool = False

    @property
    def from_clause(self) -> str:
        return f"{self.table} {self.alias} {self.joins}".strip()

    def owned_select(self) -> str:
        return (
            f"SELECT {self.alias}.*, a.belongs_to_id AS owner_id "
            f"FROM {self.from_clause} WHERE a.belongs_to_id = ?"
        )

    def owned_ids(self) -> str:
        return f"SELECT {self.alias}.id FROM {self.from_clause} WHERE a.belongs_to_id = ?"


CHAINS: Dict[Level, OwnershipChain] = {
    Level.ASSET: OwnershipChain(
        level=Level.ASSET,
        table="assets",
        alias="a",
        joins="",
        label="Asset",
        order_by="a.rowid",
        mutable_columns=frozenset({"name"}),
        touches_updated_at=True,
    ),
    Level.MAINTENANCE_RECORD: OwnershipChain(
        level=Level.MAINTENANCE_RECORD,
        table="maintenance_records",
        alias="m",
        joins="JOIN assets a ON a.id = m.asset_id",
        label="Maintenance record",
        order_by="a.rowid, m.rowid",
        mutable_columns=frozenset({"title", "body", "status", "version"}),
        parent=Level.ASSET,
        parent_column="asset_id",
        touches_updated_at=True,
    ),
    Level.CHECKLIST_TASK: OwnershipChain(
        level=Level.CHECKLIST_TASK,
        table="checklist_tasks",
        alias="t",
        joins=(
            "JOIN maintenance_records m ON m.id = t.maintenance_record_id "
            "JOIN assets a ON a.id = m.asset_id"
        ),
        label="Checklist task",
        order_by="a.rowid, m.rowid, t.rowid",
        mutable_columns=frozenset({"name", "description"}),
        parent=Level.MAINTENANCE_RECORD,
        parent_column="maintenance_record_id",
    ),
}

OWNED_TABLES = tuple(chain.table for chain in CHAINS.values())


@dataclass(frozen=True)
class UpdateGuard:
    """
    Extra condition folded into an owned UPDATE. When the row is owned but the
    condition fails, `rejected(current_row)` supplies the error to raise.
    """
    sql: str
    params: Sequence[Any]
    rejected: Callable[[Dict[str, Any]], ApiError]


# ---------------------------------------------------------
# Guardrails
# ---------------------------------------------------------
def require_user_id(ctx: Optional[AuthContext]) -> str:
    """An ownership query without an identity is a server bug, never a 404."""
    if ctx is None or not ctx.user_id:
        print("[OWNERSHIP] Missing identity for owned query (failing fast)")
        raise Unexpected()
    return ctx.user_id


def execute_scoped(
    conn: sqlite3.Connection,
    sql: str,
    params: Sequence[Any],
    ctx: AuthContext,
    label: str = "",
) -> sqlite3.Cursor:
    """
    Execute a statement against owned tables, refusing any statement that is
    not filtered on belongs_to_id with the caller's id bound as a parameter.
    """
    user_id = require_user_id(ctx)
    sql_lower = sql.lower()
    if any(table in sql_lower for table in OWNED_TABLES):
        if "belongs_to_id" not in sql_lower or user_id not in params:
            print(f"[OWNERSHIP] Unscoped statement refused{f' in {label}' if label else ''}: {sql[:100]}")
            raise Unexpected()
    return conn.execute(sql, tuple(params))


def _owner_of(row: Dict[str, Any]) -> Optional[str]:
    if "owner_id" in row:
        return row["owner_id"]
    return row.get("belongs_to_id")


def assert_rows_scoped(rows: Iterable[Dict[str, Any]], ctx: AuthContext, label: str = "") -> None:
    """
    Re-check that every returned row belongs to the caller. A mismatch means a
    query lost its filter; fail the request rather than leak the row.
    """
    mismatches = [i for i, row in enumerate(rows) if _owner_of(row) not in (None, ctx.user_id)]
    if mismatches:
        print(
            f"[OWNERSHIP] Isolation violation{f' in {label}' if label else ''}: "
            f"{len(mismatches)} row(s) not owned by user_id={ctx.user_id}"
        )
        raise Unexpected()


def assert_row_scoped(row: Optional[Dict[str, Any]], ctx: AuthContext, label: str = "") -> None:
    if row is not None:
        assert_rows_scoped([row], ctx, label)


def _not_found(chain: OwnershipChain, ctx: AuthContext, resource_id: Any) -> NotFound:
    if IS_DEV:
        print(f"[OWNERSHIP] Denied: level={chain.level.value}, id={resource_id}, user_id={ctx.user_id}")
    return NotFound(chain.label)


# ---------------------------------------------------------
# Resolver
# ---------------------------------------------------------
def resolve(conn: sqlite3.Connection, ctx: AuthContext, level: Level, resource_id: Any) -> Dict[str, Any]:
    """
    Return the row for resource_id if ctx owns it through the chain.

    Raises:
        NotFound: row missing or owned by another user (indistinguishable)
    """
    chain = CHAINS[level]
    user_id = require_user_id(ctx)
    cur = execute_scoped(
        conn,
        f"{chain.owned_select()} AND {chain.alias}.id = ?",
        (user_id, resource_id),
        ctx,
        label=f"resolve {level.value}",
    )
    row = cur.fetchone()
    if row is None:
        raise _not_found(chain, ctx, resource_id)

    result = row_to_dict(row)
    assert_row_scoped(result, ctx, label=f"resolve {level.value}")
    return result


def list_owned(
    conn: sqlite3.Connection,
    ctx: AuthContext,
    level: Level,
    parent_id: Optional[Any] = None,
) -> List[Dict[str, Any]]:
    """
    All rows at `level` owned by ctx, flattened across every owned asset in
    asset/record/task insertion order. parent_id narrows to one direct parent.
    """
    chain = CHAINS[level]
    user_id = require_user_id(ctx)
    sql = chain.owned_select()
    params: List[Any] = [user_id]
    if parent_id is not None:
        if chain.parent_column is None:
            raise ValueError(f"{level.value} has no parent")
        sql += f" AND {chain.alias}.{chain.parent_column} = ?"
        params.append(parent_id)
    sql += f" ORDER BY {chain.order_by}"

    rows = [row_to_dict(r) for r in execute_scoped(conn, sql, params, ctx, label=f"list {level.value}").fetchall()]
    assert_rows_scoped(rows, ctx, label=f"list {level.value}")
    return rows


def insert_owned(conn: sqlite3.Connection, ctx: AuthContext, level: Level, values: Dict[str, Any]) -> Dict[str, Any]:
    """
    Insert a row owned by ctx.

    Assets take belongs_to_id from ctx (never from values). Children are
    inserted with INSERT ... SELECT ... WHERE EXISTS(owned parent) so the
    parent check and the insert are one statement.

    Raises:
        NotFound: the referenced parent is missing or not owned
    """
    chain = CHAINS[level]
    user_id = require_user_id(ctx)
    label = f"insert {level.value}"

    if chain.parent is None:
        values = {**values, "belongs_to_id": user_id}
        columns = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)
        cur = execute_scoped(
            conn,
            f"INSERT INTO {chain.table} ({columns}) VALUES ({placeholders}) RETURNING *",
            list(values.values()),
            ctx,
            label=label,
        )
        return row_to_dict(cur.fetchone())

    parent_chain = CHAINS[chain.parent]
    parent_id = values.get(chain.parent_column)
    columns = ", ".join(values)
    placeholders = ", ".join("?" for _ in values)
    cur = execute_scoped(
        conn,
        f"INSERT INTO {chain.table} ({columns}) "
        f"SELECT {placeholders} "
        f"WHERE EXISTS ({parent_chain.owned_ids()} AND {parent_chain.alias}.id = ?) "
        f"RETURNING *",
        [*values.values(), user_id, parent_id],
        ctx,
        label=label,
    )
    row = cur.fetchone()
    if row is None:
        raise _not_found(parent_chain, ctx, parent_id)
    return row_to_dict(row)


def update_owned(
    conn: sqlite3.Connection,
    ctx: AuthContext,
    level: Level,
    resource_id: Any,
    changes: Dict[str, Any],
    now: Optional[str] = None,
    guard: Optional[UpdateGuard] = None,
) -> Dict[str, Any]:
    """
    Apply a partial update in one "UPDATE ... WHERE id = ? AND owned" statement.
    With no changes, returns the current row (still ownership-filtered).

    Raises:
        NotFound: row missing or not owned
        guard.rejected(...): row owned but the guard condition refused it
    """
    chain = CHAINS[level]
    user_id = require_user_id(ctx)

    unknown = set(changes) - chain.mutable_columns
    if unknown:
        raise ValueError(f"Columns not updatable on {chain.table}: {sorted(unknown)}")
    if not changes:
        return resolve(conn, ctx, level, resource_id)

    assignments = dict(changes)
    if chain.touches_updated_at and now is not None:
        assignments["updated_at"] = now
    set_clause = ", ".join(f"{column} = ?" for column in assignments)

    sql = f"UPDATE {chain.table} SET {set_clause} WHERE id = ? AND id IN ({chain.owned_ids()})"
    params: List[Any] = [*assignments.values(), resource_id, user_id]
    if guard is not None:
        sql += f" AND ({guard.sql})"
        params.extend(guard.params)
    sql += " RETURNING *"

    row = execute_scoped(conn, sql, params, ctx, label=f"update {level.value}").fetchone()
    if row is not None:
        return row_to_dict(row)

    if guard is None:
        raise _not_found(chain, ctx, resource_id)
    current = resolve(conn, ctx, level, resource_id)
    raise guard.rejected(current)


def delete_owned(conn: sqlite3.Connection, ctx: AuthContext, level: Level, resource_id: Any) -> Dict[str, Any]:
    """
    Delete in one "DELETE ... WHERE id = ? AND owned" statement and return the
    deleted row. Children go with it through ON DELETE CASCADE.

    Raises:
        NotFound: row missing or not owned
    """
    chain = CHAINS[level]
    user_id = require_user_id(ctx)
    row = execute_scoped(
        conn,
        f"DELETE FROM {chain.table} WHERE id = ? AND id IN ({chain.owned_ids()}) RETURNING *",
        (resource_id, user_id),
        ctx,
        label=f"delete {level.value}",
    ).fetchone()
    if row is None:
        raise _not_found(chain, ctx, resource_id)
    return row_to_dict(row)
