# gridops/db.py
# SQLite storage layer: connections, schema, and transaction boundary

from __future__ import annotations

import sqlite3
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Generator

from gridops import config
from gridops.errors import ApiError, Unexpected


SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    username TEXT NOT NULL UNIQUE,
    password_hash TEXT NOT NULL,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS assets (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    belongs_to_id TEXT NOT NULL REFERENCES users(id),
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS maintenance_records (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    body TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'SCHEDULED'
        CHECK (status IN ('SCHEDULED', 'IN_PROGRESS', 'COMPLETED', 'EMERGENCY_REPAIR')),
    version TEXT,
    asset_id TEXT NOT NULL REFERENCES assets(id) ON DELETE CASCADE,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS checklist_tasks (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    description TEXT NOT NULL,
    maintenance_record_id TEXT NOT NULL REFERENCES maintenance_records(id) ON DELETE CASCADE,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_assets_belongs_to_id ON assets(belongs_to_id);
CREATE INDEX IF NOT EXISTS idx_maintenance_records_asset_id ON maintenance_records(asset_id);
CREATE INDEX IF NOT EXISTS idx_checklist_tasks_record_id ON checklist_tasks(maintenance_record_id);
"""

# Children first, so wiping never trips a foreign key
TABLES = ("checklist_tasks", "maintenance_records", "assets", "users")


def get_db() -> sqlite3.Connection:
    """
    Create and return a SQLite connection with Row factory and FK enforcement.
    The path is read at call time so tests can redirect it.
    """
    conn = sqlite3.connect(config.DATABASE_PATH, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_db() -> None:
    """Create tables and indexes if missing. Safe to run on every startup."""
    conn = get_db()
    try:
        conn.executescript(SCHEMA_SQL)
        conn.commit()
    finally:
        conn.close()
    if config.IS_DEV:
        print(f"[DB] Schema ready at {config.DATABASE_PATH}")


def row_to_dict(row) -> dict:
    """Convert a sqlite3.Row to dict, or {} for None."""
    if row is None:
        return {}
    return dict(row)


def new_id() -> str:
    return str(uuid.uuid4())


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@contextmanager
def transaction(conn: sqlite3.Connection, label: str = "") -> Generator[sqlite3.Connection, None, None]:
    """
    Commit on success. On failure roll back; API errors propagate unchanged and
    storage errors surface as Unexpected without exposing driver detail.
    """
    try:
        yield conn
        conn.commit()
    except ApiError:
        conn.rollback()
        raise
    except sqlite3.Error as e:
        conn.rollback()
        print(f"[DB] Storage error{f' in {label}' if label else ''}: {type(e).__name__}: {e}")
        raise Unexpected() from e
