"""
gridops/dependencies.py

Reusable FastAPI dependencies shared by the routers.
"""

from __future__ import annotations

import sqlite3
from typing import Generator

from gridops.db import get_db


def get_conn() -> Generator[sqlite3.Connection, None, None]:
    """
    One connection per request, closed when the response is done.
    No connection or cursor outlives the request that opened it.

    Usage in routes:
        @router.get("")
        def handler(conn: sqlite3.Connection = Depends(get_conn)):
            ...
    """
    conn = get_db()
    try:
        yield conn
    finally:
        conn.close()
