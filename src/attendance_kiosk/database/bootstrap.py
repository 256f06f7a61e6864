from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..core.constants import DEFAULT_SHIFT_ID
from .connection import DatabaseConnection
from .sqlite_base import db_cursor, fetchall, fetchone

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"

DEFAULT_SHIFT = {
    "shift_id": DEFAULT_SHIFT_ID,
    "name": "Standard Academic Day",
    "shift_type": "FIXED",
    "start_time": "08:30",
    "end_time": "16:30",
    "grace_minutes": 10,
    "break_minutes": 45,
    "min_overtime_hours": 1,
}


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: Optional[Path] = None) -> None:
    """Create tables (idempotent: CREATE ... IF NOT EXISTS) and seed defaults."""

    sql = (schema_path or SCHEMA_PATH).read_text(encoding="utf-8")
    with db_cursor(conn_factory) as (conn, _):
        conn.executescript(sql)
    ensure_default_shift(conn_factory)


def ensure_default_shift(conn_factory: DatabaseConnection) -> bool:
    """Insert the default shift when no shift exists yet. Returns True if inserted."""

    with db_cursor(conn_factory) as (_, cur):
        cur.execute("SELECT COUNT(*) AS n FROM shifts")
        row = fetchone(cur)
        if row and int(row["n"]) > 0:
            return False

        cur.execute(
            """
            INSERT INTO shifts(shift_id, name, shift_type, start_time, end_time,
                               grace_minutes, break_minutes, min_overtime_hours)
            VALUES(:shift_id, :name, :shift_type, :start_time, :end_time,
                   :grace_minutes, :break_minutes, :min_overtime_hours)
            """,
            DEFAULT_SHIFT,
        )
    logger.info("seeded default shift %s", DEFAULT_SHIFT_ID)
    return True


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    with db_cursor(conn_factory) as (_, cur):
        cur.execute("SELECT name FROM sqlite_master WHERE type='table' ORDER BY name")
        return [r["name"] for r in fetchall(cur)]
