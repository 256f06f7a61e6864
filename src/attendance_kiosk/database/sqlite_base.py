from __future__ import annotations

from contextlib import contextmanager
from datetime import time
from typing import Any, Dict, Iterator, List, Optional

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection) -> Iterator[tuple]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return dict(row) if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return [dict(r) for r in rows or []]


def normalize_sqlite_time(value: Any) -> Optional[time]:
    """Normalize TIME-like column values.

    Times are stored as 'HH:MM' or 'HH:MM:SS' text.
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)

    raise TypeError(f"Unsupported TIME value type: {type(value)!r}")
