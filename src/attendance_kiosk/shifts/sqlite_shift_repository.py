from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import format_hhmm
from ..core.enums import ShiftType
from ..database.connection import DatabaseConnection
from ..database.sqlite_base import db_cursor, fetchall, fetchone, normalize_sqlite_time
from .model import Shift
from .repository import ShiftRepository

_COLUMNS = "shift_id, name, shift_type, start_time, end_time, grace_minutes, break_minutes, min_overtime_hours"


def _to_shift(r: Dict[str, Any]) -> Shift:
    return Shift(
        shift_id=r["shift_id"],
        name=r["name"],
        shift_type=ShiftType(r["shift_type"]),
        start_time=normalize_sqlite_time(r["start_time"]),
        end_time=normalize_sqlite_time(r["end_time"]),
        grace_minutes=int(r.get("grace_minutes") or 0),
        break_minutes=int(r.get("break_minutes") or 0),
        min_overtime_hours=int(r.get("min_overtime_hours") or 0),
    )


class SQLiteShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shifts ORDER BY name")
            return [_to_shift(r) for r in fetchall(cur)]

    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shifts WHERE shift_id=?", (shift_id,))
            r = fetchone(cur)
            return _to_shift(r) if r else None

    def create(self, shift: Shift) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO shifts({_COLUMNS}) VALUES(?,?,?,?,?,?,?,?)",
                (
                    shift.shift_id,
                    shift.name,
                    shift.shift_type.value,
                    format_hhmm(shift.start_time),
                    format_hhmm(shift.end_time),
                    shift.grace_minutes,
                    shift.break_minutes,
                    shift.min_overtime_hours,
                ),
            )
