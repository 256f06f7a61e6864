from __future__ import annotations

import json
from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import from_iso, to_iso
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.sqlite_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord, BreakInterval
from .repository import AttendanceRepository

_COLUMNS = (
    "record_id, subject_id, subject_name, work_date, arrival, departure, status, "
    "breaks, overtime_minutes, early_exit, device_id, is_synced"
)


def _dump_breaks(breaks: Sequence[BreakInterval]) -> str:
    return json.dumps([{"start": to_iso(b.start), "end": to_iso(b.end)} for b in breaks])


def _load_breaks(raw: Optional[str]) -> tuple[BreakInterval, ...]:
    items = json.loads(raw or "[]")
    return tuple(BreakInterval(start=from_iso(i["start"]), end=from_iso(i.get("end"))) for i in items)


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=r["record_id"],
        subject_id=r["subject_id"],
        subject_name=r["subject_name"],
        work_date=date.fromisoformat(r["work_date"]),
        arrival=from_iso(r.get("arrival")),
        departure=from_iso(r.get("departure")),
        status=AttendanceStatus(r["status"]),
        breaks=_load_breaks(r.get("breaks")),
        overtime_minutes=int(r.get("overtime_minutes") or 0),
        early_exit=bool(r.get("early_exit")),
        device_id=r.get("device_id") or "",
        is_synced=bool(r.get("is_synced")),
    )


class SQLiteAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_attendance(self, subject_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE subject_id=? AND work_date=?
                """,
                (subject_id, work_date.isoformat()),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def save_attendance(self, record: AttendanceRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO attendance_records({_COLUMNS})
                VALUES(?,?,?,?,?,?,?,?,?,?,?,?)
                ON CONFLICT(subject_id, work_date) DO UPDATE SET
                    record_id=excluded.record_id,
                    subject_name=excluded.subject_name,
                    arrival=excluded.arrival,
                    departure=excluded.departure,
                    status=excluded.status,
                    breaks=excluded.breaks,
                    overtime_minutes=excluded.overtime_minutes,
                    early_exit=excluded.early_exit,
                    device_id=excluded.device_id,
                    is_synced=excluded.is_synced
                """,
                (
                    record.record_id,
                    record.subject_id,
                    record.subject_name,
                    record.work_date.isoformat(),
                    to_iso(record.arrival),
                    to_iso(record.departure),
                    record.status.value,
                    _dump_breaks(record.breaks),
                    int(record.overtime_minutes),
                    int(record.early_exit),
                    record.device_id,
                    int(record.is_synced),
                ),
            )

    def list_attendance(
        self,
        *,
        subject_id: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        where = []
        params: list = []
        if subject_id:
            where.append("subject_id=?")
            params.append(subject_id)
        if start:
            where.append("work_date>=?")
            params.append(start.isoformat())
        if end:
            where.append("work_date<=?")
            params.append(end.isoformat())

        sql = f"SELECT {_COLUMNS} FROM attendance_records"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY work_date, subject_name"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_record(r) for r in fetchall(cur)]
