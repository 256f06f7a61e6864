from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveType, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.sqlite_base import db_cursor, fetchall
from .model import LeaveRequest
from .repository import LeaveRepository


class SQLiteLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_requests(self, *, subject_id: Optional[str] = None) -> Sequence[LeaveRequest]:
        sql = """
            SELECT request_id, subject_id, leave_type, start_date, end_date, reason, status
            FROM leave_requests
        """
        params: tuple = ()
        if subject_id:
            sql += " WHERE subject_id=?"
            params = (subject_id,)
        sql += " ORDER BY start_date DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [
                LeaveRequest(
                    request_id=r["request_id"],
                    subject_id=r["subject_id"],
                    leave_type=LeaveType(r["leave_type"]),
                    start_date=date.fromisoformat(r["start_date"]),
                    end_date=date.fromisoformat(r["end_date"]),
                    reason=r["reason"],
                    status=RequestStatus(r["status"]),
                )
                for r in fetchall(cur)
            ]

    def add(self, request: LeaveRequest) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(request_id, subject_id, leave_type, start_date, end_date, reason, status)
                VALUES(?,?,?,?,?,?,?)
                """,
                (
                    request.request_id,
                    request.subject_id,
                    request.leave_type.value,
                    request.start_date.isoformat(),
                    request.end_date.isoformat(),
                    request.reason,
                    request.status.value,
                ),
            )
