from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def find_attendance(self, subject_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def save_attendance(self, record: AttendanceRecord) -> None:
        """Upsert keyed by (subject_id, work_date): replace if it exists."""

        raise NotImplementedError

    def list_attendance(
        self,
        *,
        subject_id: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
