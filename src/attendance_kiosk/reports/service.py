from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from ..attendance.durations import compute_durations
from ..attendance.model import session_state
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_duration, now_local
from ..core.enums import AttendanceStatus, SessionState
from ..core.exceptions import ValidationError
from ..subjects.repository import SubjectRepository


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


@dataclass(frozen=True)
class DailyOverview:
    work_date: date
    registered: int
    present: int
    late: int
    on_break: int

    def as_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "registered": self.registered,
            "present": self.present,
            "late": self.late,
            "on_break": self.on_break,
        }


class AttendanceReportService:
    def __init__(self, attendance: AttendanceRepository, subjects: SubjectRepository):
        self._attendance = attendance
        self._subjects = subjects

    def build_attendance_report(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        subject_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> ReportData:
        if start and end and start > end:
            raise ValidationError("Start date must not be after end date")

        now = now or now_local()
        records = self._attendance.list_attendance(subject_id=subject_id, start=start, end=end)

        summary_map: dict[str, dict] = {}
        out_rows: list[dict] = []

        for r in records:
            d = compute_durations(r, now)
            out_rows.append(
                {
                    "record_id": r.record_id,
                    "subject_id": r.subject_id,
                    "name": r.subject_name,
                    "work_date": r.work_date.isoformat(),
                    "check_in": r.arrival.strftime("%H:%M:%S") if r.arrival else "-",
                    "check_out": r.departure.strftime("%H:%M:%S") if r.departure else "-",
                    "status": r.status.value,
                    "state": session_state(r).value,
                    "work": format_duration(d.work),
                    "break": format_duration(d.breaks),
                    "breaks_taken": len(r.breaks),
                }
            )

            s = summary_map.get(r.subject_id)
            if not s:
                s = {
                    "subject_id": r.subject_id,
                    "name": r.subject_name,
                    "days": 0,
                    "late_days": 0,
                    "work": timedelta(0),
                    "break": timedelta(0),
                }
                summary_map[r.subject_id] = s
            if r.arrival is not None:
                s["days"] += 1
            if r.status == AttendanceStatus.LATE:
                s["late_days"] += 1
            s["work"] += d.work
            s["break"] += d.breaks

        summary = []
        for s in sorted(summary_map.values(), key=lambda x: x["work"], reverse=True):
            summary.append(
                {
                    "subject_id": s["subject_id"],
                    "name": s["name"],
                    "days": s["days"],
                    "late_days": s["late_days"],
                    "total_work": format_duration(s["work"]),
                    "total_break": format_duration(s["break"]),
                }
            )

        return ReportData(rows=out_rows, summary=summary)

    def daily_overview(self, *, now: Optional[datetime] = None) -> DailyOverview:
        now = now or now_local()
        today = now.date()

        registered = sum(1 for s in self._subjects.list_all() if s.is_active)
        records = self._attendance.list_attendance(start=today, end=today)

        present = late = on_break = 0
        for r in records:
            if r.arrival is None:
                continue
            present += 1
            if r.status == AttendanceStatus.LATE:
                late += 1
            if session_state(r) == SessionState.ON_BREAK:
                on_break += 1

        return DailyOverview(work_date=today, registered=registered, present=present, late=late, on_break=on_break)
