from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from ..common.datetime_utils import format_duration
from .model import AttendanceRecord


@dataclass(frozen=True)
class SessionDurations:
    work: timedelta
    breaks: timedelta

    def as_dict(self) -> dict:
        return {
            "work": format_duration(self.work),
            "break": format_duration(self.breaks),
            "work_seconds": int(self.work.total_seconds()),
            "break_seconds": int(self.breaks.total_seconds()),
        }


ZERO = SessionDurations(work=timedelta(0), breaks=timedelta(0))


def compute_durations(record: AttendanceRecord, reference_now: datetime) -> SessionDurations:
    """Work and break time of a record.

    Open intervals (the day itself, or a running break) are measured up to
    ``reference_now``; once departure is set the work span is frozen.
    """

    if record.arrival is None:
        return ZERO

    end = record.departure if record.departure is not None else reference_now

    total_break = timedelta(0)
    for interval in record.breaks:
        interval_end = interval.end if interval.end is not None else end
        total_break += interval_end - interval.start

    total_work = (end - record.arrival) - total_break
    return SessionDurations(
        work=max(total_work, timedelta(0)),
        breaks=max(total_break, timedelta(0)),
    )
