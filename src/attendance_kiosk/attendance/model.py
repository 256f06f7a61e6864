from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, SessionState


@dataclass(frozen=True)
class BreakInterval:
    start: datetime
    end: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.end is None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: the single attendance entry of one subject on one date.

    The subject name is denormalized so history survives roster edits.
    """

    record_id: str
    subject_id: str
    subject_name: str
    work_date: date
    arrival: Optional[datetime]
    departure: Optional[datetime]
    status: AttendanceStatus
    breaks: tuple[BreakInterval, ...] = field(default_factory=tuple)
    overtime_minutes: int = 0
    early_exit: bool = False
    device_id: str = ""
    # Placeholder for a future server sync, never set locally.
    is_synced: bool = False

    @property
    def open_break(self) -> Optional[BreakInterval]:
        if self.breaks and self.breaks[-1].is_open:
            return self.breaks[-1]
        return None


def session_state(record: Optional[AttendanceRecord]) -> SessionState:
    """Compute the lifecycle state of today's record once."""

    if record is None or record.arrival is None:
        return SessionState.NOT_ARRIVED
    if record.departure is not None:
        return SessionState.DEPARTED
    if record.open_break is not None:
        return SessionState.ON_BREAK
    return SessionState.PRESENT
