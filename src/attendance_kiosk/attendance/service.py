from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.locks import KeyedLocks
from ..core.constants import DEFAULT_DEVICE_ID, DEFAULT_HISTORY_LIMIT
from ..core.enums import ArrivalKind, SessionState
from ..core.exceptions import (
    InactiveSubject,
    NoActiveSession,
    SessionAlreadyClosed,
    UnknownSubject,
    ValidationError,
)
from ..subjects.model import Subject
from ..subjects.repository import SubjectRepository
from .durations import ZERO, SessionDurations, compute_durations
from .factory import ArrivalStrategyFactory
from .model import AttendanceRecord, BreakInterval, session_state
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArrivalResult:
    kind: ArrivalKind
    record: AttendanceRecord
    message: str = ""


@dataclass(frozen=True)
class TodaySummary:
    record: Optional[AttendanceRecord]
    state: SessionState
    durations: SessionDurations


class AttendanceService:
    """Owns the per-subject, per-day attendance lifecycle.

    Every read-modify-write of a record runs under a lock keyed by
    (subject_id, work_date), so concurrent scans for the same subject cannot
    lose updates. The service is not idempotent: two ``resolve_arrival`` calls
    in one visit record an arrival and then a departure. Debouncing belongs to
    the gate.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        subjects: SubjectRepository,
        *,
        strategy_factory: ArrivalStrategyFactory | None = None,
        device_id: str = DEFAULT_DEVICE_ID,
        locks: KeyedLocks | None = None,
        id_factory: Callable[[], str] | None = None,
    ):
        self._attendance = attendance
        self._subjects = subjects
        self._factory = strategy_factory or ArrivalStrategyFactory()
        self._device_id = device_id
        self._locks = locks or KeyedLocks()
        self._new_id = id_factory or (lambda: str(uuid.uuid4()))

    def _require_active_subject(self, subject_id: str) -> Subject:
        subject = self._subjects.get_by_id(subject_id)
        if not subject:
            raise UnknownSubject(f"Unknown subject: {subject_id}")
        if not subject.is_active:
            raise InactiveSubject(f"Subject {subject_id} is inactive")
        return subject

    def resolve_arrival(self, subject_id: str, *, now: datetime | None = None) -> ArrivalResult:
        """Apply the next arrival/departure transition for today's record."""

        now = now or now_local()
        today = now.date()
        subject = self._require_active_subject(subject_id)

        with self._locks.hold((subject.subject_id, today)):
            existing = self._attendance.find_attendance(subject.subject_id, today)
            state = session_state(existing)

            if state == SessionState.DEPARTED:
                return ArrivalResult(
                    kind=ArrivalKind.ALREADY_CLOSED,
                    record=existing,
                    message="You have already completed your daily attendance.",
                )

            if state == SessionState.NOT_ARRIVED:
                decision = self._factory.for_arrival(now=now).decide_arrival(now=now)
                if existing is None:
                    record = AttendanceRecord(
                        record_id=self._new_id(),
                        subject_id=subject.subject_id,
                        subject_name=subject.name,
                        work_date=today,
                        arrival=now,
                        departure=None,
                        status=decision.status,
                        device_id=self._device_id,
                    )
                else:
                    # Pre-existing placeholder (e.g. imported absence): fill arrival in place.
                    record = replace(existing, arrival=now, status=decision.status)
                self._attendance.save_attendance(record)
                logger.info("arrival subject=%s status=%s at=%s", subject.subject_id, record.status.value, now.isoformat())
                return ArrivalResult(kind=ArrivalKind.ARRIVED, record=record, message=decision.message)

            # Departure never precedes arrival or any recorded break.
            departure = max([now, existing.arrival] + [b.end or b.start for b in existing.breaks])
            breaks = existing.breaks
            if state == SessionState.ON_BREAK:
                # Departing closes any open break.
                last = breaks[-1]
                breaks = breaks[:-1] + (BreakInterval(start=last.start, end=departure),)

            record = replace(existing, departure=departure, breaks=breaks)
            self._attendance.save_attendance(record)
            logger.info("departure subject=%s at=%s", subject.subject_id, departure.isoformat())
            return ArrivalResult(
                kind=ArrivalKind.DEPARTED,
                record=record,
                message="Session concluded. Exit authorized.",
            )

    def toggle_break(self, record: Optional[AttendanceRecord], now: datetime) -> AttendanceRecord:
        """Open a break, or close the open one. Returns the new record; the caller persists it."""

        state = session_state(record)
        if state == SessionState.NOT_ARRIVED:
            raise NoActiveSession("No active session today")
        if state == SessionState.DEPARTED:
            raise SessionAlreadyClosed("Today's session is already closed")

        if now < record.arrival:
            raise ValidationError("Break cannot start before arrival")

        if state == SessionState.ON_BREAK:
            last = record.breaks[-1]
            if now < last.start:
                raise ValidationError("Break cannot end before it started")
            breaks = record.breaks[:-1] + (BreakInterval(start=last.start, end=now),)
        else:
            if record.breaks and now < record.breaks[-1].end:
                raise ValidationError("Breaks must be chronological")
            breaks = record.breaks + (BreakInterval(start=now, end=None),)

        return replace(record, breaks=breaks)

    def toggle_break_for(self, subject_id: str, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()
        subject = self._require_active_subject(subject_id)

        with self._locks.hold((subject.subject_id, today)):
            record = self._attendance.find_attendance(subject.subject_id, today)
            updated = self.toggle_break(record, now)
            self._attendance.save_attendance(updated)

        logger.info(
            "break %s subject=%s at=%s",
            "start" if updated.open_break else "end",
            subject.subject_id,
            now.isoformat(),
        )
        return updated

    @staticmethod
    def compute_durations(record: AttendanceRecord, reference_now: datetime) -> SessionDurations:
        return compute_durations(record, reference_now)

    def today_summary(self, subject_id: str, *, now: datetime | None = None) -> TodaySummary:
        now = now or now_local()
        subject = self._subjects.get_by_id(subject_id)
        if not subject:
            raise UnknownSubject(f"Unknown subject: {subject_id}")

        record = self._attendance.find_attendance(subject.subject_id, now.date())
        durations = compute_durations(record, now) if record else ZERO
        return TodaySummary(record=record, state=session_state(record), durations=durations)

    def history(self, subject_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[AttendanceRecord]:
        rows = list(self._attendance.list_attendance(subject_id=subject_id))
        rows.sort(key=lambda r: r.work_date, reverse=True)
        return rows[:limit]
