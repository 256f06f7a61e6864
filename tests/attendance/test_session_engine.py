from __future__ import annotations

import threading
from datetime import datetime

import pytest

from attendance_kiosk.attendance.model import AttendanceRecord, BreakInterval, session_state
from attendance_kiosk.attendance.service import AttendanceService
from attendance_kiosk.core.enums import ArrivalKind, AttendanceStatus, SessionState, SubjectStatus
from attendance_kiosk.core.exceptions import (
    InactiveSubject,
    NoActiveSession,
    SessionAlreadyClosed,
    UnknownSubject,
    ValidationError,
)


@pytest.fixture
def service(attendance_repo, subjects_repo):
    return AttendanceService(attendance_repo, subjects_repo, device_id="GATE_T")


def test_first_scan_creates_open_record(service, attendance_repo, fixed_now):
    result = service.resolve_arrival("EMP-1001", now=fixed_now)

    assert result.kind == ArrivalKind.ARRIVED
    rec = attendance_repo.find_attendance("EMP-1001", fixed_now.date())
    assert rec == result.record
    assert rec.arrival == fixed_now
    assert rec.departure is None
    assert rec.status == AttendanceStatus.ON_TIME
    assert rec.breaks == ()
    assert rec.overtime_minutes == 0
    assert rec.early_exit is False
    assert rec.subject_name == "Asha Rao"
    assert rec.device_id == "GATE_T"


def test_second_scan_departs_and_third_is_already_closed(service, attendance_repo, fixed_now):
    service.resolve_arrival("EMP-1001", now=fixed_now)
    second = service.resolve_arrival("EMP-1001", now=fixed_now.replace(hour=16))

    assert second.kind == ArrivalKind.DEPARTED
    assert second.record.departure == fixed_now.replace(hour=16)

    saves = attendance_repo.saves
    third = service.resolve_arrival("EMP-1001", now=fixed_now.replace(hour=17))

    assert third.kind == ArrivalKind.ALREADY_CLOSED
    assert third.record.departure == fixed_now.replace(hour=16)
    assert attendance_repo.saves == saves


def test_arrival_at_nine_fifteen_is_late(service):
    result = service.resolve_arrival("EMP-1001", now=datetime(2025, 1, 6, 9, 15))
    assert result.record.status == AttendanceStatus.LATE


def test_arrival_at_eight_fifty_nine_is_on_time(service):
    result = service.resolve_arrival("EMP-1001", now=datetime(2025, 1, 6, 8, 59))
    assert result.record.status == AttendanceStatus.ON_TIME


def test_new_day_gets_a_new_record(service, attendance_repo, fixed_now):
    service.resolve_arrival("EMP-1001", now=fixed_now)
    service.resolve_arrival("EMP-1001", now=fixed_now.replace(hour=17))

    next_day = fixed_now.replace(day=7)
    result = service.resolve_arrival("EMP-1001", now=next_day)

    assert result.kind == ArrivalKind.ARRIVED
    assert len(attendance_repo.list_attendance(subject_id="EMP-1001")) == 2


def test_unknown_subject_is_rejected(service, fixed_now):
    with pytest.raises(UnknownSubject):
        service.resolve_arrival("EMP-9999", now=fixed_now)


def test_inactive_subject_is_rejected(attendance_repo, subjects_repo, subject_factory, fixed_now):
    subjects_repo.save(subject_factory("EMP-2000", "Old Member", status=SubjectStatus.INACTIVE))
    svc = AttendanceService(attendance_repo, subjects_repo)

    with pytest.raises(InactiveSubject):
        svc.resolve_arrival("EMP-2000", now=fixed_now)
    assert attendance_repo.saves == 0


def test_placeholder_record_without_arrival_gets_filled(service, attendance_repo, fixed_now):
    placeholder = AttendanceRecord(
        record_id="r-1",
        subject_id="EMP-1001",
        subject_name="Asha Rao",
        work_date=fixed_now.date(),
        arrival=None,
        departure=None,
        status=AttendanceStatus.ABSENT,
    )
    attendance_repo.save_attendance(placeholder)

    result = service.resolve_arrival("EMP-1001", now=fixed_now)

    assert result.kind == ArrivalKind.ARRIVED
    assert result.record.record_id == "r-1"
    assert result.record.arrival == fixed_now
    assert result.record.status == AttendanceStatus.ON_TIME


def test_toggle_break_opens_then_closes_same_interval(service, fixed_now):
    rec = service.resolve_arrival("EMP-1001", now=fixed_now).record

    on_break = service.toggle_break(rec, fixed_now.replace(hour=10, minute=0))
    assert session_state(on_break) == SessionState.ON_BREAK
    assert on_break.breaks == (BreakInterval(start=fixed_now.replace(hour=10, minute=0), end=None),)

    back = service.toggle_break(on_break, fixed_now.replace(hour=10, minute=20))
    assert len(back.breaks) == 1
    assert back.breaks[0].end == fixed_now.replace(hour=10, minute=20)
    assert session_state(back) == SessionState.PRESENT


def test_toggle_break_without_arrival_raises(service, fixed_now):
    with pytest.raises(NoActiveSession):
        service.toggle_break(None, fixed_now)


def test_toggle_break_after_departure_leaves_record_unchanged(service, attendance_repo, fixed_now):
    service.resolve_arrival("EMP-1001", now=fixed_now)
    closed = service.resolve_arrival("EMP-1001", now=fixed_now.replace(hour=16)).record

    with pytest.raises(SessionAlreadyClosed):
        service.toggle_break_for("EMP-1001", now=fixed_now.replace(hour=17))

    assert attendance_repo.find_attendance("EMP-1001", fixed_now.date()) == closed


def test_toggle_break_before_arrival_time_is_invalid(service, fixed_now):
    rec = service.resolve_arrival("EMP-1001", now=fixed_now).record
    with pytest.raises(ValidationError):
        service.toggle_break(rec, fixed_now.replace(hour=7))


def test_toggle_break_for_persists(service, attendance_repo, fixed_now):
    service.resolve_arrival("EMP-1001", now=fixed_now)

    updated = service.toggle_break_for("EMP-1001", now=fixed_now.replace(hour=11))

    assert updated.open_break is not None
    assert attendance_repo.find_attendance("EMP-1001", fixed_now.date()) == updated


def test_departure_during_break_closes_the_break(service, fixed_now):
    service.resolve_arrival("EMP-1001", now=fixed_now)
    service.toggle_break_for("EMP-1001", now=fixed_now.replace(hour=12, minute=0))

    departed = service.resolve_arrival("EMP-1001", now=fixed_now.replace(hour=12, minute=30)).record

    assert departed.open_break is None
    assert departed.breaks[-1].end == fixed_now.replace(hour=12, minute=30)


def test_departure_scan_before_arrival_is_clamped(service, attendance_repo, fixed_now):
    service.resolve_arrival("EMP-1001", now=fixed_now)

    result = service.resolve_arrival("EMP-1001", now=fixed_now.replace(minute=30))

    assert result.kind == ArrivalKind.DEPARTED
    assert result.record.departure == fixed_now
    assert attendance_repo.find_attendance("EMP-1001", fixed_now.date()).departure == fixed_now


def test_today_summary_tracks_state_and_durations(service, fixed_now):
    before = service.today_summary("EMP-1001", now=fixed_now)
    assert before.state == SessionState.NOT_ARRIVED
    assert before.record is None

    service.resolve_arrival("EMP-1001", now=fixed_now)
    later = service.today_summary("EMP-1001", now=fixed_now.replace(hour=9, minute=45))

    assert later.state == SessionState.PRESENT
    assert later.durations.work.total_seconds() == 3600


def test_history_is_newest_first_and_limited(service, fixed_now):
    for day in (6, 7, 8):
        service.resolve_arrival("EMP-1001", now=fixed_now.replace(day=day))

    items = service.history("EMP-1001", limit=2)

    assert [r.work_date.day for r in items] == [8, 7]


def test_concurrent_scans_do_not_lose_updates(service, attendance_repo, fixed_now):
    kinds = []
    barrier = threading.Barrier(4)

    def scan():
        barrier.wait()
        kinds.append(service.resolve_arrival("EMP-1001", now=fixed_now).kind)

    threads = [threading.Thread(target=scan) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(k.value for k in kinds) == ["ALREADY_CLOSED", "ALREADY_CLOSED", "ARRIVED", "DEPARTED"]
