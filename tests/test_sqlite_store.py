from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from decimal import Decimal

import pytest

from attendance_kiosk.attendance.model import AttendanceRecord, BreakInterval
from attendance_kiosk.attendance.sqlite_attendance_repository import SQLiteAttendanceRepository
from attendance_kiosk.core.constants import DEFAULT_SHIFT_ID
from attendance_kiosk.core.enums import AttendanceStatus, HolidayType, LeaveType, PayBasis, ShiftType
from attendance_kiosk.database.bootstrap import apply_schema, ensure_default_shift, list_tables
from attendance_kiosk.database.connection import DBConfig, DatabaseConnection
from attendance_kiosk.holidays.model import Holiday
from attendance_kiosk.holidays.sqlite_holiday_repository import SQLiteHolidayRepository
from attendance_kiosk.leaves.model import LeaveRequest
from attendance_kiosk.leaves.sqlite_leave_repository import SQLiteLeaveRepository
from attendance_kiosk.shifts.model import Shift
from attendance_kiosk.shifts.sqlite_shift_repository import SQLiteShiftRepository
from attendance_kiosk.subjects.model import BankDetails, CompensationConfig
from attendance_kiosk.subjects.sqlite_subject_repository import SQLiteSubjectRepository


@pytest.fixture
def conn(tmp_path):
    c = DatabaseConnection(DBConfig(path=str(tmp_path / "kiosk.db")))
    apply_schema(c)
    return c


def _record(**overrides):
    values = dict(
        record_id="rec-1",
        subject_id="EMP-1001",
        subject_name="Asha Rao",
        work_date=date(2025, 1, 6),
        arrival=datetime(2025, 1, 6, 8, 45, 12),
        departure=None,
        status=AttendanceStatus.ON_TIME,
        breaks=(),
        device_id="CAMPUS_GATE_01",
    )
    values.update(overrides)
    return AttendanceRecord(**values)


def test_schema_creates_tables_and_default_shift(conn):
    tables = list_tables(conn)

    assert {"subjects", "shifts", "holidays", "attendance_records", "leave_requests"} <= set(tables)

    shift = SQLiteShiftRepository(conn).get_by_id(DEFAULT_SHIFT_ID)
    assert shift.name == "Standard Academic Day"
    assert shift.start_time == time(8, 30)
    assert shift.end_time == time(16, 30)
    assert shift.grace_minutes == 10
    assert shift.break_minutes == 45


def test_schema_is_idempotent(conn):
    apply_schema(conn)

    assert ensure_default_shift(conn) is False
    assert len(SQLiteShiftRepository(conn).list_all()) == 1


def test_open_record_round_trips(conn):
    repo = SQLiteAttendanceRepository(conn)
    rec = _record(breaks=(BreakInterval(start=datetime(2025, 1, 6, 10, 0)),))

    repo.save_attendance(rec)

    assert repo.find_attendance("EMP-1001", date(2025, 1, 6)) == rec


def test_closed_record_round_trips(conn):
    repo = SQLiteAttendanceRepository(conn)
    rec = _record(
        departure=datetime(2025, 1, 6, 17, 0, 5),
        status=AttendanceStatus.LATE,
        breaks=(
            BreakInterval(start=datetime(2025, 1, 6, 10, 0), end=datetime(2025, 1, 6, 10, 15)),
            BreakInterval(start=datetime(2025, 1, 6, 13, 0), end=datetime(2025, 1, 6, 13, 45)),
        ),
        overtime_minutes=12,
        early_exit=True,
    )

    repo.save_attendance(rec)

    assert repo.find_attendance("EMP-1001", date(2025, 1, 6)) == rec


def test_record_without_arrival_keeps_nulls(conn):
    repo = SQLiteAttendanceRepository(conn)
    rec = _record(arrival=None, status=AttendanceStatus.ABSENT)

    repo.save_attendance(rec)
    loaded = repo.find_attendance("EMP-1001", date(2025, 1, 6))

    assert loaded.arrival is None
    assert loaded.departure is None
    assert loaded == rec


def test_upsert_replaces_same_subject_and_date(conn):
    repo = SQLiteAttendanceRepository(conn)
    repo.save_attendance(_record())
    repo.save_attendance(_record(departure=datetime(2025, 1, 6, 16, 0)))

    rows = repo.list_attendance(subject_id="EMP-1001")

    assert len(rows) == 1
    assert rows[0].departure == datetime(2025, 1, 6, 16, 0)


def test_list_attendance_filters_by_range(conn):
    repo = SQLiteAttendanceRepository(conn)
    for day in (5, 6, 7):
        repo.save_attendance(_record(record_id=f"r{day}", work_date=date(2025, 1, day)))

    rows = repo.list_attendance(start=date(2025, 1, 6), end=date(2025, 1, 7))

    assert [r.work_date.day for r in rows] == [6, 7]


def test_subject_round_trips(conn, subject_factory):
    repo = SQLiteSubjectRepository(conn)
    subject = replace(
        subject_factory(),
        joining_date=date(2024, 7, 1),
        shift_id=DEFAULT_SHIFT_ID,
        bank=BankDetails(account_number="0012", ifsc="SBIN0001", bank_name="SBI"),
        compensation=CompensationConfig(
            pay_basis=PayBasis.HOURLY,
            base_amount=Decimal("412.50"),
            overtime_multiplier=Decimal("2"),
        ),
    )

    repo.save(subject)

    assert repo.get_by_id(subject.subject_id) == subject
    assert repo.get_by_id("EMP-0000") is None


def test_shift_holiday_and_leave_repositories(conn):
    shifts = SQLiteShiftRepository(conn)
    shifts.create(
        Shift(
            shift_id="SCHED-NIGHT",
            name="Night Lab",
            shift_type=ShiftType.NIGHT,
            start_time=time(22, 0),
            end_time=time(6, 0),
        )
    )
    assert shifts.get_by_id("SCHED-NIGHT").shift_type == ShiftType.NIGHT

    holidays = SQLiteHolidayRepository(conn)
    holiday = Holiday(holiday_id="HOL-1", holiday_date=date(2025, 1, 26), name="Republic Day")
    holidays.add(holiday)
    assert list(holidays.list_all()) == [holiday]
    assert holiday.holiday_type == HolidayType.PUBLIC

    leaves = SQLiteLeaveRepository(conn)
    request = LeaveRequest(
        request_id="LV-1",
        subject_id="EMP-1001",
        leave_type=LeaveType.SICK,
        start_date=date(2025, 2, 3),
        end_date=date(2025, 2, 4),
        reason="Fever",
    )
    leaves.add(request)
    assert list(leaves.list_requests(subject_id="EMP-1001")) == [request]
    assert list(leaves.list_requests(subject_id="EMP-2000")) == []
