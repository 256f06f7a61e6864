from __future__ import annotations

from datetime import date, datetime

import pytest

from attendance_kiosk.attendance.service import AttendanceService
from attendance_kiosk.core.enums import PayBasis, SubjectStatus
from attendance_kiosk.core.exceptions import ValidationError
from attendance_kiosk.payroll.service import PayrollService


def test_summary_has_one_row_per_active_subject(attendance_repo, subjects_repo, subject_factory):
    subjects_repo.save(subject_factory("EMP-1002", "Bilal Khan", pay_basis=PayBasis.DAILY, base_amount="800"))
    subjects_repo.save(subject_factory("EMP-1003", "Zed Former", status=SubjectStatus.INACTIVE))

    engine = AttendanceService(attendance_repo, subjects_repo)
    for day in (6, 7):
        engine.resolve_arrival("EMP-1002", now=datetime(2025, 1, day, 8, 30))
        engine.resolve_arrival("EMP-1002", now=datetime(2025, 1, day, 16, 30))

    rows = PayrollService(attendance_repo, subjects_repo).payroll_summary(now=datetime(2025, 1, 31, 18, 0))

    assert [r.subject_id for r in rows] == ["EMP-1001", "EMP-1002"]
    bilal = rows[1].as_dict()
    assert bilal["present_days"] == 2
    assert bilal["worked"] == "16:00:00"
    assert bilal["amount"] == "1600"
    assert bilal["currency"] == "INR"
    assert bilal["overtime_multiplier"] == "1.5"
    assert rows[0].amount == rows[0].base_amount


def test_summary_respects_date_range(attendance_repo, subjects_repo, subject_factory):
    subjects_repo.save(subject_factory("EMP-1001", "Asha Rao", pay_basis=PayBasis.DAILY, base_amount="100"))
    engine = AttendanceService(attendance_repo, subjects_repo)
    for day in (6, 7, 8):
        engine.resolve_arrival("EMP-1001", now=datetime(2025, 1, day, 8, 30))

    rows = PayrollService(attendance_repo, subjects_repo).payroll_summary(
        start=date(2025, 1, 7), end=date(2025, 1, 8), now=datetime(2025, 1, 8, 18, 0)
    )

    assert rows[0].present_days == 2
    assert str(rows[0].amount) == "200"


def test_summary_rejects_inverted_range(attendance_repo, subjects_repo):
    with pytest.raises(ValidationError):
        PayrollService(attendance_repo, subjects_repo).payroll_summary(start=date(2025, 2, 1), end=date(2025, 1, 1))
