from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional, Sequence

from ..attendance.durations import compute_durations
from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_duration, now_local
from ..core.exceptions import ValidationError
from ..subjects.model import Subject
from ..subjects.repository import SubjectRepository
from .calculator.factory import PayCalculatorFactory


@dataclass(frozen=True)
class PayrollRow:
    subject_id: str
    name: str
    department: str
    pay_basis: str
    base_amount: Decimal
    currency: str
    overtime_multiplier: Decimal
    present_days: int
    recorded_days: int
    worked: timedelta
    amount: Decimal

    def as_dict(self) -> dict:
        return {
            "subject_id": self.subject_id,
            "name": self.name,
            "department": self.department,
            "pay_basis": self.pay_basis,
            "base_amount": str(self.base_amount),
            "currency": self.currency,
            "overtime_multiplier": str(self.overtime_multiplier),
            "present_days": self.present_days,
            "recorded_days": self.recorded_days,
            "worked": format_duration(self.worked),
            "amount": str(self.amount),
        }


class PayrollService:
    """Derives payable amounts from a subject's compensation and attendance.

    The overtime multiplier is reported but never applied.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        subjects: SubjectRepository,
        *,
        calculators: Optional[PayCalculatorFactory] = None,
    ):
        self._attendance = attendance
        self._subjects = subjects
        self._calculators = calculators or PayCalculatorFactory()

    def compute_pay(
        self,
        subject: Subject,
        records: Sequence[AttendanceRecord],
        *,
        reference_now: datetime | None = None,
    ) -> Decimal:
        compensation = subject.compensation
        if compensation.base_amount < 0:
            raise ValidationError("Base amount must not be negative")

        own = [r for r in records if r.subject_id == subject.subject_id]
        calculator = self._calculators.for_basis(compensation.pay_basis)
        return calculator.amount(compensation, own, reference_now=reference_now or now_local())

    def payroll_summary(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        now: datetime | None = None,
    ) -> list[PayrollRow]:
        if start and end and start > end:
            raise ValidationError("Start date must not be after end date")

        now = now or now_local()
        records = list(self._attendance.list_attendance(start=start, end=end))

        rows: list[PayrollRow] = []
        for subject in self._subjects.list_all():
            if not subject.is_active:
                continue
            own = [r for r in records if r.subject_id == subject.subject_id]
            worked = timedelta(0)
            for r in own:
                worked += compute_durations(r, now).work

            c = subject.compensation
            rows.append(
                PayrollRow(
                    subject_id=subject.subject_id,
                    name=subject.name,
                    department=subject.department,
                    pay_basis=c.pay_basis.value,
                    base_amount=c.base_amount,
                    currency=c.currency,
                    overtime_multiplier=c.overtime_multiplier,
                    present_days=sum(1 for r in own if r.arrival is not None),
                    recorded_days=len(own),
                    worked=worked,
                    amount=self.compute_pay(subject, own, reference_now=now),
                )
            )

        rows.sort(key=lambda r: r.name.lower())
        return rows
