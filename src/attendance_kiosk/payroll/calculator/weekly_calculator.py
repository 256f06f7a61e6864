from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Sequence

from ...attendance.model import AttendanceRecord
from ...subjects.model import CompensationConfig
from .base import PayCalculator, present_records


class WeeklyPayCalculator(PayCalculator):
    """Weekly rate x distinct ISO weeks with at least one present day."""

    def amount(self, compensation: CompensationConfig, records: Sequence[AttendanceRecord], *, reference_now: datetime) -> Decimal:
        weeks = {r.work_date.isocalendar()[:2] for r in present_records(records)}
        return compensation.base_amount * len(weeks)
