from __future__ import annotations

from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from ...attendance.durations import compute_durations
from ...attendance.model import AttendanceRecord
from ...subjects.model import CompensationConfig
from .base import PayCalculator, present_records

CENT = Decimal("0.01")


class HourlyPayCalculator(PayCalculator):
    """Hourly rate x worked hours (breaks excluded), rounded to cents.

    A day still open is measured up to ``reference_now``.
    """

    def amount(self, compensation: CompensationConfig, records: Sequence[AttendanceRecord], *, reference_now: datetime) -> Decimal:
        worked = timedelta(0)
        for record in present_records(records):
            worked += compute_durations(record, reference_now).work

        hours = Decimal(int(worked.total_seconds())) / Decimal(3600)
        return (compensation.base_amount * hours).quantize(CENT, rounding=ROUND_HALF_UP)
