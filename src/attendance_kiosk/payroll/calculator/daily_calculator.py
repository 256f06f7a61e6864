from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Sequence

from ...attendance.model import AttendanceRecord
from ...subjects.model import CompensationConfig
from .base import PayCalculator, present_records


class DailyPayCalculator(PayCalculator):
    """Daily rate x days actually present (arrival recorded)."""

    def amount(self, compensation: CompensationConfig, records: Sequence[AttendanceRecord], *, reference_now: datetime) -> Decimal:
        return compensation.base_amount * len(present_records(records))
