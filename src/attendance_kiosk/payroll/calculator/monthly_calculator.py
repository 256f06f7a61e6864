from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Sequence

from ...attendance.model import AttendanceRecord
from ...subjects.model import CompensationConfig
from .base import PayCalculator


class MonthlyPayCalculator(PayCalculator):
    """Flat rule: the base amount, whatever the attendance."""

    def amount(self, compensation: CompensationConfig, records: Sequence[AttendanceRecord], *, reference_now: datetime) -> Decimal:
        return compensation.base_amount
