from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Sequence

from ...attendance.model import AttendanceRecord
from ...subjects.model import CompensationConfig


class PayCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll).

    ``records`` are already filtered to one subject.
    """

    @abstractmethod
    def amount(
        self,
        compensation: CompensationConfig,
        records: Sequence[AttendanceRecord],
        *,
        reference_now: datetime,
    ) -> Decimal:
        raise NotImplementedError


def present_records(records: Sequence[AttendanceRecord]) -> list[AttendanceRecord]:
    return [r for r in records if r.arrival is not None]
