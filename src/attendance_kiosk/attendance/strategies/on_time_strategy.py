from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import ArrivalStrategy, StatusDecision


class OnTimeStrategy(ArrivalStrategy):
    """Arrival before the late threshold."""

    def decide_arrival(self, *, now: datetime) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_TIME, message="Campus entry authorized.")
