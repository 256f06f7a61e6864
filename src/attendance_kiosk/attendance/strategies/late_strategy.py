from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import ArrivalStrategy, StatusDecision


class LateStrategy(ArrivalStrategy):
    """Late arrival."""

    def decide_arrival(self, *, now: datetime) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE, message="Late entry logged for session.")
