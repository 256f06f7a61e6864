from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.constants import DEFAULT_LATE_HOUR
from .strategies.base import ArrivalStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class ArrivalStrategyFactory:
    """Factory Pattern: choose the arrival strategy from the local hour.

    Only the hour is compared, so 09:00:00 and 09:59 are both late.
    """

    late_hour: int = DEFAULT_LATE_HOUR

    def for_arrival(self, *, now: datetime) -> ArrivalStrategy:
        if now.hour >= self.late_hour:
            return LateStrategy()
        return OnTimeStrategy()
