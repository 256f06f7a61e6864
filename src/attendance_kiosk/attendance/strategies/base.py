from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    message: str = ""


class ArrivalStrategy(ABC):
    """Strategy Pattern: encapsulate how an arrival is classified."""

    @abstractmethod
    def decide_arrival(self, *, now: datetime) -> StatusDecision:
        raise NotImplementedError
