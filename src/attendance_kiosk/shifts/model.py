from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from ..core.enums import ShiftType


@dataclass(frozen=True)
class Shift:
    """Domain entity: a work shift definition."""

    shift_id: str
    name: str
    shift_type: ShiftType
    start_time: time
    end_time: time
    grace_minutes: int = 0
    break_minutes: int = 0
    min_overtime_hours: int = 0
