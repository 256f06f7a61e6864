from __future__ import annotations

import uuid
from typing import Callable, Optional

from ..common.datetime_utils import parse_hhmm
from ..common.validators import require_choice, require_non_empty, require_non_negative_int
from ..core.enums import ShiftType
from .model import Shift
from .repository import ShiftRepository


class ShiftService:
    def __init__(self, shifts: ShiftRepository, *, id_factory: Optional[Callable[[], str]] = None):
        self._shifts = shifts
        self._new_id = id_factory or (lambda: f"SCHED-{uuid.uuid4().hex[:8].upper()}")

    def list_shifts(self) -> list[Shift]:
        return list(self._shifts.list_all())

    def create(
        self,
        *,
        name: str,
        shift_type: str,
        start_time: str,
        end_time: str,
        grace_minutes=0,
        break_minutes=0,
        min_overtime_hours=0,
    ) -> Shift:
        # Night shifts may end before they start (next day), so no ordering check.
        shift = Shift(
            shift_id=self._new_id(),
            name=require_non_empty(name, "Shift name"),
            shift_type=require_choice(shift_type, ShiftType, "Shift type"),
            start_time=parse_hhmm(start_time),
            end_time=parse_hhmm(end_time),
            grace_minutes=require_non_negative_int(grace_minutes, "Grace minutes"),
            break_minutes=require_non_negative_int(break_minutes, "Break minutes"),
            min_overtime_hours=require_non_negative_int(min_overtime_hours, "Minimum overtime hours"),
        )
        self._shifts.create(shift)
        return shift
