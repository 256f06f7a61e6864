from __future__ import annotations

import uuid
from typing import Callable, Optional

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_choice, require_non_empty
from ..core.enums import HolidayType
from .model import Holiday
from .repository import HolidayRepository


class HolidayService:
    """Holiday calendar. Entries are only ever appended."""

    def __init__(self, holidays: HolidayRepository, *, id_factory: Optional[Callable[[], str]] = None):
        self._holidays = holidays
        self._new_id = id_factory or (lambda: f"HOL-{uuid.uuid4().hex[:8].upper()}")

    def list_holidays(self) -> list[Holiday]:
        return sorted(self._holidays.list_all(), key=lambda h: h.holiday_date)

    def add(self, *, holiday_date: str, name: str, holiday_type: str = HolidayType.PUBLIC.value) -> Holiday:
        holiday = Holiday(
            holiday_id=self._new_id(),
            holiday_date=parse_iso_date(holiday_date),
            name=require_non_empty(name, "Holiday name"),
            holiday_type=require_choice(holiday_type, HolidayType, "Holiday type"),
        )
        self._holidays.add(holiday)
        return holiday
