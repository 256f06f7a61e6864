from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import HolidayType
from ..database.connection import DatabaseConnection
from ..database.sqlite_base import db_cursor, fetchall
from .model import Holiday
from .repository import HolidayRepository


class SQLiteHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT holiday_id, holiday_date, name, holiday_type
                FROM holidays
                ORDER BY holiday_date
                """
            )
            return [
                Holiday(
                    holiday_id=r["holiday_id"],
                    holiday_date=date.fromisoformat(r["holiday_date"]),
                    name=r["name"],
                    holiday_type=HolidayType(r["holiday_type"]),
                )
                for r in fetchall(cur)
            ]

    def add(self, holiday: Holiday) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO holidays(holiday_id, holiday_date, name, holiday_type) VALUES(?,?,?,?)",
                (holiday.holiday_id, holiday.holiday_date.isoformat(), holiday.name, holiday.holiday_type.value),
            )
