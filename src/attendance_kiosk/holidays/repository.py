from __future__ import annotations

from typing import Protocol, Sequence

from .model import Holiday


class HolidayRepository(Protocol):
    """Append-only calendar of holidays."""

    def list_all(self) -> Sequence[Holiday]:
        raise NotImplementedError

    def add(self, holiday: Holiday) -> None:
        raise NotImplementedError
