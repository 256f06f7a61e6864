from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_hhmm(value: str) -> time:
    try:
        return datetime.strptime((value or "").strip(), "%H:%M").time()
    except ValueError:
        raise ValidationError(f"Invalid time (HH:MM): {value!r}")


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def to_iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def from_iso(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromisoformat(value)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now()


def format_duration(value: timedelta) -> str:
    """Render a duration as HH:MM:SS (seconds truncated)."""
    total_seconds = max(int(value.total_seconds()), 0)
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
