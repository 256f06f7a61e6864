from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Optional

from ..core.constants import DEFAULT_SCAN_COOLDOWN_SECONDS


@dataclass(frozen=True)
class ScanCooldown:
    """Debounce window after a successful identification at one terminal.

    Immutable: ``mark`` returns a new value, callers store it.
    """

    last_success: Optional[datetime] = None
    window: timedelta = timedelta(seconds=DEFAULT_SCAN_COOLDOWN_SECONDS)

    def is_cooling(self, now: datetime) -> bool:
        if self.last_success is None:
            return False
        return now - self.last_success < self.window

    def remaining(self, now: datetime) -> timedelta:
        if not self.is_cooling(now):
            return timedelta(0)
        return self.window - (now - self.last_success)

    def mark(self, now: datetime) -> "ScanCooldown":
        return replace(self, last_success=now)


class CooldownRegistry:
    """Last cooldown value per terminal (device id)."""

    def __init__(self, window: timedelta):
        self._window = window
        self._lock = threading.Lock()
        self._by_device: dict[str, ScanCooldown] = {}

    def get(self, device_id: str) -> ScanCooldown:
        with self._lock:
            return self._by_device.get(device_id) or ScanCooldown(window=self._window)

    def put(self, device_id: str, cooldown: ScanCooldown) -> None:
        with self._lock:
            self._by_device[device_id] = cooldown
