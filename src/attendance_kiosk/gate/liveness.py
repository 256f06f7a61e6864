from __future__ import annotations

from typing import Optional

from ..core.constants import DEFAULT_LIVENESS_SAMPLES


class LivenessBurst:
    """Fixed-size burst of frames sampled for the liveness check.

    A burst only feeds a decision once complete; a cancelled burst drops its
    samples and stays unusable.
    """

    def __init__(self, samples: int = DEFAULT_LIVENESS_SAMPLES):
        if samples <= 0:
            raise ValueError("samples must be positive")
        self._samples = samples
        self._frames: list[bytes] = []
        self._cancelled = False

    @property
    def samples(self) -> int:
        return self._samples

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def complete(self) -> bool:
        return not self._cancelled and len(self._frames) == self._samples

    @property
    def progress(self) -> int:
        """Percent of samples collected."""
        return int(len(self._frames) * 100 / self._samples)

    def add(self, frame: bytes) -> None:
        if self._cancelled or len(self._frames) >= self._samples:
            return
        self._frames.append(frame)

    def cancel(self) -> None:
        self._cancelled = True
        self._frames.clear()

    def frames(self) -> Optional[list[bytes]]:
        """The samples if the burst is complete, else None."""
        if not self.complete:
            return None
        return list(self._frames)
