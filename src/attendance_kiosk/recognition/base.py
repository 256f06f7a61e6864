"""Recognition gateway interface.

Identification and liveness are opaque external decisions; the kiosk only
relies on the result shapes below.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence

from ..subjects.model import Subject


@dataclass(frozen=True)
class MatchResult:
    matched: bool
    confidence: float
    subject_id: Optional[str] = None
    message: str = ""


@dataclass(frozen=True)
class LivenessResult:
    is_live: bool
    confidence: float

    def accepted(self, min_confidence: float) -> bool:
        return self.is_live and self.confidence > min_confidence


NO_MATCH = MatchResult(matched=False, confidence=0.0)
NOT_LIVE = LivenessResult(is_live=False, confidence=0.0)


class RecognitionGateway(ABC):
    """Abstract base class for recognition providers."""

    @property
    @abstractmethod
    def available(self) -> bool:
        """False when the provider is disabled (e.g. missing credential)."""

    @abstractmethod
    def identify(self, frame: bytes, roster: Sequence[Subject]) -> MatchResult:
        pass

    @abstractmethod
    def verify_liveness(self, frames: Sequence[bytes]) -> LivenessResult:
        pass

    @abstractmethod
    def generate_signature(self, images: Sequence[bytes]) -> str:
        """Describe a face from enrollment photos; raises RecognitionUnavailable on failure."""
