from __future__ import annotations

from typing import Sequence

from ..core.exceptions import RecognitionUnavailable
from ..subjects.model import Subject
from .base import NO_MATCH, NOT_LIVE, LivenessResult, MatchResult, RecognitionGateway


class DisabledRecognitionGateway(RecognitionGateway):
    """Fail-closed provider used when no recognition credential is configured."""

    @property
    def available(self) -> bool:
        return False

    def identify(self, frame: bytes, roster: Sequence[Subject]) -> MatchResult:
        return NO_MATCH

    def verify_liveness(self, frames: Sequence[bytes]) -> LivenessResult:
        return NOT_LIVE

    def generate_signature(self, images: Sequence[bytes]) -> str:
        raise RecognitionUnavailable("Recognition service is not configured")
