from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..attendance.service import AttendanceService
from ..core.constants import DEFAULT_LIVENESS_MIN_CONFIDENCE
from ..core.enums import ArrivalKind
from ..recognition.base import RecognitionGateway
from ..subjects.model import Subject
from ..subjects.repository import SubjectRepository
from .cooldown import ScanCooldown
from .liveness import LivenessBurst

logger = logging.getLogger(__name__)


class GateOutcomeKind(str, Enum):
    COOLDOWN = "COOLDOWN"
    UNAVAILABLE = "UNAVAILABLE"
    NO_MATCH = "NO_MATCH"
    CANCELLED = "CANCELLED"
    LIVENESS_REJECTED = "LIVENESS_REJECTED"
    ARRIVED = "ARRIVED"
    DEPARTED = "DEPARTED"
    ALREADY_CLOSED = "ALREADY_CLOSED"


_ARRIVAL_OUTCOMES = {
    ArrivalKind.ARRIVED: GateOutcomeKind.ARRIVED,
    ArrivalKind.DEPARTED: GateOutcomeKind.DEPARTED,
    ArrivalKind.ALREADY_CLOSED: GateOutcomeKind.ALREADY_CLOSED,
}


@dataclass(frozen=True)
class GateOutcome:
    kind: GateOutcomeKind
    cooldown: ScanCooldown
    title: str = ""
    message: str = ""
    subject: Optional[Subject] = None
    record: Optional[AttendanceRecord] = None
    confidence: float = 0.0

    @property
    def success(self) -> bool:
        return self.record is not None


class GateService:
    """One scan at the gate: identify, verify liveness, then record attendance.

    No-match, liveness rejection and an unavailable recognizer never touch
    attendance. The cooldown is an input and an output so the caller owns it.
    """

    def __init__(
        self,
        gateway: RecognitionGateway,
        subjects: SubjectRepository,
        attendance: AttendanceService,
        *,
        min_liveness_confidence: float = DEFAULT_LIVENESS_MIN_CONFIDENCE,
    ):
        self._gateway = gateway
        self._subjects = subjects
        self._attendance = attendance
        self._min_liveness = float(min_liveness_confidence)

    @property
    def available(self) -> bool:
        return self._gateway.available

    def roster(self) -> list[Subject]:
        return [s for s in self._subjects.list_all() if s.is_active]

    def scan(
        self,
        frame: bytes,
        burst: LivenessBurst,
        *,
        now: datetime,
        cooldown: ScanCooldown,
    ) -> GateOutcome:
        if cooldown.is_cooling(now):
            return GateOutcome(kind=GateOutcomeKind.COOLDOWN, cooldown=cooldown, message="Please wait before scanning again.")

        if not self._gateway.available:
            return GateOutcome(
                kind=GateOutcomeKind.UNAVAILABLE,
                cooldown=cooldown,
                title="Offline",
                message="Recognition service unavailable.",
            )

        roster = self.roster()
        if not roster:
            return GateOutcome(
                kind=GateOutcomeKind.NO_MATCH,
                cooldown=cooldown,
                message="No members registered. Enroll members from the admin console.",
            )

        match = self._gateway.identify(frame, roster)
        if not match.matched or not match.subject_id:
            return GateOutcome(kind=GateOutcomeKind.NO_MATCH, cooldown=cooldown, message="Face not recognized. Try again.", confidence=match.confidence)

        subject = next((s for s in roster if s.subject_id == match.subject_id), None)
        if subject is None:
            logger.warning("recognizer matched id outside the roster: %s", match.subject_id)
            return GateOutcome(kind=GateOutcomeKind.NO_MATCH, cooldown=cooldown, message="Face not recognized. Try again.", confidence=match.confidence)

        samples = burst.frames()
        if samples is None:
            logger.info("liveness burst discarded for candidate %s", match.subject_id)
            return GateOutcome(kind=GateOutcomeKind.CANCELLED, cooldown=cooldown, message="Verification interrupted. Try again.")

        liveness = self._gateway.verify_liveness(samples)
        if not liveness.accepted(self._min_liveness):
            logger.warning(
                "liveness rejected candidate=%s live=%s confidence=%.2f",
                match.subject_id,
                liveness.is_live,
                liveness.confidence,
            )
            return GateOutcome(
                kind=GateOutcomeKind.LIVENESS_REJECTED,
                cooldown=cooldown,
                title="Identity Blocked",
                message="Liveness check failed. Please ensure clear visibility.",
                confidence=liveness.confidence,
            )

        result = self._attendance.resolve_arrival(subject.subject_id, now=now)

        if result.kind == ArrivalKind.ARRIVED:
            title = f"Welcome, {subject.first_name}"
        elif result.kind == ArrivalKind.DEPARTED:
            title = f"Safe Travels, {subject.first_name}"
        else:
            title = "Registry Active"

        return GateOutcome(
            kind=_ARRIVAL_OUTCOMES[result.kind],
            cooldown=cooldown.mark(now),
            title=title,
            message=result.message,
            subject=subject,
            record=result.record,
            confidence=match.confidence,
        )
