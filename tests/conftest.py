from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

import pytest

from attendance_kiosk.attendance.model import AttendanceRecord
from attendance_kiosk.core.enums import PayBasis, SubjectStatus
from attendance_kiosk.recognition.base import LivenessResult, MatchResult, RecognitionGateway
from attendance_kiosk.subjects.model import CompensationConfig, Subject


class InMemorySubjects:
    def __init__(self, subjects: Sequence[Subject] = ()):
        self._by_id: dict[str, Subject] = {s.subject_id: s for s in subjects}

    def get_by_id(self, subject_id: str) -> Optional[Subject]:
        return self._by_id.get(subject_id)

    def list_all(self):
        return list(self._by_id.values())

    def save(self, subject: Subject) -> None:
        self._by_id[subject.subject_id] = subject


class InMemoryAttendance:
    def __init__(self):
        self._by_key: dict[tuple[str, date], AttendanceRecord] = {}
        self.saves = 0

    def find_attendance(self, subject_id: str, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_key.get((subject_id, work_date))

    def save_attendance(self, record: AttendanceRecord) -> None:
        self.saves += 1
        self._by_key[(record.subject_id, record.work_date)] = record

    def list_attendance(self, *, subject_id=None, start=None, end=None):
        items = [
            r
            for r in self._by_key.values()
            if (subject_id is None or r.subject_id == subject_id)
            and (start is None or r.work_date >= start)
            and (end is None or r.work_date <= end)
        ]
        items.sort(key=lambda r: (r.work_date, r.subject_name))
        return items


class FakeGateway(RecognitionGateway):
    """Deterministic recognizer: returns whatever the test configured."""

    def __init__(
        self,
        *,
        match: MatchResult = MatchResult(matched=False, confidence=0.0),
        liveness: LivenessResult = LivenessResult(is_live=False, confidence=0.0),
        available: bool = True,
        signature: str = "SIG",
    ):
        self.match = match
        self.liveness = liveness
        self._available = available
        self.signature = signature
        self.identify_calls = 0
        self.liveness_calls: list[list[bytes]] = []
        self.signature_calls: list[list[bytes]] = []

    @property
    def available(self) -> bool:
        return self._available

    def identify(self, frame, roster):
        self.identify_calls += 1
        return self.match

    def verify_liveness(self, frames):
        self.liveness_calls.append(list(frames))
        return self.liveness

    def generate_signature(self, images):
        self.signature_calls.append(list(images))
        return self.signature


def make_subject(
    subject_id: str = "EMP-1001",
    name: str = "Asha Rao",
    *,
    pay_basis: PayBasis = PayBasis.MONTHLY,
    base_amount: str = "50000",
    status: SubjectStatus = SubjectStatus.ACTIVE,
) -> Subject:
    return Subject(
        subject_id=subject_id,
        name=name,
        department="Physics",
        role="Lecturer",
        compensation=CompensationConfig(pay_basis=pay_basis, base_amount=Decimal(base_amount)),
        status=status,
        visual_signature="broad jaw, narrow nose bridge",
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 1, 6, 8, 45, 0)


@pytest.fixture
def subject_factory():
    return make_subject


@pytest.fixture
def subject() -> Subject:
    return make_subject()


@pytest.fixture
def subjects_repo(subject) -> InMemorySubjects:
    return InMemorySubjects([subject])


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def gateway_factory():
    return FakeGateway


@pytest.fixture
def png_data_url() -> str:
    import base64
    import io

    from PIL import Image

    buf = io.BytesIO()
    Image.new("RGBA", (8, 8), (200, 120, 40, 255)).save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


@pytest.fixture
def empty_subjects() -> InMemorySubjects:
    return InMemorySubjects()
