from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_amount, require_choice, require_non_empty
from ..core.constants import DEFAULT_CURRENCY, DEFAULT_OVERTIME_MULTIPLIER
from ..core.enums import PayBasis, SubjectStatus
from ..core.exceptions import UnknownSubject, ValidationError
from ..recognition.base import RecognitionGateway
from ..recognition.frames import decode_frame, encode_frame
from ..shifts.repository import ShiftRepository
from .model import BankDetails, CompensationConfig, Subject
from .repository import SubjectRepository

logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"^EMP-(\d+)$")
_FIRST_ID_NUMBER = 1001


@dataclass(frozen=True)
class NewSubject:
    """Admin form input for enrollment (raw strings are fine, they get validated)."""

    name: str
    department: str
    role: str
    pay_basis: str = PayBasis.MONTHLY.value
    base_amount: str = "0"
    currency: str = DEFAULT_CURRENCY
    overtime_multiplier: str = DEFAULT_OVERTIME_MULTIPLIER
    shift_id: Optional[str] = None
    joining_date: Optional[str] = None
    email: str = ""
    phone: str = ""
    dob: Optional[str] = None
    address: str = ""
    bank_account: str = ""
    ifsc: str = ""
    bank_name: str = ""


class SubjectService:
    """Use case: manage the roster (enroll, update, activate/deactivate)."""

    def __init__(
        self,
        subjects: SubjectRepository,
        shifts: ShiftRepository,
        gateway: RecognitionGateway,
    ):
        self._subjects = subjects
        self._shifts = shifts
        self._gateway = gateway

    def list_subjects(self) -> list[Subject]:
        return sorted(self._subjects.list_all(), key=lambda s: s.name.lower())

    def get(self, subject_id: str) -> Subject:
        subject = self._subjects.get_by_id(subject_id)
        if not subject:
            raise UnknownSubject(f"Unknown subject: {subject_id}")
        return subject

    def next_subject_id(self) -> str:
        numbers = []
        for s in self._subjects.list_all():
            m = _ID_PATTERN.match(s.subject_id)
            if m:
                numbers.append(int(m.group(1)))
        return f"EMP-{max(numbers) + 1 if numbers else _FIRST_ID_NUMBER:04d}"

    def _check_shift(self, shift_id: Optional[str]) -> Optional[str]:
        shift_id = (shift_id or "").strip() or None
        if shift_id and not self._shifts.get_by_id(shift_id):
            raise ValidationError(f"Unknown shift: {shift_id}")
        return shift_id

    @staticmethod
    def _optional_date(value: Optional[str], field_name: str) -> Optional[date]:
        value = (value or "").strip()
        if not value:
            return None
        try:
            return parse_iso_date(value)
        except ValidationError:
            raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")

    @staticmethod
    def _compensation(data: NewSubject) -> CompensationConfig:
        return CompensationConfig(
            pay_basis=require_choice(data.pay_basis, PayBasis, "Pay basis"),
            base_amount=require_amount(data.base_amount, "Base amount"),
            currency=(data.currency or DEFAULT_CURRENCY).strip().upper(),
            overtime_multiplier=require_amount(data.overtime_multiplier, "Overtime multiplier"),
        )

    def enroll(self, data: NewSubject, images: Sequence[str], *, today: Optional[date] = None) -> Subject:
        """Create a roster entry from form data and enrollment photos (data URLs)."""

        name = require_non_empty(data.name, "Name")
        department = require_non_empty(data.department, "Department")
        role = require_non_empty(data.role, "Role")
        compensation = self._compensation(data)
        shift_id = self._check_shift(data.shift_id)

        if not images:
            raise ValidationError("At least one enrollment photo is required")
        frames = [decode_frame(i) for i in images]
        signature = self._gateway.generate_signature(frames)

        subject = Subject(
            subject_id=self.next_subject_id(),
            name=name,
            department=department,
            role=role,
            compensation=compensation,
            shift_id=shift_id,
            status=SubjectStatus.ACTIVE,
            joining_date=self._optional_date(data.joining_date, "Joining date") or today or date.today(),
            visual_signature=signature,
            thumbnail="data:image/jpeg;base64," + encode_frame(frames[0]),
            email=(data.email or "").strip(),
            phone=(data.phone or "").strip(),
            dob=self._optional_date(data.dob, "Date of birth"),
            address=(data.address or "").strip(),
            bank=BankDetails(
                account_number=(data.bank_account or "").strip(),
                ifsc=(data.ifsc or "").strip().upper(),
                bank_name=(data.bank_name or "").strip(),
            ),
        )
        self._subjects.save(subject)
        logger.info("enrolled subject=%s name=%s", subject.subject_id, subject.name)
        return subject

    def update(self, subject_id: str, data: NewSubject) -> Subject:
        """Replace profile and compensation fields; biometric data is kept."""

        current = self.get(subject_id)
        updated = replace(
            current,
            name=require_non_empty(data.name, "Name"),
            department=require_non_empty(data.department, "Department"),
            role=require_non_empty(data.role, "Role"),
            compensation=self._compensation(data),
            shift_id=self._check_shift(data.shift_id),
            joining_date=self._optional_date(data.joining_date, "Joining date") or current.joining_date,
            email=(data.email or "").strip(),
            phone=(data.phone or "").strip(),
            dob=self._optional_date(data.dob, "Date of birth"),
            address=(data.address or "").strip(),
            bank=BankDetails(
                account_number=(data.bank_account or "").strip(),
                ifsc=(data.ifsc or "").strip().upper(),
                bank_name=(data.bank_name or "").strip(),
            ),
        )
        self._subjects.save(updated)
        return updated

    def set_status(self, subject_id: str, status) -> Subject:
        status = require_choice(status, SubjectStatus, "Status")
        current = self.get(subject_id)
        if current.status == status:
            return current
        updated = replace(current, status=status)
        self._subjects.save(updated)
        logger.info("subject=%s status=%s", subject_id, status.value)
        return updated
