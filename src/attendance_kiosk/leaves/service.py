from __future__ import annotations

import uuid
from typing import Callable, Optional

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_choice, require_non_empty
from ..core.enums import LeaveType
from ..core.exceptions import UnknownSubject, ValidationError
from ..subjects.repository import SubjectRepository
from .model import LeaveRequest
from .repository import LeaveRepository


class LeaveService:
    """Leave requests are recorded for the admin; attendance never reads them."""

    def __init__(
        self,
        leaves: LeaveRepository,
        subjects: SubjectRepository,
        *,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self._leaves = leaves
        self._subjects = subjects
        self._new_id = id_factory or (lambda: f"LV-{uuid.uuid4().hex[:8].upper()}")

    def submit(
        self,
        *,
        subject_id: str,
        leave_type: str,
        start_date: str,
        end_date: str,
        reason: str,
    ) -> LeaveRequest:
        if not self._subjects.get_by_id(subject_id):
            raise UnknownSubject(f"Unknown subject: {subject_id}")

        start = parse_iso_date(start_date)
        end = parse_iso_date(end_date)
        if end < start:
            raise ValidationError("End date must not be before start date")

        request = LeaveRequest(
            request_id=self._new_id(),
            subject_id=subject_id,
            leave_type=require_choice(leave_type, LeaveType, "Leave type"),
            start_date=start,
            end_date=end,
            reason=require_non_empty(reason, "Reason"),
        )
        self._leaves.add(request)
        return request

    def list_requests(self, *, subject_id: Optional[str] = None) -> list[LeaveRequest]:
        return list(self._leaves.list_requests(subject_id=subject_id))
