from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import LeaveType, RequestStatus


@dataclass(frozen=True)
class LeaveRequest:
    request_id: str
    subject_id: str
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str
    status: RequestStatus = RequestStatus.PENDING
