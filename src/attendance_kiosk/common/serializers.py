"""JSON shapes of domain objects for the HTTP layer."""

from __future__ import annotations

from typing import Optional

from ..attendance.model import AttendanceRecord
from .datetime_utils import format_hhmm, to_iso
from ..holidays.model import Holiday
from ..leaves.model import LeaveRequest
from ..shifts.model import Shift
from ..subjects.model import Subject


def record_to_dict(record: Optional[AttendanceRecord]) -> Optional[dict]:
    if record is None:
        return None
    return {
        "id": record.record_id,
        "subject_id": record.subject_id,
        "subject_name": record.subject_name,
        "date": record.work_date.isoformat(),
        "arrival": to_iso(record.arrival),
        "departure": to_iso(record.departure),
        "status": record.status.value,
        "breaks": [{"start": to_iso(b.start), "end": to_iso(b.end)} for b in record.breaks],
        "overtime_minutes": record.overtime_minutes,
        "early_exit": record.early_exit,
        "device_id": record.device_id,
        "is_synced": record.is_synced,
    }


def subject_to_dict(subject: Subject, *, detail: bool = False) -> dict:
    data = {
        "id": subject.subject_id,
        "name": subject.name,
        "department": subject.department,
        "role": subject.role,
        "status": subject.status.value,
        "shift_id": subject.shift_id,
        "joining_date": subject.joining_date.isoformat() if subject.joining_date else None,
    }
    if detail:
        c = subject.compensation
        data.update(
            {
                "compensation": {
                    "pay_basis": c.pay_basis.value,
                    "base_amount": str(c.base_amount),
                    "currency": c.currency,
                    "overtime_multiplier": str(c.overtime_multiplier),
                },
                "email": subject.email,
                "phone": subject.phone,
                "dob": subject.dob.isoformat() if subject.dob else None,
                "address": subject.address,
                "bank": {
                    "account_number": subject.bank.account_number,
                    "ifsc": subject.bank.ifsc,
                    "bank_name": subject.bank.bank_name,
                },
                "thumbnail": subject.thumbnail,
                "has_signature": bool(subject.visual_signature),
            }
        )
    return data


def shift_to_dict(shift: Shift) -> dict:
    return {
        "id": shift.shift_id,
        "name": shift.name,
        "type": shift.shift_type.value,
        "start_time": format_hhmm(shift.start_time),
        "end_time": format_hhmm(shift.end_time),
        "grace_minutes": shift.grace_minutes,
        "break_minutes": shift.break_minutes,
        "min_overtime_hours": shift.min_overtime_hours,
    }


def holiday_to_dict(holiday: Holiday) -> dict:
    return {
        "id": holiday.holiday_id,
        "date": holiday.holiday_date.isoformat(),
        "name": holiday.name,
        "type": holiday.holiday_type.value,
    }


def leave_to_dict(request: LeaveRequest) -> dict:
    return {
        "id": request.request_id,
        "subject_id": request.subject_id,
        "type": request.leave_type.value,
        "start_date": request.start_date.isoformat(),
        "end_date": request.end_date.isoformat(),
        "reason": request.reason,
        "status": request.status.value,
    }
