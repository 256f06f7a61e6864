from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Status classification stored on an attendance record."""

    ON_TIME = "on-time"
    LATE = "late"
    ABSENT = "absent"
    LEAVE = "leave"


class SessionState(str, Enum):
    """Where a subject is in today's attendance lifecycle."""

    NOT_ARRIVED = "NOT_ARRIVED"
    PRESENT = "PRESENT"
    ON_BREAK = "ON_BREAK"
    DEPARTED = "DEPARTED"


class ArrivalKind(str, Enum):
    ARRIVED = "ARRIVED"
    DEPARTED = "DEPARTED"
    ALREADY_CLOSED = "ALREADY_CLOSED"


class SubjectStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class PayBasis(str, Enum):
    """Compensation scheme selected per subject."""

    MONTHLY = "MONTHLY"
    DAILY = "DAILY"
    HOURLY = "HOURLY"
    WEEKLY = "WEEKLY"


class ShiftType(str, Enum):
    FIXED = "FIXED"
    OPEN = "OPEN"
    ROTATIONAL = "ROTATIONAL"
    NIGHT = "NIGHT"


class HolidayType(str, Enum):
    PUBLIC = "PUBLIC"
    OPTIONAL = "OPTIONAL"


class LeaveType(str, Enum):
    SICK = "SICK"
    CASUAL = "CASUAL"
    PAID = "PAID"


class RequestStatus(str, Enum):
    """Approval state of a leave request."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
