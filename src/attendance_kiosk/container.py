from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta

from .admin.service import AdminAuthService
from .attendance.factory import ArrivalStrategyFactory
from .attendance.service import AttendanceService
from .attendance.sqlite_attendance_repository import SQLiteAttendanceRepository
from .core.constants import (
    DEFAULT_DEVICE_ID,
    DEFAULT_LATE_HOUR,
    DEFAULT_LIVENESS_MIN_CONFIDENCE,
    DEFAULT_SCAN_COOLDOWN_SECONDS,
)
from .database.connection import DBConfig, DatabaseConnection
from .gate.cooldown import CooldownRegistry
from .gate.service import GateService
from .holidays.service import HolidayService
from .holidays.sqlite_holiday_repository import SQLiteHolidayRepository
from .leaves.service import LeaveService
from .leaves.sqlite_leave_repository import SQLiteLeaveRepository
from .payroll.service import PayrollService
from .recognition.base import RecognitionGateway
from .recognition.disabled import DisabledRecognitionGateway
from .recognition.gemini import GeminiRecognitionGateway
from .reports.service import AttendanceReportService
from .shifts.service import ShiftService
from .shifts.sqlite_shift_repository import SQLiteShiftRepository
from .subjects.service import SubjectService
from .subjects.sqlite_subject_repository import SQLiteSubjectRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    settings: dict

    subjects_repo: SQLiteSubjectRepository
    shifts_repo: SQLiteShiftRepository
    holidays_repo: SQLiteHolidayRepository
    attendance_repo: SQLiteAttendanceRepository
    leaves_repo: SQLiteLeaveRepository

    gateway: RecognitionGateway
    cooldowns: CooldownRegistry

    admin_auth_service: AdminAuthService
    subject_service: SubjectService
    shift_service: ShiftService
    holiday_service: HolidayService
    leave_service: LeaveService
    attendance_service: AttendanceService
    gate_service: GateService
    payroll_service: PayrollService
    report_service: AttendanceReportService


def build_gateway(settings: dict) -> RecognitionGateway:
    api_key = settings.get("RECOGNITION_API_KEY")
    if not api_key:
        logger.warning("no recognition API key configured, gate recognition is disabled")
        return DisabledRecognitionGateway()
    return GeminiRecognitionGateway(
        str(api_key),
        model=str(settings.get("RECOGNITION_MODEL", "gemini-2.5-flash")),
        enroll_model=str(settings.get("RECOGNITION_ENROLL_MODEL", "gemini-2.5-pro")),
        timeout=float(settings.get("RECOGNITION_TIMEOUT", 30)),
    )


def build_container(*, settings: dict, gateway: RecognitionGateway | None = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig(path=str(settings["DB_PATH"])))

    subjects_repo = SQLiteSubjectRepository(conn)
    shifts_repo = SQLiteShiftRepository(conn)
    holidays_repo = SQLiteHolidayRepository(conn)
    attendance_repo = SQLiteAttendanceRepository(conn)
    leaves_repo = SQLiteLeaveRepository(conn)

    gateway = gateway or build_gateway(settings)
    cooldowns = CooldownRegistry(timedelta(seconds=int(settings.get("SCAN_COOLDOWN_SECONDS", DEFAULT_SCAN_COOLDOWN_SECONDS))))

    attendance_service = AttendanceService(
        attendance_repo,
        subjects_repo,
        strategy_factory=ArrivalStrategyFactory(late_hour=int(settings.get("LATE_HOUR", DEFAULT_LATE_HOUR))),
        device_id=str(settings.get("DEVICE_ID", DEFAULT_DEVICE_ID)),
    )
    gate_service = GateService(
        gateway,
        subjects_repo,
        attendance_service,
        min_liveness_confidence=float(settings.get("LIVENESS_MIN_CONFIDENCE", DEFAULT_LIVENESS_MIN_CONFIDENCE)),
    )

    return Container(
        conn=conn,
        settings=settings,
        subjects_repo=subjects_repo,
        shifts_repo=shifts_repo,
        holidays_repo=holidays_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        gateway=gateway,
        cooldowns=cooldowns,
        admin_auth_service=AdminAuthService(settings.get("ADMIN_PASSWORD")),
        subject_service=SubjectService(subjects_repo, shifts_repo, gateway),
        shift_service=ShiftService(shifts_repo),
        holiday_service=HolidayService(holidays_repo),
        leave_service=LeaveService(leaves_repo, subjects_repo),
        attendance_service=attendance_service,
        gate_service=gate_service,
        payroll_service=PayrollService(attendance_repo, subjects_repo),
        report_service=AttendanceReportService(attendance_repo, subjects_repo),
    )
