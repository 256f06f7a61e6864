from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Optional

from flask import Flask, jsonify, request, send_file, session

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.serializers import holiday_to_dict, leave_to_dict, shift_to_dict, subject_to_dict
from ..container import Container
from ..core.exceptions import AuthenticationError
from ..reports.export import XLSX_MIMETYPE, report_to_xlsx
from ..subjects.service import NewSubject

logger = logging.getLogger(__name__)

_SUBJECT_FIELDS = (
    "name",
    "department",
    "role",
    "pay_basis",
    "base_amount",
    "currency",
    "overtime_multiplier",
    "shift_id",
    "joining_date",
    "email",
    "phone",
    "dob",
    "address",
    "bank_account",
    "ifsc",
    "bank_name",
)


def _new_subject(payload: dict) -> NewSubject:
    values = {k: payload[k] for k in _SUBJECT_FIELDS if payload.get(k) is not None}
    values.setdefault("name", "")
    values.setdefault("department", "")
    values.setdefault("role", "")
    return NewSubject(**{k: str(v) for k, v in values.items()})


def _optional_date_arg(name: str) -> Optional[date]:
    value = (request.args.get(name) or "").strip()
    return parse_iso_date(value) if value else None


def register(app: Flask, container: Container) -> None:
    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not session.get("is_admin"):
                raise AuthenticationError("Admin login required")
            return view(*args, **kwargs)

        return wrapper

    @app.post("/admin/login")
    def admin_login():
        payload = request.get_json(silent=True) or {}
        container.admin_auth_service.authenticate(str(payload.get("password") or ""))
        session.clear()
        session["is_admin"] = True
        logger.info("admin login from %s", request.remote_addr)
        return jsonify({"success": True})

    @app.post("/admin/logout")
    def admin_logout():
        session.clear()
        return jsonify({"success": True})

    @app.get("/api/admin/overview")
    @admin_required
    def admin_overview():
        overview = container.report_service.daily_overview(now=now_local())
        return jsonify({"success": True, **overview.as_dict()})

    @app.get("/api/admin/subjects")
    @admin_required
    def admin_subjects():
        subjects = container.subject_service.list_subjects()
        return jsonify({"success": True, "items": [subject_to_dict(s, detail=True) for s in subjects]})

    @app.post("/api/admin/subjects")
    @admin_required
    def admin_enroll_subject():
        payload = request.get_json(silent=True) or {}
        images = payload.get("images") or []
        if not isinstance(images, list):
            images = [images]
        subject = container.subject_service.enroll(_new_subject(payload), images, today=now_local().date())
        return jsonify({"success": True, "item": subject_to_dict(subject, detail=True)}), 201

    @app.get("/api/admin/subjects/<subject_id>")
    @admin_required
    def admin_subject_detail(subject_id: str):
        subject = container.subject_service.get(subject_id)
        return jsonify({"success": True, "item": subject_to_dict(subject, detail=True)})

    @app.put("/api/admin/subjects/<subject_id>")
    @admin_required
    def admin_update_subject(subject_id: str):
        payload = request.get_json(silent=True) or {}
        subject = container.subject_service.update(subject_id, _new_subject(payload))
        return jsonify({"success": True, "item": subject_to_dict(subject, detail=True)})

    @app.post("/api/admin/subjects/<subject_id>/status")
    @admin_required
    def admin_subject_status(subject_id: str):
        payload = request.get_json(silent=True) or {}
        subject = container.subject_service.set_status(subject_id, payload.get("status", ""))
        return jsonify({"success": True, "item": subject_to_dict(subject)})

    @app.get("/api/admin/shifts")
    @admin_required
    def admin_shifts():
        return jsonify({"success": True, "items": [shift_to_dict(s) for s in container.shift_service.list_shifts()]})

    @app.post("/api/admin/shifts")
    @admin_required
    def admin_create_shift():
        payload = request.get_json(silent=True) or {}
        shift = container.shift_service.create(
            name=payload.get("name", ""),
            shift_type=payload.get("type", ""),
            start_time=payload.get("start_time", ""),
            end_time=payload.get("end_time", ""),
            grace_minutes=payload.get("grace_minutes", 0),
            break_minutes=payload.get("break_minutes", 0),
            min_overtime_hours=payload.get("min_overtime_hours", 0),
        )
        return jsonify({"success": True, "item": shift_to_dict(shift)}), 201

    @app.get("/api/admin/holidays")
    @admin_required
    def admin_holidays():
        items = [holiday_to_dict(h) for h in container.holiday_service.list_holidays()]
        return jsonify({"success": True, "items": items})

    @app.post("/api/admin/holidays")
    @admin_required
    def admin_add_holiday():
        payload = request.get_json(silent=True) or {}
        holiday = container.holiday_service.add(
            holiday_date=payload.get("date", ""),
            name=payload.get("name", ""),
            holiday_type=payload.get("type", "PUBLIC"),
        )
        return jsonify({"success": True, "item": holiday_to_dict(holiday)}), 201

    @app.get("/api/admin/leaves")
    @admin_required
    def admin_leaves():
        subject_id = request.args.get("subject_id") or None
        items = [leave_to_dict(r) for r in container.leave_service.list_requests(subject_id=subject_id)]
        return jsonify({"success": True, "items": items})

    @app.get("/api/admin/payroll")
    @admin_required
    def admin_payroll():
        rows = container.payroll_service.payroll_summary(
            start=_optional_date_arg("start"),
            end=_optional_date_arg("end"),
            now=now_local(),
        )
        return jsonify({"success": True, "items": [r.as_dict() for r in rows]})

    @app.get("/api/admin/reports")
    @admin_required
    def admin_reports():
        report = container.report_service.build_attendance_report(
            start=_optional_date_arg("start"),
            end=_optional_date_arg("end"),
            subject_id=request.args.get("subject_id") or None,
            now=now_local(),
        )
        return jsonify({"success": True, "rows": report.rows, "summary": report.summary})

    @app.get("/api/admin/reports/export")
    @admin_required
    def admin_export_report():
        now = now_local()
        report = container.report_service.build_attendance_report(
            start=_optional_date_arg("start"),
            end=_optional_date_arg("end"),
            subject_id=request.args.get("subject_id") or None,
            now=now,
        )
        output = report_to_xlsx(report)
        return send_file(
            output,
            download_name=f"attendance_report_{now.date().isoformat()}.xlsx",
            as_attachment=True,
            mimetype=XLSX_MIMETYPE,
        )
