from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.serializers import leave_to_dict, record_to_dict, subject_to_dict
from ..common.validators import require_non_negative_int
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT
from .durations import compute_durations
from .model import session_state


def register(app: Flask, container: Container) -> None:
    """Self-service endpoints: today's session, breaks, history and leave."""

    def _summary_json(subject_id: str):
        summary = container.attendance_service.today_summary(subject_id, now=now_local())
        subject = container.subject_service.get(subject_id)
        return {
            "success": True,
            "subject": subject_to_dict(subject),
            "state": summary.state.value,
            "record": record_to_dict(summary.record),
            "durations": summary.durations.as_dict(),
        }

    @app.get("/api/me/<subject_id>/today")
    def my_today(subject_id: str):
        return jsonify(_summary_json(subject_id))

    @app.post("/api/me/<subject_id>/break")
    def my_break(subject_id: str):
        now = now_local()
        record = container.attendance_service.toggle_break_for(subject_id, now=now)
        return jsonify(
            {
                "success": True,
                "on_break": record.open_break is not None,
                "state": session_state(record).value,
                "record": record_to_dict(record),
                "durations": compute_durations(record, now).as_dict(),
            }
        )

    @app.get("/api/me/<subject_id>/history")
    def my_history(subject_id: str):
        container.subject_service.get(subject_id)
        limit = require_non_negative_int(request.args.get("limit", DEFAULT_HISTORY_LIMIT), "Limit")
        now = now_local()
        items = []
        for r in container.attendance_service.history(subject_id, limit=limit):
            items.append({"record": record_to_dict(r), "durations": compute_durations(r, now).as_dict()})
        return jsonify({"success": True, "items": items})

    @app.get("/api/me/<subject_id>/leaves")
    def my_leaves(subject_id: str):
        container.subject_service.get(subject_id)
        requests = container.leave_service.list_requests(subject_id=subject_id)
        return jsonify({"success": True, "items": [leave_to_dict(r) for r in requests]})

    @app.post("/api/me/<subject_id>/leaves")
    def submit_leave(subject_id: str):
        payload = request.get_json(silent=True) or {}
        leave = container.leave_service.submit(
            subject_id=subject_id,
            leave_type=payload.get("type", ""),
            start_date=payload.get("start_date", ""),
            end_date=payload.get("end_date", ""),
            reason=payload.get("reason", ""),
        )
        return jsonify({"success": True, "item": leave_to_dict(leave)}), 201
