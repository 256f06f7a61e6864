from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.serializers import record_to_dict, subject_to_dict
from ..container import Container
from ..core.constants import DEFAULT_DEVICE_ID, DEFAULT_LIVENESS_SAMPLES
from ..core.exceptions import ValidationError
from ..recognition.frames import decode_frame
from .liveness import LivenessBurst

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    settings = container.settings
    default_device = str(settings.get("DEVICE_ID", DEFAULT_DEVICE_ID))
    samples = int(settings.get("LIVENESS_SAMPLES", DEFAULT_LIVENESS_SAMPLES))

    def _build_burst(raw_frames) -> LivenessBurst:
        burst = LivenessBurst(samples=samples)
        if not isinstance(raw_frames, list):
            burst.cancel()
            return burst
        for raw in raw_frames[:samples]:
            try:
                burst.add(decode_frame(raw))
            except ValidationError:
                # One unreadable sample invalidates the whole burst.
                burst.cancel()
                break
        return burst

    @app.get("/api/gate/status")
    def gate_status():
        device_id = request.args.get("device_id") or default_device
        now = now_local()
        cooldown = container.cooldowns.get(device_id)
        return jsonify(
            {
                "success": True,
                "device_id": device_id,
                "available": container.gate_service.available,
                "registered": len(container.gate_service.roster()),
                "liveness_samples": samples,
                "cooldown_remaining": cooldown.remaining(now).total_seconds(),
            }
        )

    @app.post("/api/gate/scan")
    def gate_scan():
        payload = request.get_json(silent=True) or {}
        device_id = str(payload.get("device_id") or default_device)
        now = now_local()

        frame = decode_frame(payload.get("frame"))
        burst = _build_burst(payload.get("burst"))

        cooldown = container.cooldowns.get(device_id)
        outcome = container.gate_service.scan(frame, burst, now=now, cooldown=cooldown)
        container.cooldowns.put(device_id, outcome.cooldown)

        logger.info("scan device=%s outcome=%s", device_id, outcome.kind.value)
        return jsonify(
            {
                "success": outcome.success,
                "kind": outcome.kind.value,
                "title": outcome.title,
                "message": outcome.message,
                "confidence": outcome.confidence,
                "subject": subject_to_dict(outcome.subject) if outcome.subject else None,
                "record": record_to_dict(outcome.record),
                "cooldown_remaining": outcome.cooldown.remaining(now).total_seconds(),
            }
        )
