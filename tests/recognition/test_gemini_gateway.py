from __future__ import annotations

import json

import pytest
import requests

from attendance_kiosk.core.exceptions import RecognitionUnavailable, ValidationError
from attendance_kiosk.recognition.disabled import DisabledRecognitionGateway
from attendance_kiosk.recognition.gemini import GeminiRecognitionGateway


class FakeResponse:
    def __init__(self, text: str, status: int = 200):
        self._text = text
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code}")

    def json(self):
        return {"candidates": [{"content": {"parts": [{"text": self._text}]}}]}


class FakeSession:
    def __init__(self, response=None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response


def _gateway(session):
    return GeminiRecognitionGateway("k-123", session=session, timeout=3)


def test_identify_returns_roster_match(subject):
    session = FakeSession(FakeResponse(json.dumps({"matched": True, "subjectId": "EMP-1001", "confidence": 0.94})))

    result = _gateway(session).identify(b"jpeg", [subject])

    assert result.matched is True
    assert result.subject_id == "EMP-1001"
    assert result.confidence == pytest.approx(0.94)
    call = session.calls[0]
    assert call["url"].endswith("/models/gemini-2.5-flash:generateContent")
    assert call["headers"] == {"x-goog-api-key": "k-123"}
    assert call["timeout"] == 3
    assert "EMP-1001" in call["json"]["contents"][0]["parts"][-1]["text"]


def test_identify_rejects_ids_outside_roster(subject):
    session = FakeSession(FakeResponse(json.dumps({"matched": True, "subjectId": "EMP-6666", "confidence": 0.99})))

    assert _gateway(session).identify(b"jpeg", [subject]).matched is False


def test_identify_degrades_on_transport_error(subject):
    session = FakeSession(error=requests.ConnectionError("down"))

    assert _gateway(session).identify(b"jpeg", [subject]).matched is False


def test_identify_degrades_on_garbage(subject):
    session = FakeSession(FakeResponse("not json"))

    assert _gateway(session).identify(b"jpeg", [subject]).matched is False


def test_identify_degrades_on_unreadable_confidence(subject):
    session = FakeSession(FakeResponse(json.dumps({"matched": True, "subjectId": "EMP-1001", "confidence": "high"})))

    assert _gateway(session).identify(b"jpeg", [subject]).matched is False


def test_liveness_parses_result():
    session = FakeSession(FakeResponse(json.dumps({"isLive": True, "confidence": 0.88})))

    result = _gateway(session).verify_liveness([b"1", b"2", b"3", b"4", b"5"])

    assert result.is_live is True
    assert result.accepted(0.7)
    assert len(session.calls[0]["json"]["contents"][0]["parts"]) == 6


def test_liveness_degrades_on_http_error():
    session = FakeSession(FakeResponse("", status=503))

    assert _gateway(session).verify_liveness([b"1"]).is_live is False


def test_liveness_degrades_on_unreadable_confidence():
    session = FakeSession(FakeResponse(json.dumps({"isLive": True, "confidence": "very"})))

    assert _gateway(session).verify_liveness([b"1"]).is_live is False


def test_signature_uses_enrollment_model():
    session = FakeSession(FakeResponse("  high cheekbones  "))

    signature = _gateway(session).generate_signature([b"a", b"b"])

    assert signature == "high cheekbones"
    assert "gemini-2.5-pro" in session.calls[0]["url"]


def test_signature_failure_raises_unavailable():
    session = FakeSession(error=requests.Timeout("slow"))

    with pytest.raises(RecognitionUnavailable):
        _gateway(session).generate_signature([b"a"])


def test_signature_needs_images():
    with pytest.raises(ValidationError):
        _gateway(FakeSession()).generate_signature([])


def test_disabled_gateway_fails_closed(subject):
    gateway = DisabledRecognitionGateway()

    assert gateway.available is False
    assert gateway.identify(b"x", [subject]).matched is False
    assert gateway.verify_liveness([b"x"]).is_live is False
    with pytest.raises(RecognitionUnavailable):
        gateway.generate_signature([b"x"])
