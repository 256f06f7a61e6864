"""Gemini recognition provider over the Generative Language REST API."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, Sequence

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..core.exceptions import RecognitionUnavailable, ValidationError
from ..subjects.model import Subject
from .base import NO_MATCH, NOT_LIVE, LivenessResult, MatchResult, RecognitionGateway
from .frames import encode_frame

logger = logging.getLogger(__name__)

API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

SIGNATURE_PROMPT = """
You are a biometric expert for a campus attendance gate.
Analyze these enrollment photos and produce a concise technical visual signature
describing this person's permanent facial structure: skeletal structure (brow ridge,
jawline, cheekbones), eye characteristics, nose geometry and permanent identifying marks.
The signature is matched against live camera frames under varied lighting and angles.
Be concise, technical and structured.
"""

IDENTIFY_PROMPT = """
Compare the person in the live camera frame against these registered profiles:
{roster}

Perform a high-confidence match. Output ONLY a JSON object:
{{"matched": boolean, "subjectId": string | null, "confidence": number (0-1), "message": "rationale"}}
"""

LIVENESS_PROMPT = """
Anti-spoofing analysis. Analyze these frames for signs of printed photos, digital
screens or lack of physiological movement.
Output JSON: {"isLive": boolean, "confidence": number}
"""

IDENTIFY_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "matched": {"type": "BOOLEAN"},
        "subjectId": {"type": "STRING"},
        "confidence": {"type": "NUMBER"},
        "message": {"type": "STRING"},
    },
    "required": ["matched", "confidence"],
}

LIVENESS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "isLive": {"type": "BOOLEAN"},
        "confidence": {"type": "NUMBER"},
    },
    "required": ["isLive", "confidence"],
}


class GeminiRecognitionGateway(RecognitionGateway):
    """Delegates identification, liveness and enrollment to a Gemini model.

    Identification and liveness never raise: any transport or parse failure is
    logged and reported as "no match" / "not live". Enrollment raises
    RecognitionUnavailable so the admin sees the failure.
    """

    def __init__(
        self,
        api_key: str,
        *,
        model: str = "gemini-2.5-flash",
        enroll_model: str = "gemini-2.5-pro",
        timeout: float = 30.0,
        max_retries: int = 2,
        session: Optional[requests.Session] = None,
    ):
        self._api_key = api_key
        self._model = model
        self._enroll_model = enroll_model
        self._timeout = timeout
        self._session = session or self._build_session(max_retries)

    @staticmethod
    def _build_session(max_retries: int) -> requests.Session:
        session = requests.Session()
        retry_strategy = Retry(
            total=max_retries,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["POST"],
            backoff_factor=1,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("https://", adapter)
        session.headers.update({"accept": "application/json"})
        return session

    @property
    def available(self) -> bool:
        return True

    def _generate(self, model: str, parts: list[dict], schema: Optional[dict] = None) -> str:
        body: dict[str, Any] = {"contents": [{"parts": parts}]}
        if schema is not None:
            body["generationConfig"] = {
                "responseMimeType": "application/json",
                "responseSchema": schema,
            }

        response = self._session.post(
            f"{API_BASE_URL}/models/{model}:generateContent",
            json=body,
            headers={"x-goog-api-key": self._api_key},
            timeout=self._timeout,
        )
        response.raise_for_status()
        payload = response.json()
        candidates = payload.get("candidates") or []
        if not candidates:
            return ""
        content_parts = candidates[0].get("content", {}).get("parts") or []
        return "".join(p.get("text", "") for p in content_parts)

    @staticmethod
    def _image_parts(frames: Sequence[bytes]) -> list[dict]:
        return [{"inline_data": {"mime_type": "image/jpeg", "data": encode_frame(f)}} for f in frames]

    def identify(self, frame: bytes, roster: Sequence[Subject]) -> MatchResult:
        if not roster:
            return NO_MATCH

        context = "\n".join(
            f"[REGISTRY_ID: {s.subject_id}, NAME: {s.name}] BIO_VECTOR: {s.visual_signature}" for s in roster
        )
        parts = self._image_parts([frame]) + [{"text": IDENTIFY_PROMPT.format(roster=context)}]
        try:
            data = json.loads(self._generate(self._model, parts, IDENTIFY_SCHEMA) or "{}")
        except (requests.RequestException, ValueError) as e:
            logger.error("identification failed: %s", e)
            return NO_MATCH
        if not isinstance(data, dict):
            return NO_MATCH

        subject_id = data.get("subjectId") or None
        known = {s.subject_id for s in roster}
        if subject_id is not None and subject_id not in known:
            logger.warning("recognizer returned id outside the roster: %s", subject_id)
            return NO_MATCH

        try:
            confidence = float(data.get("confidence") or 0.0)
        except (TypeError, ValueError):
            logger.error("identification returned unreadable confidence: %r", data.get("confidence"))
            return NO_MATCH

        return MatchResult(
            matched=bool(data.get("matched")) and subject_id is not None,
            subject_id=subject_id,
            confidence=confidence,
            message=str(data.get("message") or ""),
        )

    def verify_liveness(self, frames: Sequence[bytes]) -> LivenessResult:
        if not frames:
            return NOT_LIVE

        parts = self._image_parts(frames) + [{"text": LIVENESS_PROMPT}]
        try:
            data = json.loads(self._generate(self._model, parts, LIVENESS_SCHEMA) or "{}")
        except (requests.RequestException, ValueError) as e:
            logger.error("liveness check failed: %s", e)
            return NOT_LIVE
        if not isinstance(data, dict):
            return NOT_LIVE

        try:
            confidence = float(data.get("confidence") or 0.0)
        except (TypeError, ValueError):
            logger.error("liveness returned unreadable confidence: %r", data.get("confidence"))
            return NOT_LIVE

        return LivenessResult(is_live=bool(data.get("isLive")), confidence=confidence)

    def generate_signature(self, images: Sequence[bytes]) -> str:
        if not images:
            raise ValidationError("At least one enrollment image is required")

        parts = self._image_parts(images) + [{"text": SIGNATURE_PROMPT}]
        try:
            text = self._generate(self._enroll_model, parts)
        except requests.RequestException as e:
            logger.error("enrollment signature failed: %s", e)
            raise RecognitionUnavailable("Recognition service is unreachable") from e

        return text.strip() or "No signature generated"
