from __future__ import annotations

import json
from typing import Any, Dict

import requests

from tyre_twin.constants import GEMINI_MODEL_VISION
from tyre_twin.models.analysis import AnalysisResult
from tyre_twin.providers.base import AnalysisError, VisionAnalyzer

API_ROOT = "https://generativelanguage.googleapis.com/v1beta/models/"

INSPECTION_PROMPT = """
Analyze this tyre sidewall and tread image for health and material condition.
Focus on:
1. Color Hue: Check for "Blooming" (a green/bronze/brown protective wax layer), "Deep Black" (clean rubber), or "Faded Grey" (oxidized/dry).
2. Surface Condition: Look for micro-cracking, dry rot, or smooth surfaces.
3. Estimated Wear: Based on tread depth visual cues or sidewall smoothness.

If you see a greenish or bronze tint, that is "Blooming" and is HEALTHY for a stored tyre.
If you see faded grey, that is "Oxidation" and is unhealthy.
If tread looks worn, estimate wear percentage.
"""

RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "hueColor": {
            "type": "STRING",
            "description": "Visual color description (e.g., 'Green/Bronze Bloom', 'Deep Black', 'Faded Grey')",
        },
        "condition": {"type": "STRING", "description": "Text description of surface state and tread"},
        "bloomDetected": {"type": "BOOLEAN", "description": "Whether protective wax bloom is visible"},
        "cracksDetected": {"type": "BOOLEAN", "description": "Whether dry rot or cracks are visible"},
        "estimatedWear": {"type": "NUMBER", "description": "Estimated percentage of wear (0-100)"},
        "confidence": {"type": "NUMBER", "description": "Confidence score 0-1"},
    },
    "required": ["hueColor", "condition", "bloomDetected", "cracksDetected", "estimatedWear", "confidence"],
}


class GeminiVisionAnalyzer(VisionAnalyzer):
    """Sends the image to the Gemini ``generateContent`` endpoint with a JSON schema."""

    name = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str = GEMINI_MODEL_VISION,
        timeout_s: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.timeout_s = timeout_s
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    @property
    def endpoint(self) -> str:
        return f"{API_ROOT}{self.model}:generateContent"

    def build_request(self, base64_image: str, mime_type: str = "image/jpeg") -> Dict[str, Any]:
        return {
            "contents": [
                {
                    "parts": [
                        {"inline_data": {"mime_type": mime_type, "data": base64_image}},
                        {"text": INSPECTION_PROMPT},
                    ]
                }
            ],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
            },
        }

    def analyze(self, base64_image: str) -> AnalysisResult:
        if not self.api_key:
            raise AnalysisError("API Key is missing. Please set TYRE_GEMINI_API_KEY.")
        try:
            response = self.session.post(
                self.endpoint,
                params={"key": self.api_key},
                json=self.build_request(base64_image),
                timeout=self.timeout_s,
            )
            response.raise_for_status()
            body = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise AnalysisError(f"Gemini request failed: {exc}") from exc

        text = self._extract_text(body)
        try:
            return AnalysisResult.from_dict(json.loads(text))
        except ValueError as exc:
            raise AnalysisError(f"Gemini returned an unusable verdict: {exc}") from exc

    def _extract_text(self, body: Dict[str, Any]) -> str:
        try:
            parts = body["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError) as exc:
            raise AnalysisError("No response from Gemini") from exc
        text = "".join(str(part.get("text", "")) for part in parts if isinstance(part, dict))
        if not text.strip():
            raise AnalysisError("No response from Gemini")
        return text
