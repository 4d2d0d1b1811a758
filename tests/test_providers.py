from __future__ import annotations

import json
import random

import pytest
import requests

from tyre_twin.models.analysis import AnalysisResult
from tyre_twin.providers import (
    AnalysisError,
    FallbackVisionAnalyzer,
    GeminiVisionAnalyzer,
    MockVisionAnalyzer,
)
from tyre_twin.providers.mock_provider import CANNED_RESULTS


class FakeResponse:
    def __init__(self, body: object, status_code: int = 200) -> None:
        self._body = body
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self) -> object:
        return self._body


class FakeSession:
    def __init__(self, response: FakeResponse | Exception) -> None:
        self.headers: dict = {}
        self.response = response
        self.calls: list = []

    def post(self, url, params=None, json=None, timeout=None):
        self.calls.append({"url": url, "params": params, "json": json, "timeout": timeout})
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


VERDICT = {
    "hueColor": "Green/Bronze Bloom",
    "condition": "Smooth sidewall",
    "bloomDetected": True,
    "cracksDetected": False,
    "estimatedWear": 15,
    "confidence": 0.8,
}


def _gemini_body(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def test_mock_returns_one_of_four_canned_results() -> None:
    analyzer = MockVisionAnalyzer(delay_s=0.0, rng=random.Random(3))
    assert len(CANNED_RESULTS) == 4
    for _ in range(10):
        assert analyzer.analyze("QUJD") in CANNED_RESULTS


def test_canned_results_cover_each_override_branch() -> None:
    assert any(r.bloom_detected for r in CANNED_RESULTS)
    assert any(r.cracks_detected for r in CANNED_RESULTS)
    assert any("grey" in r.hue_color.lower() for r in CANNED_RESULTS)


def test_gemini_parses_schema_response() -> None:
    session = FakeSession(FakeResponse(_gemini_body(json.dumps(VERDICT))))
    analyzer = GeminiVisionAnalyzer(api_key="k", model="vision-test", timeout_s=5.0, session=session)

    result = analyzer.analyze("QUJD")

    assert result == AnalysisResult.from_dict(VERDICT)
    call = session.calls[0]
    assert call["url"].endswith("/vision-test:generateContent")
    assert call["params"] == {"key": "k"}
    assert call["timeout"] == 5.0
    parts = call["json"]["contents"][0]["parts"]
    assert parts[0]["inline_data"]["data"] == "QUJD"
    assert call["json"]["generationConfig"]["responseMimeType"] == "application/json"


def test_gemini_without_key_fails_before_any_request() -> None:
    session = FakeSession(FakeResponse({}))
    with pytest.raises(AnalysisError, match="API Key is missing"):
        GeminiVisionAnalyzer(api_key="", session=session).analyze("QUJD")
    assert session.calls == []


@pytest.mark.parametrize(
    "response",
    [
        FakeResponse({}, status_code=500),
        requests.ConnectionError("offline"),
        FakeResponse({"candidates": []}),
        FakeResponse(_gemini_body("")),
        FakeResponse(_gemini_body("not json")),
        FakeResponse(_gemini_body(json.dumps({"hueColor": "Grey"}))),
    ],
)
def test_gemini_failures_raise_analysis_error(response) -> None:
    analyzer = GeminiVisionAnalyzer(api_key="k", session=FakeSession(response))
    with pytest.raises(AnalysisError):
        analyzer.analyze("QUJD")


def test_fallback_degrades_silently_to_mock(capsys) -> None:
    failing = GeminiVisionAnalyzer(api_key="k", session=FakeSession(FakeResponse({}, status_code=503)))
    mock = MockVisionAnalyzer(delay_s=0.0, scenarios=[CANNED_RESULTS[1]])
    analyzer = FallbackVisionAnalyzer(primary=failing, fallback=mock)

    assert analyzer.analyze("QUJD") == CANNED_RESULTS[1]
    assert analyzer.name == "gemini+mock"
    assert "[VISION] gemini failed" in capsys.readouterr().out
