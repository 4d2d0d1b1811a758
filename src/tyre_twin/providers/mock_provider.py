from __future__ import annotations

import random
import time
from typing import Optional, Sequence

from tyre_twin.constants import MOCK_ANALYSIS_DELAY_S
from tyre_twin.models.analysis import AnalysisResult
from tyre_twin.providers.base import VisionAnalyzer

CANNED_RESULTS: tuple[AnalysisResult, ...] = (
    AnalysisResult(
        hue_color="Green/Bronze Bloom",
        condition="Protective wax layer visible on sidewall, smooth surface",
        bloom_detected=True,
        cracks_detected=False,
        estimated_wear=10.0,
        confidence=0.88,
    ),
    AnalysisResult(
        hue_color="Deep Black",
        condition="Clean rubber, bloom shed by recent driving",
        bloom_detected=False,
        cracks_detected=False,
        estimated_wear=25.0,
        confidence=0.91,
    ),
    AnalysisResult(
        hue_color="Faded Grey",
        condition="Dry, oxidised surface with chalky texture",
        bloom_detected=False,
        cracks_detected=False,
        estimated_wear=40.0,
        confidence=0.79,
    ),
    AnalysisResult(
        hue_color="Dark Charcoal",
        condition="Micro-cracking between tread blocks and on sidewall",
        bloom_detected=False,
        cracks_detected=True,
        estimated_wear=70.0,
        confidence=0.83,
    ),
)


class MockVisionAnalyzer(VisionAnalyzer):
    """Random canned verdicts with simulated latency, used when no API key is set."""

    name = "mock"

    def __init__(
        self,
        delay_s: float = MOCK_ANALYSIS_DELAY_S,
        scenarios: Sequence[AnalysisResult] = CANNED_RESULTS,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.delay_s = max(0.0, delay_s)
        self.scenarios = tuple(scenarios)
        self._rng = rng or random.Random()

    def analyze(self, base64_image: str) -> AnalysisResult:
        if self.delay_s > 0.0:
            time.sleep(self.delay_s)
        return self._rng.choice(self.scenarios)
