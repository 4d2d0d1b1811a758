from __future__ import annotations

from tyre_twin.models.analysis import AnalysisResult
from tyre_twin.providers.base import AnalysisError, VisionAnalyzer


class FallbackVisionAnalyzer(VisionAnalyzer):
    """Tries the primary analyzer and degrades to the fallback on any analysis failure."""

    def __init__(self, primary: VisionAnalyzer, fallback: VisionAnalyzer) -> None:
        self.primary = primary
        self.fallback = fallback
        self.name = f"{primary.name}+{fallback.name}"

    def analyze(self, base64_image: str) -> AnalysisResult:
        try:
            return self.primary.analyze(base64_image)
        except AnalysisError as exc:
            print(f"[VISION] {self.primary.name} failed, using {self.fallback.name}: {exc}")
            return self.fallback.analyze(base64_image)
