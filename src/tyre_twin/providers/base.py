from __future__ import annotations

from abc import ABC, abstractmethod

from tyre_twin.models.analysis import AnalysisResult


class AnalysisError(RuntimeError):
    """Raised when a vision analyzer cannot produce a verdict."""


class VisionAnalyzer(ABC):
    """Image inspection backend (remote vision model, canned mock, etc)."""

    name: str = "base"

    @abstractmethod
    def analyze(self, base64_image: str) -> AnalysisResult:
        pass
