"""Vision analyzers."""

from tyre_twin.providers.base import AnalysisError, VisionAnalyzer
from tyre_twin.providers.fallback import FallbackVisionAnalyzer
from tyre_twin.providers.gemini_provider import GeminiVisionAnalyzer
from tyre_twin.providers.mock_provider import MockVisionAnalyzer

__all__ = [
    "AnalysisError",
    "FallbackVisionAnalyzer",
    "GeminiVisionAnalyzer",
    "MockVisionAnalyzer",
    "VisionAnalyzer",
]
