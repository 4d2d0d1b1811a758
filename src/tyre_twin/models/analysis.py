from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Visual inspection verdict returned by a vision analyzer."""

    hue_color: str
    condition: str
    bloom_detected: bool
    cracks_detected: bool
    estimated_wear: float  # %
    confidence: float  # 0-1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hueColor": self.hue_color,
            "condition": self.condition,
            "bloomDetected": self.bloom_detected,
            "cracksDetected": self.cracks_detected,
            "estimatedWear": self.estimated_wear,
            "confidence": self.confidence,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AnalysisResult":
        try:
            return cls(
                hue_color=str(data["hueColor"]),
                condition=str(data["condition"]),
                bloom_detected=bool(data["bloomDetected"]),
                cracks_detected=bool(data["cracksDetected"]),
                estimated_wear=float(data["estimatedWear"]),
                confidence=float(data["confidence"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Invalid analysis payload: {exc}") from exc
