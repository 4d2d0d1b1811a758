from __future__ import annotations

from typing import Any, Dict

from tyre_twin.constants import MIN_TREAD_DEPTH, VISION_NEW_TREAD_DEPTH
from tyre_twin.models.analysis import AnalysisResult
from tyre_twin.models.tyre import TyreHealth


def strip_data_url(payload: str) -> str:
    """Drop a ``data:image/...;base64,`` prefix if the client sent one."""
    payload = payload.strip()
    if payload.startswith("data:") and "," in payload:
        return payload.split(",", 1)[1]
    return payload


def overrides_from_analysis(result: AnalysisResult) -> Dict[str, Any]:
    """Translate a visual verdict into partial tyre-state overrides."""
    overrides: Dict[str, Any] = {}
    if result.bloom_detected:
        overrides.update(
            state=TyreHealth.MINT,
            surface_bloom=85.0,
            wax_reserve=90.0,
            oxidation_level=5.0,
        )
    elif "grey" in result.hue_color.lower() or "dry" in result.condition.lower():
        overrides.update(
            state=TyreHealth.WARNING,
            surface_bloom=0.0,
            oxidation_level=70.0,
            wax_reserve=10.0,
        )
    elif result.cracks_detected:
        overrides.update(state=TyreHealth.CRITICAL, structural_integrity=30.0)
    else:
        overrides.update(
            state=TyreHealth.ACTIVE,
            surface_bloom=5.0,
            oxidation_level=20.0,
        )

    if result.estimated_wear > 0:
        remaining_mm = VISION_NEW_TREAD_DEPTH * ((100.0 - result.estimated_wear) / 100.0)
        overrides["tread_depth"] = max(MIN_TREAD_DEPTH, remaining_mm)
    return overrides
