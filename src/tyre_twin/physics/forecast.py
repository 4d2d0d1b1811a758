from __future__ import annotations

import math
from typing import Sequence

from tyre_twin.constants import FORECAST_KM_PER_MM, FORECAST_SMOOTHING_TICKS, MIN_TREAD_DEPTH
from tyre_twin.models.tyre import TyreState


def projected_range_km(tread_depth: float, calibration: float = 1.0) -> int:
    if tread_depth <= MIN_TREAD_DEPTH:
        return 0
    return int(math.floor((tread_depth - MIN_TREAD_DEPTH) * FORECAST_KM_PER_MM * calibration))


def wear_rate_per_tick(history: Sequence[TyreState]) -> float:
    """Tread loss per tick, smoothed over the last few ticks once enough history exists."""
    if not history:
        return 0.0
    current = history[-1]
    if len(history) > FORECAST_SMOOTHING_TICKS:
        past = history[-FORECAST_SMOOTHING_TICKS]
        return (past.tread_depth - current.tread_depth) / FORECAST_SMOOTHING_TICKS
    previous = history[-2] if len(history) > 1 else current
    return abs(previous.tread_depth - current.tread_depth)
