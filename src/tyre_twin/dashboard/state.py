from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass, field
from threading import Lock
from typing import Any, Deque, Dict, List, Sequence

from tyre_twin.models.analysis import AnalysisResult
from tyre_twin.models.tyre import SimulationParams, TyreProperties, TyreState
from tyre_twin.physics.fracture import fracture_metrics
from tyre_twin.physics.forecast import projected_range_km, wear_rate_per_tick


@dataclass(slots=True)
class DashboardState:
    analyzer_name: str
    config_view: Dict[str, Any]
    started_at: float = field(default_factory=time.time)
    status: str = "booting"
    tick_count: int = 0
    speed_multiplier: float = 1.0
    forecast_calibration: float = 1.0
    current: Dict[str, Any] = field(default_factory=dict)
    params: Dict[str, Any] = field(default_factory=dict)
    props: Dict[str, Any] = field(default_factory=dict)
    history: List[Dict[str, Any]] = field(default_factory=list)
    fracture: Dict[str, Any] = field(default_factory=dict)
    forecast: Dict[str, Any] = field(default_factory=dict)
    analysis_status: str = "idle"  # idle | analyzing | done | failed
    last_analysis: Dict[str, Any] = field(default_factory=dict)
    analysis_error: str | None = None
    recent_events: Deque[Dict[str, Any]] = field(default_factory=lambda: deque(maxlen=30))
    _lock: Lock = field(default_factory=Lock)

    def set_status(self, status: str) -> None:
        with self._lock:
            self.status = status

    def set_speed_multiplier(self, multiplier: float) -> None:
        with self._lock:
            self.speed_multiplier = round(multiplier, 2)

    def set_forecast_calibration(self, calibration: float) -> None:
        with self._lock:
            self.forecast_calibration = round(calibration, 2)

    def update_model(
        self,
        state: TyreState,
        history: Sequence[TyreState],
        params: SimulationParams,
        props: TyreProperties,
        tick_count: int,
    ) -> None:
        fracture = fracture_metrics(state, params)
        with self._lock:
            self.tick_count = tick_count
            self.current = state.to_dict()
            self.params = params.to_dict()
            self.props = props.to_dict()
            self.history = [entry.to_dict() for entry in history]
            self.fracture = {
                "brittleness": round(fracture.brittleness, 4),
                "toughness_gc": round(fracture.toughness_gc, 3),
                "stress_intensity": round(fracture.stress_intensity, 3),
                "crack_growth_rate": round(fracture.crack_growth_rate, 5),
                "material_state": fracture.material_state,
            }
            self.forecast = {
                "projected_range_km": projected_range_km(state.tread_depth, self.forecast_calibration),
                "wear_rate_mm_per_tick": round(wear_rate_per_tick(history), 5),
            }

    def set_analyzing(self) -> None:
        with self._lock:
            self.analysis_status = "analyzing"
            self.analysis_error = None

    def set_analysis(self, result: AnalysisResult, overrides: Dict[str, Any]) -> None:
        with self._lock:
            self.analysis_status = "done"
            self.analysis_error = None
            self.last_analysis = {**result.to_dict(), "overrides": _jsonable(overrides)}

    def set_analysis_error(self, message: str) -> None:
        with self._lock:
            self.analysis_status = "failed"
            self.analysis_error = message

    def add_event(self, kind: str, text: str) -> None:
        with self._lock:
            self.recent_events.appendleft(
                {"kind": kind, "text": text, "ts": round(time.time() - self.started_at, 2)}
            )

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "status": self.status,
                "analyzer": self.analyzer_name,
                "uptime_s": round(time.time() - self.started_at, 2),
                "tick_count": self.tick_count,
                "speed_multiplier": self.speed_multiplier,
                "forecast_calibration": self.forecast_calibration,
                "data": dict(self.current),
                "params": dict(self.params),
                "props": dict(self.props),
                "history": list(self.history),
                "fracture": dict(self.fracture),
                "forecast": dict(self.forecast),
                "analysis": {
                    "status": self.analysis_status,
                    "error": self.analysis_error,
                    "last": dict(self.last_analysis),
                },
                "recent_events": list(self.recent_events),
                "config": dict(self.config_view),
            }


def _jsonable(overrides: Dict[str, Any]) -> Dict[str, Any]:
    return {key: getattr(value, "value", value) for key, value in overrides.items()}
