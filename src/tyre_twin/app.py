from __future__ import annotations

from dataclasses import dataclass, replace
from threading import Lock, Thread
from typing import Any, Dict, Mapping, Tuple

from tyre_twin.analysis.overrides import overrides_from_analysis, strip_data_url
from tyre_twin.config import AppConfig
from tyre_twin.constants import ANALYSIS_FAILED_MESSAGE, FORECAST_CALIBRATION_RANGE
from tyre_twin.core.event_bus import EventBus
from tyre_twin.core.events import (
    ANALYSIS_COMPLETED,
    ANALYSIS_FAILED,
    PARAMS_CHANGED,
    PROPERTIES_CHANGED,
    SPEED_CHANGED,
    STATE_INJECTED,
    STATE_RESET,
    TICK,
    Event,
)
from tyre_twin.dashboard.server import DashboardServer
from tyre_twin.dashboard.state import DashboardState
from tyre_twin.models.tyre import SimulationParams, TyreProperties
from tyre_twin.providers.base import AnalysisError, VisionAnalyzer
from tyre_twin.providers.fallback import FallbackVisionAnalyzer
from tyre_twin.providers.gemini_provider import GeminiVisionAnalyzer
from tyre_twin.providers.mock_provider import MockVisionAnalyzer
from tyre_twin.simulation.engine import TyreSimulation
from tyre_twin.simulation.scheduler import TickScheduler
from tyre_twin.storage.history_recorder import HistoryRecorder
from tyre_twin.storage.snapshot_store import SnapshotStore

# Slider and form ranges enforced at the input boundary; the model never clamps inputs.
PARAM_RANGES: Dict[str, Tuple[float, float]] = {
    "uv_index": (0.0, 12.0),
    "ozone_level": (0.0, 300.0),
    "temperature": (-20.0, 60.0),
    "speed": (0.0, 150.0),
}
PROPERTY_RANGES: Dict[str, Tuple[float, float]] = {
    "curing_time": (10.0, 30.0),
    "initial_tread_depth": (4.0, 12.0),
    "manufacturer_life": (20000.0, 100000.0),
}
SPEED_MULTIPLIER_RANGE = (0.1, 5.0)


def _clamp_fields(obj: Any, ranges: Mapping[str, Tuple[float, float]]) -> Dict[str, float]:
    return {name: max(low, min(high, float(getattr(obj, name)))) for name, (low, high) in ranges.items()}


@dataclass
class TwinApp:
    config: AppConfig

    def __post_init__(self) -> None:
        self.event_bus = EventBus()
        # Serializes read-merge-write of params/props across concurrent HTTP handlers.
        self._controls_lock = Lock()
        self.store = SnapshotStore(self.config.storage_path)
        saved = self.store.load()
        if saved is not None:
            print(f"[STORE] restored session from {self.config.storage_path}")
        self.simulation = TyreSimulation(
            self.event_bus,
            params=saved.params if saved else None,
            props=saved.props if saved else None,
            initial_state=saved.data if saved else None,
        )
        self.scheduler = TickScheduler(
            base_tick_ms=self.config.base_tick_ms,
            speed_multiplier=self.config.simulation_speed,
        )
        self.analyzer = self._build_analyzer()
        self.history_recorder = HistoryRecorder(self.config.history_dir) if self.config.persist_history else None
        self.dashboard_state, self.dashboard_server = self._build_dashboard()
        self.dashboard_state.set_speed_multiplier(self.scheduler.speed_multiplier)
        self._refresh_dashboard()
        self._register_handlers()

    def run(self) -> None:
        self.dashboard_state.set_status("starting")
        if self.dashboard_server is not None:
            try:
                self.dashboard_server.start()
                print(f"[DASH] running at {self.dashboard_server.url}")
            except OSError as exc:
                print(f"[DASH] failed to start dashboard: {exc}")
                self.dashboard_server = None
        self.dashboard_state.set_status("running")
        try:
            for i in self.scheduler.stream():
                self.simulation.tick()
                if self.config.tick_limit > 0 and i >= self.config.tick_limit:
                    print(f"[RUN] tick_limit reached ({self.config.tick_limit}). Stopping.")
                    break
        finally:
            self.shutdown()

    def shutdown(self) -> None:
        self.scheduler.stop()
        self.dashboard_state.set_status("stopped")
        if self.history_recorder is not None:
            csv_path, parquet_path = self.history_recorder.flush(
                self.simulation.history(), persist_parquet=self.config.persist_parquet
            )
            if csv_path is not None:
                print(f"[PERSIST] History CSV saved: {csv_path}")
            if parquet_path is not None:
                print(f"[PERSIST] History Parquet saved: {parquet_path}")
        if self.dashboard_server is not None:
            self.dashboard_server.stop()

    # Controls exposed to the dashboard

    def update_params(self, changes: Mapping[str, Any]) -> Dict[str, Any]:
        with self._controls_lock:
            merged = {**self.simulation.params.to_dict(), **changes}
            params = SimulationParams.from_dict(merged)
            params = replace(params, **_clamp_fields(params, PARAM_RANGES))
            self.simulation.set_params(params)
        return params.to_dict()

    def update_properties(self, changes: Mapping[str, Any]) -> Dict[str, Any]:
        with self._controls_lock:
            merged = {**self.simulation.props.to_dict(), **changes}
            props = TyreProperties.from_dict(merged)
            props = replace(props, **_clamp_fields(props, PROPERTY_RANGES))
            self.simulation.set_properties(props)
        return props.to_dict()

    def set_simulation_speed(self, multiplier: float) -> float:
        low, high = SPEED_MULTIPLIER_RANGE
        self.scheduler.set_speed_multiplier(max(low, min(high, multiplier)))
        self.event_bus.publish(Event(name=SPEED_CHANGED, payload={"multiplier": self.scheduler.speed_multiplier}))
        return self.scheduler.speed_multiplier

    def set_forecast_calibration(self, calibration: float) -> float:
        low, high = FORECAST_CALIBRATION_RANGE
        value = max(low, min(high, calibration))
        self.dashboard_state.set_forecast_calibration(value)
        self._refresh_dashboard()
        return self.dashboard_state.forecast_calibration

    def reset(self) -> Dict[str, Any]:
        fresh = self.simulation.reset(params=SimulationParams())
        return fresh.to_dict()

    def inject(self, overrides: Mapping[str, Any]) -> Dict[str, Any]:
        return self.simulation.inject(overrides, source="api").to_dict()

    def request_analysis(self, image: str) -> None:
        base64_image = strip_data_url(image)
        if not base64_image:
            raise ValueError("image payload is empty")
        self.dashboard_state.set_analyzing()
        Thread(target=self.analyze_image, args=(base64_image,), daemon=True).start()

    def analyze_image(self, base64_image: str) -> Dict[str, Any] | None:
        try:
            result = self.analyzer.analyze(base64_image)
        except AnalysisError as exc:
            print(f"[VISION] analysis failed: {exc}")
            self.dashboard_state.set_analysis_error(ANALYSIS_FAILED_MESSAGE)
            self.event_bus.publish(Event(name=ANALYSIS_FAILED, payload={"error": str(exc)}))
            return None

        overrides = overrides_from_analysis(result)
        self.simulation.inject(overrides, source="vision")
        self.dashboard_state.set_analysis(result, overrides)
        self.event_bus.publish(Event(name=ANALYSIS_COMPLETED, payload={"result": result, "overrides": overrides}))
        return overrides

    # Wiring

    def _build_analyzer(self) -> VisionAnalyzer:
        mode = self.config.vision_mode.strip().lower()
        mock = MockVisionAnalyzer(delay_s=self.config.mock_delay_s)
        if mode == "mock" or (mode == "auto" and not self.config.gemini_api_key):
            return mock
        if mode in ("auto", "gemini"):
            gemini = GeminiVisionAnalyzer(
                api_key=self.config.gemini_api_key,
                model=self.config.gemini_model,
                timeout_s=self.config.gemini_timeout_s or None,
            )
            if self.config.vision_fallback:
                return FallbackVisionAnalyzer(primary=gemini, fallback=mock)
            return gemini
        raise RuntimeError(f"Invalid vision mode: {self.config.vision_mode}")

    def _build_dashboard(self) -> tuple[DashboardState, DashboardServer | None]:
        config_view = {
            "base_tick_ms": self.config.base_tick_ms,
            "tick_limit": self.config.tick_limit,
            "vision_mode": self.config.vision_mode,
            "vision_fallback": self.config.vision_fallback,
            "gemini_model": self.config.gemini_model,
            "gemini_key_present": bool(self.config.gemini_api_key),
            "mock_delay_s": self.config.mock_delay_s,
            "dashboard_host": self.config.dashboard_host,
            "dashboard_port": self.config.dashboard_port,
            "storage_path": str(self.config.storage_path),
            "persist_history": self.config.persist_history,
            "history_dir": str(self.config.history_dir),
            "persist_parquet": self.config.persist_parquet,
        }
        state = DashboardState(analyzer_name=self.analyzer.name, config_view=config_view)
        if not self.config.enable_dashboard:
            return state, None
        server = DashboardServer(
            state=state,
            controls=self,
            host=self.config.dashboard_host,
            port=self.config.dashboard_port,
        )
        return state, server

    def _register_handlers(self) -> None:
        self.event_bus.subscribe(TICK, self._on_tick)
        self.event_bus.subscribe(STATE_INJECTED, self._on_state_injected)
        self.event_bus.subscribe(STATE_RESET, self._on_state_reset)
        self.event_bus.subscribe(PARAMS_CHANGED, self._on_inputs_changed)
        self.event_bus.subscribe(PROPERTIES_CHANGED, self._on_inputs_changed)
        self.event_bus.subscribe(SPEED_CHANGED, self._on_speed_changed)

    def _refresh_dashboard(self) -> None:
        self.dashboard_state.update_model(
            state=self.simulation.state,
            history=self.simulation.history(),
            params=self.simulation.params,
            props=self.simulation.props,
            tick_count=self.simulation.tick_count,
        )

    def _persist(self) -> None:
        try:
            self.store.save(self.simulation.snapshot())
        except OSError as exc:
            print(f"[STORE] failed to save state: {exc}")

    def _on_tick(self, event: Event) -> None:
        state = event.payload["state"]
        tick_count = int(event.payload["tick_count"])
        self._persist()
        self._refresh_dashboard()
        every = max(1, self.config.heartbeat_every_ticks)
        if tick_count == 1 or tick_count % every == 0:
            print(
                f"[SIM] tick={tick_count} state={state.state.value} rul={state.rul}d "
                f"wax={state.wax_reserve:.2f}% bloom={state.surface_bloom:.2f}% "
                f"ox={state.oxidation_level:.2f}% integrity={state.structural_integrity:.2f}% "
                f"tread={state.tread_depth:.3f}mm mileage={state.mileage:.1f}km"
            )

    def _on_state_injected(self, event: Event) -> None:
        source = event.payload.get("source", "manual")
        fields = ", ".join(sorted(event.payload.get("overrides", {})))
        print(f"[SIM] state injected from {source}: {fields}")
        self.dashboard_state.add_event("inject", f"{source}: {fields}")
        self._persist()
        self._refresh_dashboard()

    def _on_state_reset(self, event: Event) -> None:
        self.store.clear()
        self.scheduler.rearm()
        print("[SIM] simulation reset, stored session cleared.")
        self.dashboard_state.add_event("reset", "simulation reset")
        self._refresh_dashboard()

    def _on_inputs_changed(self, event: Event) -> None:
        self.scheduler.rearm()
        self._persist()
        self._refresh_dashboard()
        self.dashboard_state.add_event(event.name, ", ".join(f"{k}={v}" for k, v in _event_view(event).items()))

    def _on_speed_changed(self, event: Event) -> None:
        multiplier = float(event.payload["multiplier"])
        self.dashboard_state.set_speed_multiplier(multiplier)
        print(f"[SIM] simulation speed {multiplier:.1f}x (tick every {self.scheduler.interval_s * 1000:.0f} ms)")


def _event_view(event: Event) -> Dict[str, Any]:
    item = event.payload.get("params") or event.payload.get("props")
    return item.to_dict() if item is not None else {}
