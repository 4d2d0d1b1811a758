from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from tyre_twin.constants import BASE_TICK_MS, GEMINI_MODEL_VISION, MOCK_ANALYSIS_DELAY_S


@dataclass(slots=True)
class AppConfig:
    base_tick_ms: float = BASE_TICK_MS
    simulation_speed: float = 1.0
    tick_limit: int = 0
    heartbeat_every_ticks: int = 20
    vision_mode: str = "auto"  # auto | gemini | mock
    vision_fallback: bool = True
    gemini_api_key: str = ""
    gemini_model: str = GEMINI_MODEL_VISION
    gemini_timeout_s: float = 0.0  # 0 = no timeout
    mock_delay_s: float = MOCK_ANALYSIS_DELAY_S
    enable_dashboard: bool = True
    dashboard_host: str = "127.0.0.1"
    dashboard_port: int = 8766
    storage_path: Path = Path("data") / "tyre_twin" / "storage.json"
    persist_history: bool = True
    history_dir: Path = Path("data") / "tyre_twin" / "history"
    persist_parquet: bool = True
