from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from tyre_twin.config import AppConfig  # noqa: E402
from tyre_twin.core.event_bus import EventBus  # noqa: E402
from tyre_twin.models.tyre import SimulationParams, TyreProperties  # noqa: E402


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def props() -> TyreProperties:
    return TyreProperties()


@pytest.fixture
def parked() -> SimulationParams:
    return SimulationParams(uv_index=5.0, ozone_level=40.0, temperature=25.0, is_moving=False, speed=0.0)


@pytest.fixture
def driving() -> SimulationParams:
    return SimulationParams(uv_index=5.0, ozone_level=40.0, temperature=25.0, is_moving=True, speed=100.0)


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        base_tick_ms=1.0,
        vision_mode="mock",
        mock_delay_s=0.0,
        enable_dashboard=False,
        storage_path=tmp_path / "storage.json",
        history_dir=tmp_path / "history",
    )
