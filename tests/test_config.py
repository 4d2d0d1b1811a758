from __future__ import annotations

from pathlib import Path

from tyre_twin.main import load_config


def test_defaults_without_env(monkeypatch) -> None:
    for name in ("TYRE_GEMINI_API_KEY", "API_KEY", "TYRE_VISION", "TYRE_SIM_SPEED", "TYRE_DASHBOARD_PORT"):
        monkeypatch.delenv(name, raising=False)
    config = load_config()
    assert config.base_tick_ms == 500
    assert config.vision_mode == "auto"
    assert config.gemini_api_key == ""
    assert config.dashboard_port == 8766


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("API_KEY", " secret ")
    monkeypatch.setenv("TYRE_VISION", "Gemini")
    monkeypatch.setenv("TYRE_SIM_SPEED", "2.5")
    monkeypatch.setenv("TYRE_DASHBOARD", "0")
    monkeypatch.setenv("TYRE_STORAGE_PATH", "/tmp/twin.json")
    config = load_config()
    assert config.gemini_api_key == "secret"
    assert config.vision_mode == "gemini"
    assert config.simulation_speed == 2.5
    assert config.enable_dashboard is False
    assert config.storage_path == Path("/tmp/twin.json")
