from __future__ import annotations

import os
from pathlib import Path

from tyre_twin.app import TwinApp
from tyre_twin.config import AppConfig
from tyre_twin.runtime_logging import configure_runtime_log


def load_config() -> AppConfig:
    return AppConfig(
        base_tick_ms=float(os.getenv("TYRE_BASE_TICK_MS", "500")),
        simulation_speed=float(os.getenv("TYRE_SIM_SPEED", "1.0")),
        tick_limit=int(os.getenv("TYRE_TICK_LIMIT", "0")),
        heartbeat_every_ticks=int(os.getenv("TYRE_HEARTBEAT_EVERY", "20")),
        vision_mode=os.getenv("TYRE_VISION", "auto").strip().lower(),
        vision_fallback=os.getenv("TYRE_VISION_FALLBACK", "1") != "0",
        gemini_api_key=(os.getenv("TYRE_GEMINI_API_KEY") or os.getenv("API_KEY") or "").strip(),
        gemini_model=os.getenv("TYRE_GEMINI_MODEL", "gemini-3-flash-preview").strip(),
        gemini_timeout_s=float(os.getenv("TYRE_GEMINI_TIMEOUT_S", "0")),
        mock_delay_s=float(os.getenv("TYRE_MOCK_DELAY_S", "2.0")),
        enable_dashboard=os.getenv("TYRE_DASHBOARD", "1") != "0",
        dashboard_host=os.getenv("TYRE_DASHBOARD_HOST", "127.0.0.1"),
        dashboard_port=int(os.getenv("TYRE_DASHBOARD_PORT", "8766")),
        storage_path=Path(os.getenv("TYRE_STORAGE_PATH", "data/tyre_twin/storage.json").strip()),
        persist_history=os.getenv("TYRE_PERSIST_HISTORY", "1") != "0",
        history_dir=Path(os.getenv("TYRE_HISTORY_DIR", "data/tyre_twin/history").strip()),
        persist_parquet=os.getenv("TYRE_PERSIST_PARQUET", "1") != "0",
    )


def main() -> None:
    log_file = Path(os.getenv("TYRE_LOG_FILE", "logs/tyre_twin.log").strip() or "logs/tyre_twin.log")
    log_path = configure_runtime_log(log_file)
    config = load_config()

    print(
        f"[BOOT] tick={config.base_tick_ms:.0f}ms speed={config.simulation_speed:.1f}x "
        f"tick_limit={config.tick_limit} vision={config.vision_mode} "
        f"fallback={config.vision_fallback} key={'set' if config.gemini_api_key else 'missing'} "
        f"dashboard={config.enable_dashboard}@{config.dashboard_host}:{config.dashboard_port} "
        f"storage={config.storage_path} log_file={log_path}"
    )
    app = TwinApp(config)
    try:
        app.run()
    except KeyboardInterrupt:
        print("[RUN] interrupted.")


if __name__ == "__main__":
    main()
