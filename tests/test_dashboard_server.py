from __future__ import annotations

import math
from dataclasses import replace

import pytest
import requests

from tyre_twin.app import TwinApp
from tyre_twin.constants import FORECAST_KM_PER_MM, MIN_TREAD_DEPTH


@pytest.fixture
def served_app(app_config):
    app = TwinApp(replace(app_config, enable_dashboard=True, dashboard_port=0))
    app.dashboard_server.start()
    try:
        yield app
    finally:
        app.dashboard_server.stop()


def test_state_endpoint_reports_model(served_app) -> None:
    served_app.simulation.tick()
    body = requests.get(f"{served_app.dashboard_server.url}/api/state", timeout=5).json()

    assert body["tick_count"] == 1
    assert body["data"]["state"] == "ACTIVE"
    assert len(body["history"]) == 1
    assert body["params"]["temperature"] == 25.0
    assert body["analyzer"] == "mock"
    assert "brittleness" in body["fracture"]
    assert "projected_range_km" in body["forecast"]


def test_index_serves_control_page(served_app) -> None:
    response = requests.get(f"{served_app.dashboard_server.url}/", timeout=5)
    assert response.status_code == 200
    assert "TyreTwin" in response.text
    assert 'id="uvIndex"' in response.text


def test_inject_endpoint_patches_state(served_app) -> None:
    url = served_app.dashboard_server.url
    response = requests.post(f"{url}/api/inject", json={"state": "CRITICAL", "structuralIntegrity": 30}, timeout=5)

    assert response.status_code == 200
    assert response.json()["data"]["structuralIntegrity"] == 30.0
    state = requests.get(f"{url}/api/state", timeout=5).json()["data"]
    assert state["state"] == "CRITICAL"
    assert state["waxReserve"] == 100.0


def test_params_endpoint_clamps_to_slider_ranges(served_app) -> None:
    url = served_app.dashboard_server.url
    response = requests.post(f"{url}/api/params", json={"uvIndex": 40, "isMoving": True, "speed": 90}, timeout=5)

    assert response.status_code == 200
    params = response.json()["params"]
    assert params["uvIndex"] == 12.0
    assert params["isMoving"] is True
    assert served_app.simulation.params.speed == 90.0


def test_bad_requests_return_400(served_app) -> None:
    url = served_app.dashboard_server.url
    assert requests.post(f"{url}/api/inject", json={"pressure": 1}, timeout=5).status_code == 400
    assert requests.post(f"{url}/api/properties", json={"rubberCompound": "Slick"}, timeout=5).status_code == 400
    assert requests.post(f"{url}/api/speed", json={}, timeout=5).status_code == 400
    assert requests.post(f"{url}/api/params", data="[1, 2]", timeout=5).status_code == 400
    assert requests.post(f"{url}/api/nope", json={}, timeout=5).status_code == 404


def test_speed_and_reset_endpoints(served_app) -> None:
    url = served_app.dashboard_server.url
    assert requests.post(f"{url}/api/speed", json={"multiplier": 9}, timeout=5).json() == {"speed_multiplier": 5.0}
    served_app.simulation.tick()
    data = requests.post(f"{url}/api/reset", json={}, timeout=5).json()["data"]
    assert data["rul"] == 1000
    assert served_app.simulation.history() == []


def test_analyze_endpoint_accepts_image(served_app) -> None:
    url = served_app.dashboard_server.url
    response = requests.post(f"{url}/api/analyze", json={"image": "data:image/jpeg;base64,QUJD"}, timeout=5)
    assert response.status_code == 202
    assert requests.post(f"{url}/api/analyze", json={"image": ""}, timeout=5).status_code == 400


def test_calibration_endpoint_scales_projected_range(served_app) -> None:
    url = served_app.dashboard_server.url
    tread = served_app.simulation.state.tread_depth

    assert requests.post(f"{url}/api/calibration", json={"calibration": 2.0}, timeout=5).json() == {
        "forecast_calibration": 2.0
    }
    state = requests.get(f"{url}/api/state", timeout=5).json()
    assert state["forecast_calibration"] == 2.0
    assert state["forecast"]["projected_range_km"] == math.floor((tread - MIN_TREAD_DEPTH) * FORECAST_KM_PER_MM * 2.0)

    assert requests.post(f"{url}/api/calibration", json={"calibration": 9}, timeout=5).json()["forecast_calibration"] == 2.0
    assert requests.post(f"{url}/api/calibration", json={"calibration": 0}, timeout=5).json()["forecast_calibration"] == 0.5
    assert requests.post(f"{url}/api/calibration", json={}, timeout=5).status_code == 400


def test_control_page_renders_model_text_without_html(served_app) -> None:
    html = requests.get(f"{served_app.dashboard_server.url}/", timeout=5).text
    assert "td.textContent = text" in html
    assert ".innerHTML = Object.entries" not in html
    assert 'id="calibration"' in html
