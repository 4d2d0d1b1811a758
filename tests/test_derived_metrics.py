from __future__ import annotations

import pytest

from tyre_twin.models.tyre import SimulationParams, TyreState
from tyre_twin.physics.fracture import fracture_metrics, material_state
from tyre_twin.physics.forecast import projected_range_km, wear_rate_per_tick


def test_fresh_parked_tyre_is_ductile(parked) -> None:
    metrics = fracture_metrics(TyreState(), parked)
    assert metrics.brittleness == 0.0
    assert metrics.toughness_gc == 10.0
    assert metrics.stress_intensity == pytest.approx(0.1)
    assert metrics.crack_growth_rate == 0.0
    assert metrics.material_state == "Elastic (Ductile)"


def test_flex_drives_crack_growth(driving) -> None:
    metrics = fracture_metrics(TyreState(), driving)
    assert metrics.stress_intensity == pytest.approx(2.0)
    assert metrics.crack_growth_rate == pytest.approx(1.6)


def test_dry_rotted_tyre_is_brittle() -> None:
    params = SimulationParams(is_moving=True, speed=50.0)
    metrics = fracture_metrics(TyreState(oxidation_level=100.0, wax_reserve=0.0), params)
    assert metrics.brittleness == pytest.approx(1.0)
    assert metrics.toughness_gc == pytest.approx(0.0)
    assert metrics.crack_growth_rate == pytest.approx(10.0)
    assert metrics.material_state == "Brittle (Glassy)"


@pytest.mark.parametrize("value, label", [(0.4, "Elastic (Ductile)"), (0.55, "Viscoelastic (Transition)"), (0.71, "Brittle (Glassy)")])
def test_material_state_bands(value, label) -> None:
    assert material_state(value) == label


def test_projected_range() -> None:
    assert projected_range_km(1.6) == 0
    assert projected_range_km(1.0) == 0
    assert abs(projected_range_km(8.0) - 1280) <= 1
    assert projected_range_km(8.0, calibration=0.5) < projected_range_km(8.0)


def test_wear_rate_uses_instantaneous_delta_for_short_history() -> None:
    assert wear_rate_per_tick([]) == 0.0
    assert wear_rate_per_tick([TyreState(tread_depth=8.0)]) == 0.0
    history = [TyreState(tread_depth=8.0), TyreState(tread_depth=7.9)]
    assert wear_rate_per_tick(history) == pytest.approx(0.1)


def test_wear_rate_is_smoothed_over_five_ticks() -> None:
    history = [TyreState(tread_depth=8.0 - 0.01 * i) for i in range(10)]
    assert wear_rate_per_tick(history) == pytest.approx(0.008)
