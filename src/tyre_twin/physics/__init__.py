"""Tyre degradation model."""

from tyre_twin.physics.fracture import FractureMetrics, fracture_metrics
from tyre_twin.physics.forecast import projected_range_km, wear_rate_per_tick
from tyre_twin.physics.stepper import classify_health, estimate_rul, material_factors, step

__all__ = [
    "FractureMetrics",
    "classify_health",
    "estimate_rul",
    "fracture_metrics",
    "material_factors",
    "projected_range_km",
    "step",
    "wear_rate_per_tick",
]
