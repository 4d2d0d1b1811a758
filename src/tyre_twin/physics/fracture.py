from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict

from tyre_twin.models.tyre import SimulationParams, TyreState

HEALTHY_TOUGHNESS_KJ_M2 = 10.0
PARKED_STRESS_INTENSITY = 0.1


@dataclass(frozen=True, slots=True)
class FractureMetrics:
    brittleness: float  # 0-1
    toughness_gc: float  # kJ/m^2
    stress_intensity: float
    crack_growth_rate: float
    material_state: str

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


def material_state(brittleness: float) -> str:
    if brittleness > 0.7:
        return "Brittle (Glassy)"
    if brittleness > 0.4:
        return "Viscoelastic (Transition)"
    return "Elastic (Ductile)"


def fracture_metrics(state: TyreState, params: SimulationParams) -> FractureMetrics:
    """Wax keeps the rubber plastic, oxidation cross-linking embrittles it."""
    brittleness = min(1.0, (state.oxidation_level / 100.0) * 0.7 + ((100.0 - state.wax_reserve) / 100.0) * 0.3)
    toughness = HEALTHY_TOUGHNESS_KJ_M2 * (1.0 - brittleness)
    stress = params.speed / 50.0 if params.is_moving else PARKED_STRESS_INTENSITY
    # Paris-law style growth, only under flex
    growth = (stress**4) / max(0.1, toughness) if params.is_moving else 0.0
    return FractureMetrics(
        brittleness=brittleness,
        toughness_gc=toughness,
        stress_intensity=stress,
        crack_growth_rate=growth,
        material_state=material_state(brittleness),
    )
