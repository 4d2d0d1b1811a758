from __future__ import annotations

import math
from dataclasses import dataclass

from tyre_twin.constants import (
    AGGRESSION_PER_KMH,
    AGGRESSION_SPEED,
    ASSUMED_DAILY_KM,
    BLOOM_GAIN,
    BLOOM_SHED_PER_100KMH,
    CARCASS_EXPOSURE_PENALTY,
    CHEMICAL_RUL_BASE_DAYS,
    CHEMICAL_RUL_DAYS_PER_WAX,
    CRITICAL_INTEGRITY_THRESHOLD,
    DIFFUSION_FLOOR_RATE,
    DIFFUSION_REFERENCE_TEMP,
    DIFFUSION_TEMP_SCALE,
    KM_PER_TICK_PER_KMH,
    MAX_BLOOM_CAPACITY,
    MIN_TREAD_DEPTH,
    MINT_BLOOM_THRESHOLD,
    OXIDATION_COEFFICIENT,
    POOR_CURING_MINUTES,
    POOR_CURING_MULTIPLIER,
    ROT_OXIDATION_SCALE,
    ROT_OXIDATION_THRESHOLD,
    ROT_WAX_THRESHOLD,
    THERMAL_SOFTENING_PER_DEG,
    THERMAL_SOFTENING_TEMP,
    TREAD_WEAR_PER_KM,
    WARNING_TREAD_DEPTH,
    WARNING_WAX_THRESHOLD,
    WAX_CONSUMPTION,
    WAX_DEPLETION_PENALTY,
)
from tyre_twin.models.tyre import (
    AntiozonantType,
    RubberCompound,
    SimulationParams,
    TyreHealth,
    TyreProperties,
    TyreState,
)

# compound -> (wear multiplier, diffusion multiplier)
_COMPOUND_FACTORS = {
    RubberCompound.SOFT: (1.5, 1.2),  # porous, blooms easier, wears faster
    RubberCompound.MEDIUM: (1.0, 1.0),
    RubberCompound.HARD: (0.7, 0.8),  # dense
}
_FAST_MIGRATION_FACTOR = 1.1


@dataclass(frozen=True, slots=True)
class MaterialFactors:
    wear_multiplier: float
    diffusion_multiplier: float

    @property
    def wear_resistance(self) -> float:
        return 1.0 / self.wear_multiplier


def material_factors(props: TyreProperties) -> MaterialFactors:
    wear, diffusion = _COMPOUND_FACTORS[props.rubber_compound]
    if props.antiozonant_type is AntiozonantType.PPD_6:
        diffusion *= _FAST_MIGRATION_FACTOR
    return MaterialFactors(wear_multiplier=wear, diffusion_multiplier=diffusion)


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def diffusion_rate(temperature: float, wax_reserve: float, diffusion_multiplier: float) -> float:
    if temperature > DIFFUSION_REFERENCE_TEMP:
        base = (temperature - DIFFUSION_REFERENCE_TEMP) / DIFFUSION_TEMP_SCALE
    else:
        base = DIFFUSION_FLOOR_RATE
    return base * (wax_reserve / 100.0) * diffusion_multiplier


def tread_wear(distance_km: float, temperature: float, speed: float, wear_multiplier: float) -> float:
    thermal = 1.0 + max(0.0, temperature - THERMAL_SOFTENING_TEMP) * THERMAL_SOFTENING_PER_DEG
    aggression = 1.0 + max(0.0, speed - AGGRESSION_SPEED) * AGGRESSION_PER_KMH
    return distance_km * TREAD_WEAR_PER_KM * thermal * aggression * wear_multiplier


def classify_health(
    structural_integrity: float,
    wax_reserve: float,
    tread_depth: float,
    surface_bloom: float,
) -> TyreHealth:
    """First match wins: failure modes always outrank a healthy-looking bloom."""
    if structural_integrity < CRITICAL_INTEGRITY_THRESHOLD or tread_depth <= MIN_TREAD_DEPTH:
        return TyreHealth.CRITICAL
    if wax_reserve < WARNING_WAX_THRESHOLD or tread_depth < WARNING_TREAD_DEPTH:
        return TyreHealth.WARNING
    if surface_bloom > MINT_BLOOM_THRESHOLD:
        return TyreHealth.MINT
    return TyreHealth.ACTIVE


def estimate_rul(
    structural_integrity: float,
    wax_reserve: float,
    tread_depth: float,
    props: TyreProperties,
    factors: MaterialFactors | None = None,
) -> int:
    """Remaining useful life in days, the lower of the chemical and mechanical estimates."""
    factors = factors or material_factors(props)
    chemical = (structural_integrity / 100.0) * (wax_reserve * CHEMICAL_RUL_DAYS_PER_WAX) + CHEMICAL_RUL_BASE_DAYS

    usable_depth = props.initial_tread_depth - MIN_TREAD_DEPTH
    if usable_depth > 0.0:
        remaining_fraction = max(0.0, tread_depth - MIN_TREAD_DEPTH) / usable_depth
    else:
        remaining_fraction = 0.0
    remaining_km = remaining_fraction * props.manufacturer_life * factors.wear_resistance
    mechanical = remaining_km / ASSUMED_DAILY_KM

    return int(math.floor(max(0.0, min(chemical, mechanical))))


def step(state: TyreState, params: SimulationParams, props: TyreProperties) -> TyreState:
    """Advance the tyre record by one tick."""
    factors = material_factors(props)
    wax = _clamp(state.wax_reserve)
    bloom = _clamp(state.surface_bloom)
    oxidation = _clamp(state.oxidation_level)
    integrity = _clamp(state.structural_integrity)
    tread = max(0.0, state.tread_depth)
    mileage = state.mileage

    rate = diffusion_rate(params.temperature, wax, factors.diffusion_multiplier)
    if not params.is_moving:
        if wax > 0.0:
            bloom_increase = rate * BLOOM_GAIN
            bloom = min(MAX_BLOOM_CAPACITY, bloom + bloom_increase)
            wax = max(0.0, wax - bloom_increase * WAX_CONSUMPTION)
    else:
        bloom = max(0.0, bloom - (params.speed / 100.0) * BLOOM_SHED_PER_100KMH)
        distance_km = params.speed * KM_PER_TICK_PER_KMH
        mileage += distance_km
        tread = max(0.0, tread - tread_wear(distance_km, params.temperature, params.speed, factors.wear_multiplier))

    # bloom shields the compound from UV and ozone
    stress = params.uv_index / 10.0 + params.ozone_level / 200.0
    oxidation = _clamp(oxidation + stress * (1.0 - bloom / 100.0) * OXIDATION_COEFFICIENT)

    curing_multiplier = POOR_CURING_MULTIPLIER if props.curing_time < POOR_CURING_MINUTES else 1.0
    if oxidation > ROT_OXIDATION_THRESHOLD or wax < ROT_WAX_THRESHOLD:
        wax_penalty = WAX_DEPLETION_PENALTY if wax < ROT_WAX_THRESHOLD else 0.0
        integrity -= (oxidation / ROT_OXIDATION_SCALE + wax_penalty) * curing_multiplier
    if tread < MIN_TREAD_DEPTH:
        integrity -= CARCASS_EXPOSURE_PENALTY
    integrity = _clamp(integrity)

    return TyreState(
        wax_reserve=wax,
        surface_bloom=bloom,
        oxidation_level=oxidation,
        structural_integrity=integrity,
        tread_depth=tread,
        mileage=mileage,
        state=classify_health(integrity, wax, tread, bloom),
        rul=estimate_rul(integrity, wax, tread, props, factors),
    )
