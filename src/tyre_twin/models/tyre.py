from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, Mapping

from tyre_twin.constants import INITIAL_RUL_DAYS, INITIAL_TREAD_DEPTH, INITIAL_WAX_RESERVE


class TyreHealth(str, Enum):
    MINT = "MINT"  # protective bloom visible
    ACTIVE = "ACTIVE"  # deep black, bloom shed by driving
    WARNING = "WARNING"  # faded grey, low wax or low tread
    CRITICAL = "CRITICAL"  # cracking or tread worn out


class RubberCompound(str, Enum):
    SOFT = "Soft (Sport)"
    MEDIUM = "Medium (All-Season)"
    HARD = "Hard (Eco/Touring)"


class AntiozonantType(str, Enum):
    PPD_6 = "6PPD"
    PPD_77 = "77PD"
    NATURAL_WAX = "Natural Wax"


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _wire_keys(cls: type) -> Dict[str, str]:
    return {_camel(f.name): f.name for f in fields(cls)}


@dataclass(slots=True)
class SimulationParams:
    """Operator-controlled environment."""

    uv_index: float = 5.0
    ozone_level: float = 40.0  # ppb
    temperature: float = 25.0  # °C
    is_moving: bool = False
    speed: float = 0.0  # km/h

    def to_dict(self) -> Dict[str, Any]:
        return {_camel(k): v for k, v in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SimulationParams":
        return cls(**_coerce(cls, data))


@dataclass(frozen=True, slots=True)
class TyreProperties:
    """Static configuration of the simulated tyre."""

    curing_time: float = 18.0  # minutes
    antiozonant_type: AntiozonantType = AntiozonantType.PPD_6
    rubber_compound: RubberCompound = RubberCompound.MEDIUM
    initial_tread_depth: float = INITIAL_TREAD_DEPTH  # mm
    manufacturer_life: float = 50000.0  # km

    def to_dict(self) -> Dict[str, Any]:
        return {
            "curingTime": self.curing_time,
            "antiozonantType": self.antiozonant_type.value,
            "rubberCompound": self.rubber_compound.value,
            "initialTreadDepth": self.initial_tread_depth,
            "manufacturerLife": self.manufacturer_life,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TyreProperties":
        return cls(**_coerce(cls, data))


@dataclass(frozen=True, slots=True)
class TyreState:
    """One immutable snapshot of the evolving tyre record."""

    wax_reserve: float = INITIAL_WAX_RESERVE  # %
    surface_bloom: float = 0.0  # %
    oxidation_level: float = 0.0  # %
    structural_integrity: float = 100.0  # %
    tread_depth: float = INITIAL_TREAD_DEPTH  # mm
    mileage: float = 0.0  # km
    state: TyreHealth = TyreHealth.ACTIVE
    rul: int = INITIAL_RUL_DAYS  # days

    @classmethod
    def initial(cls, props: TyreProperties) -> "TyreState":
        return cls(tread_depth=props.initial_tread_depth)

    def patch(self, overrides: Mapping[str, Any]) -> "TyreState":
        """Replace a subset of fields without re-deriving the others."""
        return replace(self, **_coerce(TyreState, overrides))

    def to_dict(self) -> Dict[str, Any]:
        data = {_camel(f.name): getattr(self, f.name) for f in fields(self)}
        data["state"] = self.state.value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TyreState":
        return cls(**_coerce(cls, data))


def _to_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in {"1", "true", "yes", "y"}


_CASTS = {
    "is_moving": _to_bool,
    "antiozonant_type": AntiozonantType,
    "rubber_compound": RubberCompound,
    "state": TyreHealth,
    "rul": int,
}


def _coerce(cls: type, data: Mapping[str, Any]) -> Dict[str, Any]:
    """Map camelCase or snake_case keys onto dataclass fields with typed values."""
    wire = _wire_keys(cls)
    names = set(wire.values())
    out: Dict[str, Any] = {}
    for key, value in data.items():
        name = wire.get(key, key)
        if name not in names:
            raise ValueError(f"Unknown {cls.__name__} field: {key}")
        cast = _CASTS.get(name, float)
        out[name] = cast(value)
    return out
