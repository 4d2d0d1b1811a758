from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

TICK = "tick"
STATE_INJECTED = "state_injected"
STATE_RESET = "state_reset"
PARAMS_CHANGED = "params_changed"
PROPERTIES_CHANGED = "properties_changed"
SPEED_CHANGED = "speed_changed"
ANALYSIS_COMPLETED = "analysis_completed"
ANALYSIS_FAILED = "analysis_failed"


@dataclass(slots=True)
class Event:
    name: str
    payload: Dict[str, Any] = field(default_factory=dict)
