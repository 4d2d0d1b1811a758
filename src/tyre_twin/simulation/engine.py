from __future__ import annotations

from collections import deque
from dataclasses import replace
from threading import Lock
from typing import Any, Deque, Dict, List, Mapping, Optional

from tyre_twin.constants import HISTORY_LIMIT
from tyre_twin.core.event_bus import EventBus
from tyre_twin.core.events import (
    PARAMS_CHANGED,
    PROPERTIES_CHANGED,
    STATE_INJECTED,
    STATE_RESET,
    TICK,
    Event,
)
from tyre_twin.models.tyre import SimulationParams, TyreProperties, TyreState
from tyre_twin.physics.stepper import step


class TyreSimulation:
    """Owns the current tyre record and its bounded history.

    Every transition replaces the record wholesale, so the lock only has to
    cover the swap. Events are published after the lock is released.
    """

    def __init__(
        self,
        event_bus: EventBus,
        params: SimulationParams | None = None,
        props: TyreProperties | None = None,
        initial_state: TyreState | None = None,
        history_limit: int = HISTORY_LIMIT,
    ) -> None:
        self.event_bus = event_bus
        self._params = params or SimulationParams()
        self._props = props or TyreProperties()
        self._state = initial_state or TyreState.initial(self._props)
        self._history: Deque[TyreState] = deque(maxlen=history_limit)
        self._tick_count = 0
        self._lock = Lock()

    @property
    def state(self) -> TyreState:
        with self._lock:
            return self._state

    @property
    def params(self) -> SimulationParams:
        with self._lock:
            return replace(self._params)

    @property
    def props(self) -> TyreProperties:
        with self._lock:
            return self._props

    @property
    def tick_count(self) -> int:
        with self._lock:
            return self._tick_count

    def history(self) -> List[TyreState]:
        with self._lock:
            return list(self._history)

    def tick(self) -> TyreState:
        with self._lock:
            updated = step(self._state, self._params, self._props)
            self._state = updated
            self._history.append(updated)
            self._tick_count += 1
            tick_count = self._tick_count
        self.event_bus.publish(Event(name=TICK, payload={"state": updated, "tick_count": tick_count}))
        return updated

    def inject(self, overrides: Mapping[str, Any], source: str = "manual") -> TyreState:
        """Overwrite a subset of fields outside the normal tick.

        Dependent fields (health, RUL) are not re-derived; the next tick
        recomputes them from the patched values.
        """
        with self._lock:
            patched = self._state.patch(overrides)
            self._state = patched
        self.event_bus.publish(
            Event(name=STATE_INJECTED, payload={"state": patched, "overrides": dict(overrides), "source": source})
        )
        return patched

    def reset(self, params: Optional[SimulationParams] = None) -> TyreState:
        with self._lock:
            self._state = TyreState.initial(self._props)
            self._history.clear()
            self._tick_count = 0
            if params is not None:
                self._params = params
            fresh = self._state
        self.event_bus.publish(Event(name=STATE_RESET, payload={"state": fresh}))
        return fresh

    def set_params(self, params: SimulationParams) -> None:
        with self._lock:
            self._params = params
        self.event_bus.publish(Event(name=PARAMS_CHANGED, payload={"params": params}))

    def set_properties(self, props: TyreProperties) -> None:
        with self._lock:
            self._props = props
        self.event_bus.publish(Event(name=PROPERTIES_CHANGED, payload={"props": props}))

    def snapshot(self) -> Dict[str, Any]:
        """Persistable view: ``{params, data, props}``."""
        with self._lock:
            return {
                "params": self._params.to_dict(),
                "data": self._state.to_dict(),
                "props": self._props.to_dict(),
            }
