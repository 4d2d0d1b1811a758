from __future__ import annotations

from threading import Event, Lock
from typing import Iterator

from tyre_twin.constants import BASE_TICK_MS, MIN_SPEED_MULTIPLIER


class TickScheduler:
    """Fixed-cadence tick source.

    The interval is ``base_tick_ms / max(0.1, speed_multiplier)``. Changing
    the multiplier (or anything the tick closes over) re-arms the timer: the
    pending wait is abandoned and a full new interval starts, so a change
    never lands in the middle of a tick.
    """

    def __init__(self, base_tick_ms: float = BASE_TICK_MS, speed_multiplier: float = 1.0) -> None:
        self.base_tick_ms = base_tick_ms
        self._speed_multiplier = max(MIN_SPEED_MULTIPLIER, speed_multiplier)
        self._rearm = Event()
        self._stopped = Event()
        self._lock = Lock()

    @property
    def speed_multiplier(self) -> float:
        with self._lock:
            return self._speed_multiplier

    @property
    def interval_s(self) -> float:
        return (self.base_tick_ms / self.speed_multiplier) / 1000.0

    def set_speed_multiplier(self, multiplier: float) -> None:
        with self._lock:
            self._speed_multiplier = max(MIN_SPEED_MULTIPLIER, float(multiplier))
        self.rearm()

    def rearm(self) -> None:
        self._rearm.set()

    def stop(self) -> None:
        self._stopped.set()
        self._rearm.set()

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    def stream(self) -> Iterator[int]:
        tick_index = 0
        while not self._stopped.is_set():
            interrupted = self._rearm.wait(self.interval_s)
            if self._stopped.is_set():
                break
            if interrupted:
                self._rearm.clear()
                continue
            tick_index += 1
            yield tick_index
