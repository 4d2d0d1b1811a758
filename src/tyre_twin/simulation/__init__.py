"""Simulation state owner and tick loop."""

from tyre_twin.simulation.engine import TyreSimulation
from tyre_twin.simulation.scheduler import TickScheduler

__all__ = ["TickScheduler", "TyreSimulation"]
