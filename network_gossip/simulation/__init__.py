"""
Simulation state and tick driver.
"""

from .state import (
    CONVERGENCE_THRESHOLD,
    NodeStatus,
    SimulationParams,
    SimulationState,
    SimulationStatus
)
from .controller import Controller, setup, run_tick

__all__ = [
    "CONVERGENCE_THRESHOLD",
    "NodeStatus",
    "SimulationParams",
    "SimulationState",
    "SimulationStatus",
    "Controller",
    "setup",
    "run_tick"
]
