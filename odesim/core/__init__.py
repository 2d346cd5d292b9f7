"""Core: state vectors, time grid, simulation driver and errors."""

from odesim.core.errors import ConfigurationError, DimensionMismatchError, SimulationError
from odesim.core.state import add, as_state, check_same_length, scale
from odesim.core.timespec import TimeSpec
from odesim.core.simulation import Simulation, Trajectory
from odesim.core.config import simulation_from_config, simulation_to_config

__all__ = [
    "SimulationError",
    "ConfigurationError",
    "DimensionMismatchError",
    "as_state",
    "add",
    "scale",
    "check_same_length",
    "TimeSpec",
    "Simulation",
    "Trajectory",
    "simulation_from_config",
    "simulation_to_config",
]
