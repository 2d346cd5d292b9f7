"""
odesim: fixed-step simulation of continuous-time dynamical systems.
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from odesim.core import (
    ConfigurationError,
    DimensionMismatchError,
    Simulation,
    SimulationError,
    TimeSpec,
    Trajectory,
    simulation_from_config,
    simulation_to_config,
)
from odesim.physics import EulerIntegrator, Plant, RK4Integrator
from odesim import systems  # noqa: F401  (registers coupled_oscillators)

__all__ = [
    "__version__",
    "Simulation",
    "Trajectory",
    "TimeSpec",
    "Plant",
    "EulerIntegrator",
    "RK4Integrator",
    "simulation_from_config",
    "simulation_to_config",
    "SimulationError",
    "ConfigurationError",
    "DimensionMismatchError",
]
