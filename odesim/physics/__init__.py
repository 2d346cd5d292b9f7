"""
Physics: plants and numerical integrators.

Hierarchy:
  - plant: Plant interface and FunctionPlant (derivative from a callable)
  - integrators: fixed-step explicit integration (Euler, Heun, Midpoint, RK4)
  - library: ready-made parametric plants (Pendulum, HarmonicOscillator, ...)
  - compose: plant composition (ParallelPlant)
"""

# --- Plant interface ---
from odesim.physics.plant import FunctionPlant, Plant

# --- Integrators (numerical level) ---
from odesim.physics.integrators import (
    INTEGRATORS,
    EulerIntegrator,
    HeunIntegrator,
    Integrator,
    MidpointIntegrator,
    RK4Integrator,
    euler_step,
    get_integrator,
    heun_step,
    midpoint_step,
    register_integrator,
    rk4_step,
)

# --- Library (parametric plants) ---
from odesim.physics.library import (
    PLANTS,
    ExponentialDecay,
    FreeParticle,
    HarmonicOscillator,
    MassSpringDamper,
    Pendulum,
    make_plant,
    register_plant,
)

# --- Composition ---
from odesim.physics.compose import ParallelPlant

__all__ = [
    # Plant
    "Plant",
    "FunctionPlant",
    # Integrators
    "Integrator",
    "EulerIntegrator",
    "HeunIntegrator",
    "MidpointIntegrator",
    "RK4Integrator",
    "euler_step",
    "heun_step",
    "midpoint_step",
    "rk4_step",
    "INTEGRATORS",
    "get_integrator",
    "register_integrator",
    # Library
    "Pendulum",
    "HarmonicOscillator",
    "MassSpringDamper",
    "ExponentialDecay",
    "FreeParticle",
    "PLANTS",
    "make_plant",
    "register_plant",
    # Composition
    "ParallelPlant",
]
