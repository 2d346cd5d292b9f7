"""
Fixed-step explicit integrators: s_{n+1} = advance(plant, s_n, dt).

Functional level: *_step(f, x, dt) with f(x) -> dx/dt.
Object level: Integrator.advance(plant, state, dt), which also checks that
every derivative evaluation keeps the state length.
"""

import math
from abc import ABC, abstractmethod
from typing import Callable, Dict, Type, Union

import numpy as np

from odesim.core.errors import ConfigurationError
from odesim.core.state import check_same_length
from odesim.physics.plant import Plant

# Type for the ODE right-hand side: x -> dx/dt
RHS = Callable[[np.ndarray], np.ndarray]


def euler_step(f: RHS, x: np.ndarray, dt: float) -> np.ndarray:
    """Explicit Euler, order 1: x_{n+1} = x_n + dt * f(x_n)."""
    return x + dt * f(x)


def heun_step(f: RHS, x: np.ndarray, dt: float) -> np.ndarray:
    """Heun (improved Euler), order 2: Euler predictor + trapezoidal corrector."""
    k1 = f(x)
    k2 = f(x + dt * k1)
    return x + 0.5 * dt * (k1 + k2)


def midpoint_step(f: RHS, x: np.ndarray, dt: float) -> np.ndarray:
    """Midpoint (RK2): evaluation at interval center."""
    k1 = f(x)
    k2 = f(x + 0.5 * dt * k1)
    return x + dt * k2


def rk4_step(f: RHS, x: np.ndarray, dt: float) -> np.ndarray:
    """Classical Runge-Kutta 4, order 4."""
    k1 = f(x)
    k2 = f(x + 0.5 * dt * k1)
    k3 = f(x + 0.5 * dt * k2)
    k4 = f(x + dt * k3)
    return x + (dt / 6.0) * (k1 + 2 * k2 + 2 * k3 + k4)


def check_dt(dt: float) -> float:
    """Return dt as float; raise ConfigurationError unless finite and > 0."""
    dt = float(dt)
    if not math.isfinite(dt) or dt <= 0.0:
        raise ConfigurationError(f"dt must be finite and > 0, got {dt}")
    return dt


class Integrator(ABC):
    """
    Stateless stepping rule. Subclasses implement _step(f, x, dt) on a
    length-checked right-hand side.
    """

    name: str = ""
    order: int = 0
    stages: int = 0

    def advance(self, plant: Plant, state: np.ndarray, dt: float) -> np.ndarray:
        """State after one step of size dt; state is not modified."""
        dt = check_dt(dt)
        x = np.asarray(state, dtype=float)
        n = x.size

        def f(s: np.ndarray) -> np.ndarray:
            return check_same_length(n, plant.derivative(s), f"{type(plant).__name__}.derivative")

        return check_same_length(n, self._step(f, x, dt), f"{self.name} step")

    @abstractmethod
    def _step(self, f: RHS, x: np.ndarray, dt: float) -> np.ndarray:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class EulerIntegrator(Integrator):
    """Explicit Euler integrator, order 1."""

    name = "euler"
    order = 1
    stages = 1

    def _step(self, f: RHS, x: np.ndarray, dt: float) -> np.ndarray:
        return euler_step(f, x, dt)


class HeunIntegrator(Integrator):
    """Heun integrator, order 2."""

    name = "heun"
    order = 2
    stages = 2

    def _step(self, f: RHS, x: np.ndarray, dt: float) -> np.ndarray:
        return heun_step(f, x, dt)


class MidpointIntegrator(Integrator):
    """Midpoint integrator (RK2)."""

    name = "midpoint"
    order = 2
    stages = 2

    def _step(self, f: RHS, x: np.ndarray, dt: float) -> np.ndarray:
        return midpoint_step(f, x, dt)


class RK4Integrator(Integrator):
    """Runge-Kutta 4 integrator, order 4. Default choice."""

    name = "rk4"
    order = 4
    stages = 4

    def _step(self, f: RHS, x: np.ndarray, dt: float) -> np.ndarray:
        return rk4_step(f, x, dt)


INTEGRATORS: Dict[str, Type[Integrator]] = {
    cls.name: cls
    for cls in (EulerIntegrator, HeunIntegrator, MidpointIntegrator, RK4Integrator)
}


def register_integrator(cls: Type[Integrator]) -> Type[Integrator]:
    """Make a custom integrator available by its name (usable as class decorator)."""
    if not cls.name:
        raise ConfigurationError(f"{cls.__name__} has no name")
    INTEGRATORS[cls.name] = cls
    return cls


def get_integrator(choice: Union[str, Integrator, None] = None) -> Integrator:
    """
    Resolve an integrator from a name ("euler", "rk4", ...), a class or an instance.
    Classes are instantiated without arguments.
    None gives RK4.
    """
    if choice is None:
        return RK4Integrator()
    if isinstance(choice, type):
        if not callable(getattr(choice, "advance", None)):
            raise ConfigurationError(f"{choice.__name__} has no advance(plant, state, dt) method")
        try:
            return choice()
        except TypeError as e:
            raise ConfigurationError(f"Cannot instantiate integrator {choice.__name__}: {e}") from e
    if isinstance(choice, Integrator) or callable(getattr(choice, "advance", None)):
        return choice
    if isinstance(choice, str):
        key = choice.strip().lower()
        if key not in INTEGRATORS:
            raise ConfigurationError(
                f"Unknown integrator {choice!r}; available: {sorted(INTEGRATORS)}"
            )
        return INTEGRATORS[key]()
    raise ConfigurationError(f"Cannot build an integrator from {choice!r}")
