"""
Ready-made parametric plants.

Subclasses of Plant with derivative() already implemented; the user only sets
parameters. Useful as test systems or as a base to extend.
"""

from typing import Any, Dict, Type

import numpy as np

from odesim.core.errors import ConfigurationError
from odesim.physics.plant import Plant


class Pendulum(Plant):
    """
    Damped pendulum. State [theta, theta_dot];
    d theta/dt = theta_dot, d theta_dot/dt = -(g/l) sin(theta) - f * theta_dot.

    Mass does not enter the dynamics, only energy().
    """

    state_dim = 2

    def __init__(self, g: float = 9.81, l: float = 1.0, m: float = 1.0, f: float = 0.0) -> None:
        if l <= 0:
            raise ConfigurationError(f"pendulum length must be > 0, got {l}")
        self.g = float(g)
        self.l = float(l)
        self.m = float(m)
        self.f = float(f)

    def derivative(self, state: np.ndarray) -> np.ndarray:
        theta, theta_dot = self.check_state(state)
        return np.array([theta_dot, -(self.g / self.l) * np.sin(theta) - self.f * theta_dot])

    def energy(self, state: np.ndarray) -> float:
        """Kinetic + potential energy (zero at the bottom, at rest)."""
        theta, theta_dot = state[0], state[1]
        kinetic = 0.5 * self.m * self.l ** 2 * theta_dot ** 2
        potential = self.m * self.g * self.l * (1.0 - np.cos(theta))
        return float(kinetic + potential)

    def get_params(self) -> Dict[str, Any]:
        return {"g": self.g, "l": self.l, "m": self.m, "f": self.f}


class HarmonicOscillator(Plant):
    """
    Harmonic oscillator: d²x/dt² + omega² x = 0.
    State [pos, vel]; derivative: [vel, -omega²*pos].
    """

    state_dim = 2

    def __init__(self, omega: float = 1.0) -> None:
        self.omega = float(omega)
        self.omega_sq = self.omega ** 2

    def derivative(self, state: np.ndarray) -> np.ndarray:
        x1, x2 = self.check_state(state)
        return np.array([x2, -self.omega_sq * x1])

    def energy(self, state: np.ndarray) -> float:
        return float(0.5 * state[1] ** 2 + 0.5 * self.omega_sq * state[0] ** 2)

    def exact_solution(self, state0: np.ndarray, t: float) -> np.ndarray:
        """Closed-form state at time t starting from state0 (omega > 0)."""
        x0, v0 = float(state0[0]), float(state0[1])
        w = self.omega
        c, s = np.cos(w * t), np.sin(w * t)
        return np.array([x0 * c + v0 / w * s, -x0 * w * s + v0 * c])

    def get_params(self) -> Dict[str, Any]:
        return {"omega": self.omega}


class MassSpringDamper(Plant):
    """
    Mechanical oscillator: m*ddx + c*dx + k*x = 0.
    State [pos, vel]; derivative: [vel, (-k*pos - c*vel) / m].
    """

    state_dim = 2

    def __init__(self, m: float = 1.0, k: float = 1.0, c: float = 0.1) -> None:
        if m <= 0:
            raise ConfigurationError(f"mass must be > 0, got {m}")
        self.m = float(m)
        self.k = float(k)
        self.c = float(c)

    def derivative(self, state: np.ndarray) -> np.ndarray:
        pos, vel = self.check_state(state)
        acc = (-self.k * pos - self.c * vel) / self.m
        return np.array([vel, acc])

    def get_params(self) -> Dict[str, Any]:
        return {"m": self.m, "k": self.k, "c": self.c}


class ExponentialDecay(Plant):
    """dx/dt = -rate * x, element-wise on a state of any length."""

    def __init__(self, rate: float = 1.0) -> None:
        self.rate = float(rate)

    def derivative(self, state: np.ndarray) -> np.ndarray:
        return -self.rate * self.check_state(state)

    def exact_solution(self, state0: np.ndarray, t: float) -> np.ndarray:
        return np.asarray(state0, dtype=float) * np.exp(-self.rate * t)

    def get_params(self) -> Dict[str, Any]:
        return {"rate": self.rate}


class FreeParticle(Plant):
    """
    Constant acceleration: state [pos, vel]; derivative [vel, accel].
    Every integrator of order >= 2 is exact on this plant.
    """

    state_dim = 2

    def __init__(self, accel: float = 0.0) -> None:
        self.accel = float(accel)

    def derivative(self, state: np.ndarray) -> np.ndarray:
        vel = self.check_state(state)[1]
        return np.array([vel, self.accel])

    def get_params(self) -> Dict[str, Any]:
        return {"accel": self.accel}


PLANTS: Dict[str, Type[Plant]] = {
    "pendulum": Pendulum,
    "harmonic_oscillator": HarmonicOscillator,
    "mass_spring_damper": MassSpringDamper,
    "exponential_decay": ExponentialDecay,
    "free_particle": FreeParticle,
}


def register_plant(name: str):
    """Class decorator making a plant constructible from config by name."""

    def decorator(cls: Type[Plant]) -> Type[Plant]:
        PLANTS[name.strip().lower()] = cls
        return cls

    return decorator


def plant_name(plant: Plant) -> str:
    """Registry name of plant's class. Raises ConfigurationError if unregistered."""
    for name, cls in PLANTS.items():
        if type(plant) is cls:
            return name
    raise ConfigurationError(f"{type(plant).__name__} is not a registered plant")


def make_plant(name: str, **params: Any) -> Plant:
    """Instantiate a registered plant by name."""
    key = name.strip().lower()
    if key not in PLANTS:
        raise ConfigurationError(f"Unknown plant {name!r}; available: {sorted(PLANTS)}")
    try:
        return PLANTS[key](**params)
    except TypeError as e:
        raise ConfigurationError(f"Bad parameters for plant {name!r}: {e}") from e
