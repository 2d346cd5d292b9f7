"""
Oscillator systems: chains of coupled harmonic oscillators.

Builds on physics.library.HarmonicOscillator for multi-oscillator networks;
usable as the plant of any Simulation.
"""

from typing import Any, Dict

import numpy as np

from odesim.core.errors import ConfigurationError
from odesim.physics.library import register_plant
from odesim.physics.plant import Plant


@register_plant("coupled_oscillators")
class CoupledHarmonicOscillators(Plant):
    """
    Chain of N harmonic oscillators with nearest-neighbor coupling.

    State: [x1, v1, x2, v2, ..., xN, vN] (length 2*N).
    Dynamics: for each oscillator i (position xi, velocity vi),
      dxi/dt = vi
      dvi/dt = -omega^2 * xi + coupling * (x_{i+1} - 2*xi + x_{i-1})
    with free endpoints (no coupling beyond boundaries).
    """

    def __init__(self, n_oscillators: int, omega: float = 1.0, coupling: float = 0.1) -> None:
        """
        Args:
            n_oscillators: number of oscillators (N).
            omega: natural frequency (rad/s) for each oscillator (uniform).
            coupling: coupling strength between neighbors.
        """
        if int(n_oscillators) < 1:
            raise ConfigurationError(f"n_oscillators must be >= 1, got {n_oscillators}")
        self.n_oscillators = int(n_oscillators)
        self.omega = float(omega)
        self.omega_sq = self.omega ** 2
        self.coupling = float(coupling)

    @property
    def state_dim(self) -> int:
        return 2 * self.n_oscillators

    def derivative(self, state: np.ndarray) -> np.ndarray:
        n = self.n_oscillators
        x = self.check_state(state)
        pos = x[0::2]
        vel = x[1::2]
        # Laplacian with free ends
        lap = np.zeros(n)
        lap[:-1] += pos[1:] - pos[:-1]
        lap[1:] += pos[:-1] - pos[1:]
        dxdt = np.empty(2 * n)
        dxdt[0::2] = vel
        dxdt[1::2] = -self.omega_sq * pos + self.coupling * lap
        return dxdt

    def energy(self, state: np.ndarray) -> float:
        """Kinetic + on-site potential + spring energy of the couplings."""
        x = np.asarray(state, dtype=float)
        pos, vel = x[0::2], x[1::2]
        springs = 0.5 * self.coupling * np.sum(np.diff(pos) ** 2)
        return float(0.5 * np.sum(vel ** 2) + 0.5 * self.omega_sq * np.sum(pos ** 2) + springs)

    def get_params(self) -> Dict[str, Any]:
        return {"n_oscillators": self.n_oscillators, "omega": self.omega, "coupling": self.coupling}
