"""
Example: observed order of accuracy on the harmonic oscillator (exact solution known).

Halving dt should divide the endpoint error by ~2 for Euler, ~4 for Heun and
Midpoint, ~16 for RK4.
"""

import sys
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from odesim import Simulation, TimeSpec
from odesim.analysis import convergence_study
from odesim.physics import INTEGRATORS, HarmonicOscillator


def main() -> None:
    plant = HarmonicOscillator(omega=1.0)
    state0 = np.array([1.0, 0.0])
    t_end = 1.0
    reference = plant.exact_solution(state0, t_end)
    steps = [20, 40, 80, 160]

    for name in INTEGRATORS:
        study = convergence_study(
            lambda n: Simulation(name, plant, state0, TimeSpec(n, t_end)),
            steps,
            reference,
        )
        orders = ", ".join(f"{p:.2f}" for p in study["order"])
        print(f"{name:>8}: errors {['%.2e' % e for e in study['error']]}, observed order {orders}")


if __name__ == "__main__":
    main()
