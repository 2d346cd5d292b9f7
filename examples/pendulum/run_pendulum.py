"""
Example: frictionless pendulum near equilibrium, Euler vs RK4 on the same grid.

RK4 keeps the oscillation amplitude (energy approximately conserved); explicit
Euler injects energy at every step and the amplitude grows.
Optional plots require: pip install odesim[plot]
"""

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from odesim import Simulation, TimeSpec
from odesim.analysis import energy_drift, peak_amplitude
from odesim.io import save_trajectory
from odesim.physics import Pendulum


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--steps", type=int, default=1000)
    parser.add_argument("--t-end", type=float, default=10.0)
    parser.add_argument("--friction", type=float, default=0.0)
    parser.add_argument("--theta0", type=float, default=0.0)
    parser.add_argument("--omega0", type=float, default=0.0001)
    parser.add_argument("--save", type=Path, default=None, help="directory for .npz trajectories")
    parser.add_argument("--plot", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

    plant = Pendulum(g=9.81, l=1.0, f=args.friction)
    timespec = TimeSpec(num_steps=args.steps, t_end=args.t_end)
    state0 = np.array([args.theta0, args.omega0])

    results = {}
    for name in ("euler", "rk4"):
        traj = Simulation(integrator=name, plant=plant, state0=state0, timespec=timespec).simulate()
        results[name] = traj
        first = peak_amplitude(traj, 0, t_stop=0.2 * args.t_end)
        last = peak_amplitude(traj, 0, t_start=0.8 * args.t_end)
        drift = energy_drift(traj, plant.energy)[-1]
        print(f"{name:>6}: amplitude {first:.3e} -> {last:.3e} (x{last / first:.2f}), energy drift {drift:+.2e}")
        if args.save is not None:
            save_trajectory(traj, args.save / f"pendulum_{name}")

    if args.plot:
        try:
            import matplotlib.pyplot as plt
            from odesim.systems import plot_comparison
        except ImportError:
            print("matplotlib not available, skip plots")
            return
        plot_comparison(
            [results["euler"], results["rk4"]],
            ["Euler", "RK4"],
            component=0,
            ylabel="theta [rad]",
            title="Pendulum: Euler vs RK4",
        )
        plt.tight_layout()
        plt.show()


if __name__ == "__main__":
    main()
