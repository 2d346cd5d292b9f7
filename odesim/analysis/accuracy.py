"""
Accuracy and conservation metrics computed from trajectories.

The engine never flags numerical degradation itself; these helpers let the
caller measure it (endpoint error, observed order, amplitude, energy drift).
"""

from typing import Callable, Dict, List, Optional, Sequence

import numpy as np

from odesim.core.simulation import Simulation, Trajectory


def endpoint_error(trajectory: Trajectory, reference: np.ndarray, component: Optional[int] = None) -> float:
    """
    Error at t_end against a reference state.

    Args:
        trajectory: simulated run.
        reference: exact (or high-precision) state at t_end.
        component: if given, absolute error of that component only; otherwise Euclidean norm.
    """
    diff = np.asarray(trajectory.final_state) - np.asarray(reference, dtype=float)
    if component is not None:
        return float(abs(diff[component]))
    return float(np.linalg.norm(diff))


def observed_order(err_coarse: float, err_fine: float, refinement: float = 2.0) -> float:
    """Empirical order p from errors at dt and dt / refinement: p = log(e1/e2) / log(r)."""
    if err_coarse <= 0 or err_fine <= 0:
        return float("nan")
    return float(np.log(err_coarse / err_fine) / np.log(refinement))


def convergence_study(
    make_simulation: Callable[[int], Simulation],
    steps: Sequence[int],
    reference: np.ndarray,
    component: Optional[int] = None,
) -> Dict[str, List[float]]:
    """
    Run one simulation per step count and collect endpoint errors.

    Args:
        make_simulation: num_steps -> Simulation (same plant, state0 and t_end).
        steps: increasing step counts, e.g. [50, 100, 200].
        reference: exact state at t_end.

    Returns:
        {"num_steps", "dt", "error", "ratio", "order"}; ratio and order have one
        entry fewer (consecutive pairs).
    """
    dts: List[float] = []
    errors: List[float] = []
    for n in steps:
        sim = make_simulation(n)
        dts.append(sim.dt)
        errors.append(endpoint_error(sim.simulate(), reference, component))
    ratios = []
    orders = []
    for i in range(1, len(errors)):
        r = dts[i - 1] / dts[i]
        ratios.append(errors[i - 1] / errors[i] if errors[i] > 0 else float("inf"))
        orders.append(observed_order(errors[i - 1], errors[i], r))
    return {
        "num_steps": [float(n) for n in steps],
        "dt": dts,
        "error": errors,
        "ratio": ratios,
        "order": orders,
    }


def peak_amplitude(
    trajectory: Trajectory,
    component: int = 0,
    t_start: Optional[float] = None,
    t_stop: Optional[float] = None,
) -> float:
    """max |x_component| over samples with t_start <= t <= t_stop."""
    t = trajectory.times
    mask = np.ones(t.size, dtype=bool)
    if t_start is not None:
        mask &= t >= t_start
    if t_stop is not None:
        mask &= t <= t_stop
    if not np.any(mask):
        raise ValueError(f"no samples in [{t_start}, {t_stop}]")
    return float(np.max(np.abs(trajectory.states[mask, component])))


def energy_drift(trajectory: Trajectory, energy_fn: Callable[[np.ndarray], float]) -> np.ndarray:
    """Relative energy change E(t)/E(0) - 1 along the trajectory (absolute change if E(0) == 0)."""
    energy = np.array([energy_fn(s) for s in trajectory.states], dtype=float)
    e0 = energy[0]
    if e0 == 0:
        return energy - e0
    return energy / e0 - 1.0
