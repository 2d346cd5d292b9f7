"""
Plotting helpers for trajectories: phase portrait, components vs time,
and an overlay of several runs (e.g. Euler vs RK4 on the same grid).

Each helper takes a Trajectory, or raw (time, state) arrays for data that did
not come from Simulation.simulate(). Matplotlib is imported lazily; a missing
install raises ImportError only when a plot is requested.
"""

from typing import Any, List, Optional, Sequence, Tuple

import numpy as np


def _pyplot() -> Any:
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError("matplotlib is required for plotting (pip install odesim[plot]).")
    return plt


def _samples(
    trajectory: Optional[Any] = None,
    time: Optional[np.ndarray] = None,
    state: Optional[np.ndarray] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """(times, states) with states always 2D (samples x components)."""
    if trajectory is not None:
        times, states = trajectory
    elif time is not None and state is not None:
        times, states = time, state
    else:
        raise ValueError("Provide either trajectory= or (time=, state=).")
    times = np.asarray(times, dtype=float).ravel()
    states = np.asarray(states, dtype=float)
    if states.ndim == 1:
        states = states.reshape(-1, 1)
    return times, states


def _component_names(n: int, names: Optional[Sequence[str]]) -> List[str]:
    out = list(names or [])[:n]
    return out + [f"x{i}" for i in range(len(out), n)]


def plot_phase_portrait(
    trajectory: Optional[Any] = None,
    time: Optional[np.ndarray] = None,
    state: Optional[np.ndarray] = None,
    x_idx: int = 0,
    y_idx: int = 1,
    ax: Optional[Any] = None,
    xlabel: str = "x",
    ylabel: str = "v",
    title: str = "Phase portrait",
    **kwargs: Any,
) -> Any:
    """
    Plot component y_idx against component x_idx, with the initial state marked.

    For a pendulum run (state [theta, theta_dot]) the defaults give the usual
    angle / angular velocity portrait: a closed curve for RK4, an outward
    spiral for Euler at the same step size.

    Args:
        trajectory: result of Simulation.simulate().
        time, state: raw arrays, used when trajectory is None.
        x_idx, y_idx: state components on the horizontal and vertical axes.
        ax: matplotlib axes to draw on (new figure if None).
        **kwargs: passed to ax.plot().

    Returns:
        The matplotlib axes.
    """
    plt = _pyplot()
    _, states = _samples(trajectory, time, state)
    if max(x_idx, y_idx) >= states.shape[1]:
        raise ValueError(f"state has {states.shape[1]} components, cannot plot ({x_idx}, {y_idx})")
    if ax is None:
        _, ax = plt.subplots(1, 1, figsize=(6, 5))
    ax.plot(states[:, x_idx], states[:, y_idx], **kwargs)
    ax.plot(states[0, x_idx], states[0, y_idx], "o", color="black", markersize=4)
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    return ax


def plot_state_vs_time(
    trajectory: Optional[Any] = None,
    time: Optional[np.ndarray] = None,
    state: Optional[np.ndarray] = None,
    state_names: Optional[List[str]] = None,
    ax: Optional[Any] = None,
    title: str = "State vs time",
    **kwargs: Any,
) -> Any:
    """
    One subplot per state component against time; missing names default to x0, x1, ...

    Returns the new figure, or ax when one is given (all components then share it).
    """
    plt = _pyplot()
    times, states = _samples(trajectory, time, state)
    n = states.shape[1]
    names = _component_names(n, state_names)
    if ax is None:
        fig, axes = plt.subplots(n, 1, sharex=True, squeeze=False, figsize=(8, max(2 * n, 4)))
        axes = list(axes[:, 0])
    else:
        fig, axes = ax.figure, [ax] * n
    for a, name, series in zip(axes, names, states.T):
        a.plot(times, series, label=name, **kwargs)
        a.set_ylabel(name)
        a.legend(loc="upper right", fontsize=8)
        a.grid(True, alpha=0.3)
    axes[-1].set_xlabel("time")
    if title:
        fig.suptitle(title)
    return fig if ax is None else ax


def plot_comparison(
    trajectories: List[Any],
    labels: List[str],
    component: int = 0,
    ax: Optional[Any] = None,
    ylabel: str = "x0",
    title: str = "Integrator comparison",
) -> Any:
    """Overlay one state component from several trajectories (e.g. Euler vs RK4)."""
    plt = _pyplot()
    if len(trajectories) != len(labels):
        raise ValueError("need one label per trajectory")
    if ax is None:
        _, ax = plt.subplots(1, 1, figsize=(8, 4))
    for traj, label in zip(trajectories, labels):
        times, states = _samples(traj)
        ax.plot(times, states[:, component], label=label)
    ax.set_xlabel("time")
    ax.set_ylabel(ylabel)
    ax.set_title(title)
    ax.legend()
    ax.grid(True, alpha=0.3)
    return ax
