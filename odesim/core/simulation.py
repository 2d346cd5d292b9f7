"""Simulation driver: time loop over a fixed grid and trajectory collection."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import numpy as np

from odesim.core.errors import ConfigurationError
from odesim.core.state import StateLike, as_state, check_same_length, freeze
from odesim.core.timespec import TimeSpec
from odesim.physics.integrators import Integrator, get_integrator
from odesim.physics.plant import Plant

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Trajectory:
    """
    Output of a run: times (num_steps + 1,) and states (num_steps + 1, N).

    states[0] is the initial state, states[i] the state after i steps.
    Both arrays are read-only. Unpacks as (times, states).
    """

    times: np.ndarray
    states: np.ndarray
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        times = freeze(np.asarray(self.times, dtype=float).ravel())
        states = np.asarray(self.states, dtype=float)
        if states.ndim == 1:
            states = states.reshape(-1, 1)
        if states.ndim != 2 or states.shape[0] != times.size:
            raise ConfigurationError(
                f"states must have shape ({times.size}, N), got {states.shape}"
            )
        object.__setattr__(self, "times", times)
        object.__setattr__(self, "states", freeze(states))

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter((self.times, self.states))

    def __len__(self) -> int:
        return self.times.size

    @property
    def num_steps(self) -> int:
        return self.times.size - 1

    @property
    def state_dim(self) -> int:
        return self.states.shape[1]

    @property
    def t_end(self) -> float:
        return float(self.times[-1])

    @property
    def final_state(self) -> np.ndarray:
        return self.states[-1]

    def component(self, index: int) -> np.ndarray:
        """Time series of one state component."""
        return self.states[:, index]

    def samples(self) -> Iterator[Tuple[float, np.ndarray]]:
        """Iterate (t, state) pairs."""
        for t, s in zip(self.times, self.states):
            yield float(t), s

    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self.states)))

    def to_dict(self) -> Dict[str, np.ndarray]:
        return {"time": self.times, "state": self.states}

    def to_csv(
        self,
        path: Union[str, Path],
        state_names: Optional[List[str]] = None,
        delimiter: str = ",",
    ) -> None:
        """
        Export to CSV: one row per time sample, columns time, then one per state component.
        """
        path = Path(path)
        names = list(state_names) if state_names else []
        while len(names) < self.state_dim:
            names.append(f"x{len(names)}")
        header = delimiter.join(["time"] + names[: self.state_dim])
        rows = [
            delimiter.join([repr(float(t))] + [repr(float(v)) for v in s])
            for t, s in self.samples()
        ]
        path.write_text(header + "\n" + "\n".join(rows) + "\n", encoding="utf-8")


@dataclass(frozen=True, eq=False)
class Simulation:
    """
    Configuration of one run: integrator, plant, initial state and time grid.

    Construction validates everything that can be checked before stepping,
    including one derivative evaluation at state0 to catch a plant whose
    output length differs from the state length. simulate() never mutates
    the configuration, so repeated runs give identical output.

    Args:
        integrator: Integrator instance or registered name ("euler", "rk4", ...).
        plant: object with derivative(state) -> state.
        state0: initial state (any 1D sequence of floats).
        timespec: TimeSpec, or a (num_steps, t_end) pair.
    """

    integrator: Union[Integrator, str]
    plant: Plant
    state0: StateLike
    timespec: Union[TimeSpec, Tuple[int, float]]

    def __post_init__(self) -> None:
        object.__setattr__(self, "integrator", get_integrator(self.integrator))
        if not callable(getattr(self.plant, "derivative", None)):
            raise ConfigurationError(f"plant {self.plant!r} has no derivative(state) method")
        object.__setattr__(self, "state0", freeze(as_state(self.state0, "state0")))
        timespec = self.timespec
        if not isinstance(timespec, TimeSpec):
            try:
                num_steps, t_end = timespec
            except (TypeError, ValueError):
                raise ConfigurationError(
                    f"timespec must be a TimeSpec or (num_steps, t_end), got {timespec!r}"
                )
            timespec = TimeSpec(num_steps=num_steps, t_end=t_end)
        object.__setattr__(self, "timespec", timespec)
        expected = getattr(self.plant, "state_dim", None)
        if expected is not None:
            check_same_length(int(expected), self.state0, f"{type(self.plant).__name__} state0")
        check_same_length(
            self.state0.size,
            self.plant.derivative(self.state0.copy()),
            f"{type(self.plant).__name__}.derivative",
        )

    @property
    def dt(self) -> float:
        return self.timespec.dt

    @property
    def state_dim(self) -> int:
        return self.state0.size

    def simulate(self) -> Trajectory:
        """
        Run the integrator over the time grid.

        Returns:
            Trajectory with num_steps + 1 samples; unpacks as (times, states).
        """
        n_steps = self.timespec.num_steps
        dt = self.timespec.dt
        logger.debug(
            "simulate: %s on %r, %d steps, dt=%g",
            type(self.integrator).__name__, self.plant, n_steps, dt,
        )
        states = np.empty((n_steps + 1, self.state_dim))
        states[0] = self.state0
        x = self.state0.copy()
        context = f"{type(self.integrator).__name__}.advance"
        for i in range(1, n_steps + 1):
            x = check_same_length(self.state_dim, self.integrator.advance(self.plant, x, dt), context)
            states[i] = x
        traj = Trajectory(
            times=self.timespec.times(),
            states=states,
            metadata={
                "integrator": getattr(self.integrator, "name", type(self.integrator).__name__),
                "dt": dt,
            },
        )
        if not traj.is_finite():
            bad = int(np.argmax(~np.all(np.isfinite(states), axis=1)))
            logger.warning(
                "simulate: non-finite state from step %d (t=%g); "
                "consider a smaller dt or a higher-order integrator",
                bad, traj.times[bad],
            )
        logger.debug("simulate: done, final state %s", traj.final_state)
        return traj
