"""Simulation horizon: number of steps and end time, from which the fixed step size follows."""

import math
import numbers
from dataclasses import dataclass

import numpy as np

from odesim.core.errors import ConfigurationError


@dataclass(frozen=True)
class TimeSpec:
    """
    Fixed time grid [0, dt, ..., num_steps * dt] with dt = t_end / num_steps.

    Args:
        num_steps: number of integration steps (>= 1).
        t_end: total simulated time (> 0).
    """

    num_steps: int
    t_end: float

    def __post_init__(self) -> None:
        if isinstance(self.num_steps, bool) or not isinstance(self.num_steps, numbers.Integral):
            raise ConfigurationError(f"num_steps must be an integer, got {self.num_steps!r}")
        if self.num_steps < 1:
            raise ConfigurationError(f"num_steps must be >= 1, got {self.num_steps}")
        try:
            t_end = float(self.t_end)
        except (TypeError, ValueError):
            raise ConfigurationError(f"t_end must be a real number, got {self.t_end!r}")
        if not math.isfinite(t_end) or t_end <= 0.0:
            raise ConfigurationError(f"t_end must be finite and > 0, got {self.t_end}")
        object.__setattr__(self, "num_steps", int(self.num_steps))
        object.__setattr__(self, "t_end", t_end)
        if not self.dt > 0.0:
            raise ConfigurationError(f"step size underflows to {self.dt}")

    @classmethod
    def from_dt(cls, dt: float, t_end: float) -> "TimeSpec":
        """Grid with step size close to dt; t_end is kept exact, num_steps rounded."""
        if not math.isfinite(dt) or dt <= 0.0:
            raise ConfigurationError(f"dt must be finite and > 0, got {dt}")
        if not math.isfinite(t_end) or t_end <= 0.0:
            raise ConfigurationError(f"t_end must be finite and > 0, got {t_end}")
        return cls(num_steps=max(1, int(round(t_end / dt))), t_end=t_end)

    @property
    def dt(self) -> float:
        return self.t_end / self.num_steps

    def times(self) -> np.ndarray:
        """Time grid of length num_steps + 1: times[i] == i * dt."""
        return np.arange(self.num_steps + 1, dtype=float) * self.dt

    def to_dict(self) -> dict:
        return {"num_steps": self.num_steps, "t_end": self.t_end}
