"""Plant interface: a system defined by its state derivative ds/dt = derivative(s)."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

import numpy as np

from odesim.core.state import check_same_length


class Plant(ABC):
    """
    Base class for plants. Subclasses implement derivative() as a pure function
    of the state and of fixed parameters set in __init__.

    Time-varying systems can carry time as an extra state component with
    derivative 1.

    Plants with a fixed state length set state_dim; None accepts any length.
    """

    state_dim: Optional[int] = None

    @abstractmethod
    def derivative(self, state: np.ndarray) -> np.ndarray:
        """Instantaneous rate of change of each state component (same length as state)."""
        raise NotImplementedError("Subclasses must implement derivative(state).")

    def check_state(self, state: np.ndarray) -> np.ndarray:
        """state as a float array; DimensionMismatchError if its length differs from state_dim."""
        if self.state_dim is None:
            return np.asarray(state, dtype=float)
        return check_same_length(self.state_dim, state, f"{type(self).__name__} state")

    def get_params(self) -> Dict[str, Any]:
        """Fixed parameters of the plant (used by config serialization)."""
        return {}

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in self.get_params().items())
        return f"{type(self).__name__}({params})"


class FunctionPlant(Plant):
    """
    Plant from a plain callable fn(state) -> derivative.

    Extra keyword arguments are stored as parameters and passed to fn.
    """

    def __init__(self, fn: Callable[..., np.ndarray], **params: Any) -> None:
        self._fn = fn
        self._params = dict(params)

    def derivative(self, state: np.ndarray) -> np.ndarray:
        return np.asarray(self._fn(state, **self._params), dtype=float)

    def get_params(self) -> Dict[str, Any]:
        return dict(self._params)
