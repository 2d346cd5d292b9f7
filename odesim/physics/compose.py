"""
Plant composition.

Builds a larger state from independent plants without rewriting equations:
the composite state is the concatenation of the sub-states.
"""

from typing import Any, Dict, List, Sequence

import numpy as np

from odesim.core.errors import ConfigurationError, DimensionMismatchError
from odesim.core.state import check_same_length
from odesim.physics.plant import Plant


class ParallelPlant(Plant):
    """
    Independent plants side by side.

    Composite state: x = [x1, x2, ...] with xi of length state_dims[i].
    Derivative: [f1(x1), f2(x2), ...].
    """

    def __init__(self, plants: Sequence[Plant], state_dims: Sequence[int]) -> None:
        """
        Args:
            plants: sub-plants, in state order.
            state_dims: state length of each sub-plant.
        """
        if len(plants) == 0:
            raise ConfigurationError("ParallelPlant needs at least one plant")
        if len(plants) != len(state_dims):
            raise ConfigurationError(
                f"got {len(plants)} plants but {len(state_dims)} state dimensions"
            )
        if any(int(d) < 1 for d in state_dims):
            raise ConfigurationError(f"state dimensions must be >= 1, got {list(state_dims)}")
        self.plants: List[Plant] = list(plants)
        self.state_dims: List[int] = [int(d) for d in state_dims]
        self._offsets = np.concatenate([[0], np.cumsum(self.state_dims)]).astype(int)

    @property
    def state_dim(self) -> int:
        return int(self._offsets[-1])

    def split(self, state: np.ndarray) -> List[np.ndarray]:
        """Sub-states of a composite state."""
        state = np.asarray(state, dtype=float)
        if state.ndim != 1 or state.size != self.state_dim:
            raise DimensionMismatchError(
                f"state must have length {self.state_dim}, got shape {state.shape}"
            )
        return [state[a:b] for a, b in zip(self._offsets[:-1], self._offsets[1:])]

    def derivative(self, state: np.ndarray) -> np.ndarray:
        parts = []
        for plant, x in zip(self.plants, self.split(state)):
            dx = check_same_length(x.size, plant.derivative(x), f"{type(plant).__name__}.derivative")
            parts.append(dx)
        return np.concatenate(parts)

    def get_params(self) -> Dict[str, Any]:
        return {"plants": self.plants, "state_dims": self.state_dims}
