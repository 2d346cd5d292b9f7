"""
State vector helpers.

A state is a 1D float numpy array of fixed length N. Arithmetic is plain numpy;
these helpers add the length preconditions that numpy broadcasting would skip.
"""

from typing import Sequence, Union

import numpy as np

from odesim.core.errors import ConfigurationError, DimensionMismatchError

StateLike = Union[Sequence[float], np.ndarray]


def as_state(x: StateLike, name: str = "state") -> np.ndarray:
    """Convert x to a fresh 1D float array. Raises ConfigurationError if not 1D or empty."""
    out = np.array(x, dtype=float)
    if out.ndim == 0:
        out = out.reshape(1)
    if out.ndim != 1:
        raise ConfigurationError(f"{name} must be 1D, got shape {out.shape}")
    if out.size == 0:
        raise ConfigurationError(f"{name} must have at least one component")
    return out


def check_same_length(expected: int, actual: np.ndarray, context: str = "state") -> np.ndarray:
    """Raise DimensionMismatchError unless actual is a 1D array of length expected."""
    arr = np.asarray(actual, dtype=float)
    if arr.ndim != 1 or arr.size != expected:
        raise DimensionMismatchError(
            f"{context}: expected length {expected}, got shape {arr.shape}"
        )
    return arr


def add(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Element-wise a + b for states of equal length."""
    a = np.asarray(a, dtype=float)
    check_same_length(a.size, b, "add")
    return a + b


def scale(a: np.ndarray, c: float) -> np.ndarray:
    """c * a as a new state."""
    return float(c) * np.asarray(a, dtype=float)


def freeze(x: np.ndarray) -> np.ndarray:
    """Return a read-only copy of x."""
    out = np.array(x, dtype=float)
    out.flags.writeable = False
    return out
