"""Analysis: accuracy and conservation metrics for trajectories."""

from odesim.analysis.accuracy import (
    convergence_study,
    endpoint_error,
    energy_drift,
    observed_order,
    peak_amplitude,
)

__all__ = [
    "endpoint_error",
    "observed_order",
    "convergence_study",
    "peak_amplitude",
    "energy_drift",
]
