"""
Systems: ready-to-simulate multi-body dynamical systems.

_oscillators provides coupled oscillator chains. Use _utils for visualization
(phase portrait, time series, integrator comparison).
"""

from odesim.systems._oscillators import CoupledHarmonicOscillators
from odesim.systems._utils import (
    plot_comparison,
    plot_phase_portrait,
    plot_state_vs_time,
)

__all__ = [
    "CoupledHarmonicOscillators",
    "plot_phase_portrait",
    "plot_state_vs_time",
    "plot_comparison",
]
