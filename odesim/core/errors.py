"""Exception hierarchy for the simulation engine."""


class SimulationError(Exception):
    """Base class for all odesim errors."""


class ConfigurationError(SimulationError, ValueError):
    """Invalid setup detected before any stepping (time grid, step size, initial state, names)."""


class DimensionMismatchError(SimulationError, ValueError):
    """A state vector changed length: usually a plant whose derivative has the wrong size."""
