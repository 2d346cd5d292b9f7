"""I/O: configurations (JSON) and trajectories (npz)."""

from odesim.io.serializers import load_config, load_trajectory, save_config, save_trajectory

__all__ = ["save_config", "load_config", "save_trajectory", "load_trajectory"]
