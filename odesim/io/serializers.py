"""Save and load simulation configurations and trajectories."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import numpy as np

from odesim.core.simulation import Trajectory

logger = logging.getLogger(__name__)


def _to_builtin(d: Any) -> Any:
    """Convert numpy values (recursively) to JSON-serializable Python types."""
    if isinstance(d, np.ndarray):
        return d.tolist()
    if isinstance(d, dict):
        return {k: _to_builtin(v) for k, v in d.items()}
    if isinstance(d, (list, tuple)):
        return [_to_builtin(x) for x in d]
    if isinstance(d, (np.floating, np.integer)):
        return float(d) if isinstance(d, np.floating) else int(d)
    return d


def save_config(config: Dict[str, Any], path: Union[str, Path]) -> None:
    """
    Save a configuration (dict) to JSON.
    Numpy arrays are converted to lists.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(_to_builtin(config), f, indent=2, ensure_ascii=False)
    logger.info("Saved config to %s", path)


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a configuration from JSON."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _meta_path(path: Path) -> Path:
    return path.with_suffix(".meta.json")


def save_trajectory(trajectory: Trajectory, path: Union[str, Path]) -> None:
    """
    Save a trajectory: arrays to .npz, metadata to .meta.json next to it.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    np.savez(path.with_suffix(".npz"), times=trajectory.times, states=trajectory.states)
    save_config(dict(trajectory.metadata), _meta_path(path))
    logger.info("Saved trajectory (%d samples) to %s", len(trajectory), path.with_suffix(".npz"))


def load_trajectory(path: Union[str, Path]) -> Trajectory:
    """Load a trajectory saved with save_trajectory."""
    path = Path(path)
    with np.load(path.with_suffix(".npz")) as data:
        times = data["times"]
        states = data["states"]
    meta_path = _meta_path(path)
    metadata = load_config(meta_path) if meta_path.exists() else {}
    return Trajectory(times=times, states=states, metadata=metadata)
