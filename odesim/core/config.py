"""
Build a Simulation from a plain dict (e.g. loaded from JSON) and back.

Format:
    {
      "integrator": "rk4",
      "plant": {"type": "pendulum", "params": {"g": 9.81, "l": 1.0}},
      "state0": [0.0, 0.0001],
      "time": {"num_steps": 1000, "t_end": 10.0}
    }
"time" may also be given as {"dt": ..., "t_end": ...}.
"""

from typing import Any, Dict

from odesim.core.errors import ConfigurationError
from odesim.core.simulation import Simulation
from odesim.core.timespec import TimeSpec
from odesim.physics.library import make_plant, plant_name


def _require(config: Dict[str, Any], key: str) -> Any:
    if key not in config:
        raise ConfigurationError(f"config is missing {key!r}")
    return config[key]


def timespec_from_config(time_cfg: Dict[str, Any]) -> TimeSpec:
    """TimeSpec from {"num_steps", "t_end"} or {"dt", "t_end"}."""
    if not isinstance(time_cfg, dict):
        raise ConfigurationError(f"'time' must be a mapping, got {time_cfg!r}")
    t_end = _require(time_cfg, "t_end")
    if "num_steps" in time_cfg:
        return TimeSpec(num_steps=time_cfg["num_steps"], t_end=t_end)
    if "dt" in time_cfg:
        return TimeSpec.from_dt(float(time_cfg["dt"]), float(t_end))
    raise ConfigurationError("'time' needs 'num_steps' or 'dt'")


def simulation_from_config(config: Dict[str, Any]) -> Simulation:
    """Construct a Simulation from a config dict. Raises ConfigurationError on bad input."""
    plant_cfg = _require(config, "plant")
    if isinstance(plant_cfg, str):
        plant_cfg = {"type": plant_cfg}
    if not isinstance(plant_cfg, dict):
        raise ConfigurationError(f"'plant' must be a name or a mapping, got {plant_cfg!r}")
    plant = make_plant(_require(plant_cfg, "type"), **plant_cfg.get("params", {}))
    return Simulation(
        integrator=config.get("integrator", "rk4"),
        plant=plant,
        state0=_require(config, "state0"),
        timespec=timespec_from_config(_require(config, "time")),
    )


def simulation_to_config(sim: Simulation) -> Dict[str, Any]:
    """Inverse of simulation_from_config, for registered plants and integrators."""
    name = getattr(sim.integrator, "name", "")
    if not name:
        raise ConfigurationError(f"integrator {sim.integrator!r} has no registry name")
    return {
        "integrator": name,
        "plant": {"type": plant_name(sim.plant), "params": sim.plant.get_params()},
        "state0": sim.state0.tolist(),
        "time": sim.timespec.to_dict(),
    }
