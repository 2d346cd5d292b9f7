"""Tests for config-driven construction and JSON / npz persistence."""

import json

import numpy as np
import pytest

from odesim import Simulation, TimeSpec, simulation_from_config, simulation_to_config
from odesim.core.errors import ConfigurationError
from odesim.io import load_config, load_trajectory, save_config, save_trajectory
from odesim.physics import FunctionPlant, Pendulum, RK4Integrator
from odesim.systems import CoupledHarmonicOscillators

PENDULUM_CONFIG = {
    "integrator": "rk4",
    "plant": {"type": "pendulum", "params": {"g": 9.81, "l": 1.0, "m": 1.0, "f": 0.0}},
    "state0": [0.0, 0.0001],
    "time": {"num_steps": 1000, "t_end": 10.0},
}


def test_simulation_from_config() -> None:
    sim = simulation_from_config(PENDULUM_CONFIG)
    assert isinstance(sim.integrator, RK4Integrator)
    assert isinstance(sim.plant, Pendulum)
    assert sim.timespec == TimeSpec(1000, 10.0)
    np.testing.assert_array_equal(sim.state0, [0.0, 0.0001])


def test_config_round_trip() -> None:
    sim = simulation_from_config(PENDULUM_CONFIG)
    assert simulation_to_config(sim) == PENDULUM_CONFIG


def test_config_defaults_and_dt() -> None:
    sim = simulation_from_config(
        {"plant": "harmonic_oscillator", "state0": [1.0, 0.0], "time": {"dt": 0.1, "t_end": 2.0}}
    )
    assert isinstance(sim.integrator, RK4Integrator)
    assert sim.timespec.num_steps == 20


def test_config_coupled_oscillators() -> None:
    sim = simulation_from_config(
        {
            "integrator": "heun",
            "plant": {"type": "coupled_oscillators", "params": {"n_oscillators": 2}},
            "state0": [0.5, 0.0, -0.3, 0.0],
            "time": {"num_steps": 10, "t_end": 1.0},
        }
    )
    assert isinstance(sim.plant, CoupledHarmonicOscillators)
    assert sim.simulate().states.shape == (11, 4)


@pytest.mark.parametrize(
    "patch",
    [
        {"integrator": "rk45"},
        {"plant": {"type": "spring"}},
        {"plant": {"type": "pendulum", "params": {"length": 1.0}}},
        {"plant": 3},
        {"time": {"num_steps": 0, "t_end": 1.0}},
        {"time": {"t_end": 1.0}},
        {"time": [10, 1.0]},
        {"state0": []},
    ],
)
def test_bad_config_rejected(patch) -> None:
    config = dict(PENDULUM_CONFIG, **patch)
    with pytest.raises(ConfigurationError):
        simulation_from_config(config)


def test_missing_keys_rejected() -> None:
    for key in ("plant", "state0", "time"):
        config = {k: v for k, v in PENDULUM_CONFIG.items() if k != key}
        with pytest.raises(ConfigurationError):
            simulation_from_config(config)


def test_to_config_requires_registered_plant() -> None:
    sim = Simulation("rk4", FunctionPlant(lambda s: -s), [1.0], TimeSpec(5, 1.0))
    with pytest.raises(ConfigurationError):
        simulation_to_config(sim)


def test_save_load_config(tmp_path) -> None:
    path = tmp_path / "nested" / "sim.json"
    config = dict(PENDULUM_CONFIG, state0=np.array([0.0, 0.0001]))
    save_config(config, path)
    loaded = load_config(path)
    assert loaded == PENDULUM_CONFIG
    assert json.loads(path.read_text(encoding="utf-8"))["time"]["num_steps"] == 1000
    assert np.array_equal(
        simulation_from_config(loaded).simulate().states,
        simulation_from_config(PENDULUM_CONFIG).simulate().states,
    )


def test_save_load_trajectory(tmp_path) -> None:
    traj = simulation_from_config(dict(PENDULUM_CONFIG, time={"num_steps": 50, "t_end": 1.0})).simulate()
    save_trajectory(traj, tmp_path / "run")
    assert (tmp_path / "run.npz").exists()
    assert (tmp_path / "run.meta.json").exists()
    loaded = load_trajectory(tmp_path / "run")
    np.testing.assert_array_equal(loaded.times, traj.times)
    np.testing.assert_array_equal(loaded.states, traj.states)
    assert loaded.metadata["integrator"] == "rk4"
    assert loaded.metadata["dt"] == pytest.approx(0.02)


def test_config_state_length_mismatch_is_dimension_error() -> None:
    from odesim.core.errors import DimensionMismatchError

    with pytest.raises(DimensionMismatchError):
        simulation_from_config(dict(PENDULUM_CONFIG, state0=[0.0, 0.0, 0.0]))
