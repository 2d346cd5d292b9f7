"""Tests for fixed-step integrators: formulas, fixed points, order of accuracy, length checks."""

import numpy as np
import pytest

from odesim import Simulation, TimeSpec
from odesim.core.errors import ConfigurationError, DimensionMismatchError
from odesim.physics import (
    INTEGRATORS,
    EulerIntegrator,
    FunctionPlant,
    HarmonicOscillator,
    HeunIntegrator,
    Integrator,
    MidpointIntegrator,
    Pendulum,
    RK4Integrator,
    euler_step,
    get_integrator,
    register_integrator,
    rk4_step,
)

ALL_INTEGRATORS = [EulerIntegrator(), HeunIntegrator(), MidpointIntegrator(), RK4Integrator()]


class CountingPlant(FunctionPlant):
    """Linear plant dx/dt = -x that records how many times it was evaluated (test only)."""

    def __init__(self) -> None:
        super().__init__(lambda s: -s)
        self.calls = 0

    def derivative(self, state: np.ndarray) -> np.ndarray:
        self.calls += 1
        return super().derivative(state)


def test_euler_formula() -> None:
    plant = HarmonicOscillator(omega=2.0)
    x = np.array([1.0, 0.5])
    out = EulerIntegrator().advance(plant, x, 0.1)
    np.testing.assert_allclose(out, x + 0.1 * np.array([0.5, -4.0]))


def test_rk4_formula_matches_functional_step() -> None:
    plant = Pendulum(g=9.81, l=1.0, f=0.2)
    x = np.array([0.3, -0.1])
    out = RK4Integrator().advance(plant, x, 0.05)
    expected = rk4_step(plant.derivative, x, 0.05)
    np.testing.assert_array_equal(out, expected)


def test_rk4_exact_taylor_on_linear_decay() -> None:
    """For dx/dt = -x one RK4 step multiplies by 1 - h + h^2/2 - h^3/6 + h^4/24."""
    h = 0.2
    out = RK4Integrator().advance(FunctionPlant(lambda s: -s), np.array([1.0]), h)
    factor = 1 - h + h ** 2 / 2 - h ** 3 / 6 + h ** 4 / 24
    assert out[0] == pytest.approx(factor, rel=1e-14)


@pytest.mark.parametrize("integrator", ALL_INTEGRATORS, ids=lambda i: i.name)
def test_stages_match_derivative_evaluations(integrator: Integrator) -> None:
    plant = CountingPlant()
    integrator.advance(plant, np.array([1.0, 2.0]), 0.1)
    assert plant.calls == integrator.stages


@pytest.mark.parametrize("integrator", ALL_INTEGRATORS, ids=lambda i: i.name)
def test_zero_derivative_is_fixed_point(integrator: Integrator) -> None:
    plant = FunctionPlant(lambda s: np.zeros_like(s))
    x = np.array([0.3, -1.7, 42.0])
    np.testing.assert_array_equal(integrator.advance(plant, x, 0.25), x)


@pytest.mark.parametrize("integrator", [EulerIntegrator(), RK4Integrator()], ids=lambda i: i.name)
def test_pendulum_equilibrium_preserved(integrator: Integrator) -> None:
    x = np.array([0.0, 0.0])
    out = integrator.advance(Pendulum(f=0.5), x, 0.01)
    np.testing.assert_array_equal(out, x)


@pytest.mark.parametrize("integrator", ALL_INTEGRATORS, ids=lambda i: i.name)
def test_advance_does_not_mutate_input(integrator: Integrator) -> None:
    x = np.array([1.0, 0.0])
    before = x.copy()
    out = integrator.advance(HarmonicOscillator(), x, 0.1)
    np.testing.assert_array_equal(x, before)
    assert out is not x
    assert out.shape == x.shape


@pytest.mark.parametrize("dt", [0.0, -0.1, float("nan"), float("inf")])
def test_nonpositive_dt_rejected(dt: float) -> None:
    with pytest.raises(ConfigurationError):
        RK4Integrator().advance(HarmonicOscillator(), np.array([1.0, 0.0]), dt)


@pytest.mark.parametrize("integrator", ALL_INTEGRATORS, ids=lambda i: i.name)
def test_derivative_length_mismatch_detected(integrator: Integrator) -> None:
    longer = FunctionPlant(lambda s: np.zeros(s.size + 1))
    with pytest.raises(DimensionMismatchError):
        integrator.advance(longer, np.array([1.0, 2.0]), 0.1)
    # a length-1 derivative would broadcast silently in numpy
    scalar = FunctionPlant(lambda s: np.array([1.0]))
    with pytest.raises(DimensionMismatchError):
        integrator.advance(scalar, np.array([1.0, 2.0]), 0.1)


def _endpoint_error(name: str, num_steps: int, t_end: float = 1.0) -> float:
    plant = HarmonicOscillator(omega=1.0)
    state0 = np.array([1.0, 0.0])
    traj = Simulation(name, plant, state0, TimeSpec(num_steps, t_end)).simulate()
    return float(np.linalg.norm(traj.final_state - plant.exact_solution(state0, t_end)))


def test_euler_first_order() -> None:
    ratio = _endpoint_error("euler", 100) / _endpoint_error("euler", 200)
    assert 1.8 < ratio < 2.2


@pytest.mark.parametrize("name", ["heun", "midpoint"])
def test_second_order_methods(name: str) -> None:
    ratio = _endpoint_error(name, 20) / _endpoint_error(name, 40)
    assert 3.5 < ratio < 4.5


def test_rk4_fourth_order() -> None:
    ratio = _endpoint_error("rk4", 20) / _endpoint_error("rk4", 40)
    assert 13.0 < ratio < 19.0


def test_rk4_more_accurate_than_euler() -> None:
    assert _endpoint_error("rk4", 50) < 1e-3 * _endpoint_error("euler", 50)


def test_functional_euler_step() -> None:
    out = euler_step(lambda x: 2 * x, np.array([1.0, -1.0]), 0.5)
    np.testing.assert_array_equal(out, [2.0, -2.0])


def test_get_integrator() -> None:
    assert isinstance(get_integrator("rk4"), RK4Integrator)
    assert isinstance(get_integrator(" Euler "), EulerIntegrator)
    assert isinstance(get_integrator(None), RK4Integrator)
    assert isinstance(get_integrator(MidpointIntegrator), MidpointIntegrator)
    inst = HeunIntegrator()
    assert get_integrator(inst) is inst
    with pytest.raises(ConfigurationError):
        get_integrator("leapfrog")
    with pytest.raises(ConfigurationError):
        get_integrator(42)  # type: ignore[arg-type]


def test_registry_contents() -> None:
    assert set(INTEGRATORS) >= {"euler", "heun", "midpoint", "rk4"}
    assert INTEGRATORS["euler"].order == 1
    assert INTEGRATORS["rk4"].order == 4


def test_register_custom_integrator() -> None:
    class Ralston(Integrator):
        name = "ralston_test"
        order = 2
        stages = 2

        def _step(self, f, x, dt):
            k1 = f(x)
            k2 = f(x + (2.0 / 3.0) * dt * k1)
            return x + dt * (0.25 * k1 + 0.75 * k2)

    try:
        register_integrator(Ralston)
        assert isinstance(get_integrator("ralston_test"), Ralston)
        ratio = _endpoint_error("ralston_test", 20) / _endpoint_error("ralston_test", 40)
        assert 3.5 < ratio < 4.5
    finally:
        INTEGRATORS.pop("ralston_test", None)


def test_get_integrator_instantiates_duck_typed_class() -> None:
    class Frozen:
        """Returns the state unchanged."""

        def advance(self, plant, state, dt):
            return np.array(state, dtype=float)

    integrator = get_integrator(Frozen)
    assert isinstance(integrator, Frozen)
    traj = Simulation(Frozen, HarmonicOscillator(), [1.0, 0.0], TimeSpec(3, 1.0)).simulate()
    np.testing.assert_array_equal(traj.final_state, [1.0, 0.0])


def test_get_integrator_rejects_unusable_classes() -> None:
    class NoAdvance:
        pass

    class NeedsArgs:
        def __init__(self, tol):
            self.tol = tol

        def advance(self, plant, state, dt):
            return state

    for cls in (NoAdvance, NeedsArgs, Integrator):
        with pytest.raises(ConfigurationError):
            get_integrator(cls)
