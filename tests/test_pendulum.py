# MIT License (see LICENSE)
import math

import numpy as np
import pytest
from physics_lab.core.forces import double_pendulum_accelerations, pendulum_angular_acceleration
from physics_lab.simulators import DoubleState, PendulumParams, PendulumSimulator, SingleState
from physics_lab.simulators.pendulum import OMEGA_LIMIT


def _upward_crossings(ts, thetas):
    """Interpolated times where θ goes from negative to non-negative."""
    out = []
    for i in range(1, len(thetas)):
        if thetas[i - 1] < 0.0 <= thetas[i]:
            frac = -thetas[i - 1] / (thetas[i] - thetas[i - 1])
            out.append(ts[i - 1] + frac * (ts[i] - ts[i - 1]))
    return out


def _run_single(params, seconds):
    sim = PendulumSimulator(params)
    ts, thetas = [0.0], [sim.state.theta]
    while sim.time < seconds:
        sim.step(params.time_step)
        ts.append(sim.time)
        thetas.append(sim.state.theta)
    return sim, np.array(ts), np.array(thetas)


def test_small_angle_period():
    """
    Small-amplitude period T = 2π√(L/g) ≈ 2.006 s for L = 1 m, g = 9.81 m/s².
    Measured between successive upward zero crossings.
    """
    params = PendulumParams(theta0=5.0)
    sim, ts, thetas = _run_single(params, 10.0)
    crossings = _upward_crossings(ts, thetas)
    measured = float(np.mean(np.diff(crossings)))
    expected = 2.0 * math.pi * math.sqrt(1.0 / 9.81)
    err = abs(measured - expected) / expected
    print("T", measured, "exp", expected, "relerr", err)
    assert abs(sim.snapshot().derived["period"] - 2.006) < 1e-3
    assert err <= 0.01


def test_returns_to_release_angle():
    """Undamped: the amplitude neither grows nor decays over several swings."""
    params = PendulumParams(theta0=30.0)
    sim, ts, thetas = _run_single(params, 10.0)
    theta0 = math.radians(30.0)
    late = thetas[ts > 8.0]
    err = abs(late.max() - theta0) / theta0
    print("max", late.max(), "theta0", theta0, "relerr", err)
    assert err <= 0.02
    assert np.all(np.abs(thetas) <= theta0 * 1.02)


def test_damping_decays():
    params = PendulumParams(theta0=30.0, damping=True, damping_coeff=1.0)
    sim, ts, thetas = _run_single(params, 10.0)
    assert np.abs(thetas[ts > 9.0]).max() < 0.1 * math.radians(30.0)


def test_small_angle_law_only_below_limit():
    exact = pendulum_angular_acceleration(0.1, 0.0, 1.0, 9.81)
    linear = pendulum_angular_acceleration(0.1, 0.0, 1.0, 9.81, small_angle=True)
    assert linear == -9.81 * 0.1
    assert exact != linear
    assert pendulum_angular_acceleration(1.0, 0.0, 1.0, 9.81, small_angle=True) == -9.81 * math.sin(1.0)


def test_double_pendulum_stays_finite():
    params = PendulumParams(mode="double", theta1=170.0, theta2=-170.0, m1=0.1, m2=100.0, l1=0.1, l2=10.0)
    sim = PendulumSimulator(params)
    assert isinstance(sim.state, DoubleState)
    for _ in range(3000):
        sim.step(1 / 60)
    s = sim.state
    assert all(math.isfinite(v) for v in (s.theta1, s.theta2, s.omega1, s.omega2))
    assert all(math.isfinite(v) for v in sim.energies())
    assert len(sim.trail) == 500


@pytest.mark.parametrize(
    "m1, m2, l1, l2",
    [
        (0.1, 100.0, 0.1, 10.0),
        (100.0, 0.1, 10.0, 0.1),
        (0.1, 100.0, 10.0, 0.1),
        (100.0, 100.0, 0.1, 0.1),
    ],
)
def test_double_pendulum_extreme_ratios_run_without_error(m1, m2, l1, l2):
    """Near-inverted start with extreme mass/length ratios: the loop runs to the end, every value finite."""
    params = PendulumParams(mode="double", theta1=170.0, theta2=-170.0, m1=m1, m2=m2, l1=l1, l2=l2)
    sim = PendulumSimulator(params)
    sim.start()
    assert sim.run_frames(1200) == 1200
    s = sim.state
    assert all(math.isfinite(v) for v in (s.theta1, s.theta2, s.omega1, s.omega2))
    assert abs(s.omega1) <= OMEGA_LIMIT and abs(s.omega2) <= OMEGA_LIMIT
    ke, pe = sim.energies()
    assert math.isfinite(ke) and math.isfinite(pe)
    assert np.isfinite(sim.history.column("total")).all()
    assert len(sim.history) == 1000


def test_double_pendulum_degenerate_denominator():
    a1, a2 = double_pendulum_accelerations(0.3, 0.3, 1.0, 1.0, 0.0, 1.0, 0.0, 1.0, 9.81)
    assert math.isfinite(a1) and math.isfinite(a2)


def test_double_pendulum_energy_bounded():
    params = PendulumParams(mode="double", theta1=20.0, theta2=10.0, time_step=0.002)
    sim = PendulumSimulator(params)
    e0 = sum(sim.energies())
    for _ in range(2000):
        sim.step(0.002)
    e1 = sum(sim.energies())
    err = abs(e1 - e0) / abs(e0)
    print("E0", e0, "E1", e1, "relerr", err)
    assert err <= 0.02


def test_mode_switch_copies_single_settings():
    sim = PendulumSimulator()
    sim.set_parameter("length", 2.0)
    sim.set_parameter("theta0", 40.0)
    sim.start()
    sim.run_frames(10)
    sim.set_mode("double")
    sim.run_frames(2)
    assert not sim.running
    assert isinstance(sim.state, DoubleState)
    p = sim.params
    assert p.l1 == p.l2 == 2.0
    assert p.theta1 == 40.0 and p.theta2 == 30.0
    # the switching tick only resets
    assert sim.state.theta1 == math.radians(40.0)
    assert sim.state.omega1 == 0.0
    assert sim.time == 0.0
    assert len(sim.history) == 0

    sim.set_mode("single")
    sim.apply_pending()
    assert isinstance(sim.state, SingleState)


def test_snapshot_derived_values():
    sim = PendulumSimulator(PendulumParams(theta0=60.0, length=2.0))
    d = sim.snapshot().derived
    assert abs(d["max_speed"] - math.sqrt(2.0 * 9.81 * 2.0 * 0.5)) < 1e-9
    assert abs(d["frequency"] * d["period"] - 1.0) < 1e-12
    assert d["ke"] == 0.0
    assert abs(d["height"] - 1.0) < 1e-9


def test_reset_restores_release_angle():
    sim = PendulumSimulator()
    sim.start()
    sim.run_frames(50)
    assert sim.time > 0.0
    sim.reset()
    assert sim.time == 0.0
    assert sim.state.theta == math.radians(30.0)
    assert len(sim.history) == 0
