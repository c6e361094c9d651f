# MIT License (see LICENSE)
import math

import numpy as np
import pytest
from physics_lab.simulators import Launch, ProjectileParams, ProjectileSimulator


def test_drag_free_range_and_height():
    """
    R = v₀² sin 2θ / g ≈ 254.8 m and H = v₀² sin²θ / (2g) ≈ 63.7 m
    for v₀ = 50 m/s at 45°. Fixed 0.02 s Euler steps land within a few percent.
    """
    sim = ProjectileSimulator()
    sim.launch()
    sim.run_frames(1000)
    res = sim.snapshot().derived["result"]
    R = 50.0 ** 2 / 9.81
    H = 50.0 ** 2 * 0.5 / (2.0 * 9.81)
    T = 2.0 * 50.0 * math.sin(math.radians(45.0)) / 9.81
    err_r = abs(res["range"] - R) / R
    err_h = abs(res["max_height"] - H) / H
    err_t = abs(res["time_of_flight"] - T) / T
    print("range", res["range"], R, err_r, "height", res["max_height"], H, err_h, "time", res["time_of_flight"], T, err_t)
    assert not sim.running
    assert err_r <= 0.02
    assert err_h <= 0.02
    assert err_t <= 0.02


def test_predictions():
    pred = Launch(v0=50.0, angle=45.0).predict()
    assert pred.range == pytest.approx(254.84, abs=0.01)
    assert pred.max_height == pytest.approx(63.71, abs=0.01)
    flat = Launch(v0=20.0, angle=0.0).predict()
    assert flat.range == 0.0 and flat.time_of_flight == 0.0


def test_drag_shortens_flight():
    sim = ProjectileSimulator(ProjectileParams(air_resistance=True, drag_coeff=1.0, mass=0.5))
    sim.launch()
    sim.run_frames(1000)
    res = sim.snapshot().derived["result"]
    assert res["range"] < 0.9 * 50.0 ** 2 / 9.81


def test_trajectory_stays_above_ground():
    sim = ProjectileSimulator()
    sim.launch()
    sim.run_frames(1000)
    traj = sim.flight.projectile.trajectory_array()
    assert traj[0].tolist() == [0.0, 0.0]
    assert np.all(traj[:, 1] >= 0.0)
    assert sim.flight.projectile.steps == len(traj)


def test_comparison_results_and_winners():
    params = ProjectileParams(mode="comparison", v0=50.0, angle=45.0, v0_2=50.0, angle_2=30.0)
    sim = ProjectileSimulator(params)
    sim.launch()
    sim.run_frames(1000)
    assert sim.results is not None
    w = sim.results.winners
    assert w["range"] == "projectile1"
    assert w["height"] == "projectile1"
    assert w["time"] == "projectile1"
    assert sim.results.differences["range"] > 0.0
    assert len(sim.time_data) > 0
    assert "results" in sim.snapshot().derived


def test_parameters_frozen_at_launch():
    sim = ProjectileSimulator()
    sim.launch()
    sim.run_frames(10)
    sim.set_parameter("v0", 10)
    sim.run_frames(1000)
    assert sim.flight.projectile.launch.v0 == 50.0
    assert sim.params.v0 == 10.0
    assert sim.snapshot().derived["result"]["range"] > 200.0

    assert sim.replay()
    sim.run_frames(1000)
    assert sim.snapshot().derived["result"]["range"] > 200.0


def test_time_step_change_mid_flight_keeps_flight_time():
    """T = 2v₀ sin θ / g ≈ 7.21 s is counted in the 0.02 s steps the flight was launched with."""
    sim = ProjectileSimulator()
    sim.launch()
    sim.run_frames(10)
    sim.set_parameter("time_step", 0.1)
    sim.run_frames(1000)
    assert sim.params.time_step == 0.1
    assert sim.flight.time_step == 0.02
    p = sim.flight.projectile
    res = sim.snapshot().derived["result"]
    T = 2.0 * 50.0 * math.sin(math.radians(45.0)) / 9.81
    assert res["time_of_flight"] == pytest.approx(p.steps * 0.02)
    assert abs(res["time_of_flight"] - T) / T < 0.02

    params = ProjectileParams(mode="comparison")
    sim = ProjectileSimulator(params)
    sim.launch()
    sim.run_frames(5)
    sim.set_parameter("time_step", 0.05)
    sim.run_frames(1000)
    r1 = sim.results.projectile1
    assert r1.time_of_flight == pytest.approx(sim.flight.a.steps * 0.02)


def test_mode_switch_resets():
    sim = ProjectileSimulator()
    sim.launch()
    sim.run_frames(20)
    sim.set_parameter("mode", "comparison", immediate=True)
    assert sim.flight is None
    assert not sim.running
    assert not sim.replay()


def test_sync_and_randomize():
    sim = ProjectileSimulator(seed=42)
    sim.set_parameter("v0", 77, immediate=True)
    sim.sync_parameters()
    assert sim.params.v0_2 == 77.0
    sim.randomize()
    p = sim.params
    for v0, angle in ((p.v0, p.angle), (p.v0_2, p.angle_2)):
        assert 20.0 <= v0 <= 100.0 and v0 == int(v0)
        assert 15.0 <= angle <= 75.0 and angle == int(angle)


def test_launch_fit_scales_view():
    sim = ProjectileSimulator()
    sim.set_parameter("v0", 150, immediate=True)
    sim.launch()
    # available width 900 − 50 − 50 = 800 px over 1.2 × R
    R = 150.0 ** 2 / 9.81
    assert sim.camera.scale == pytest.approx(max(0.5, min(800.0 / (1.2 * R), 400.0 / (1.2 * R * 0.25))))
