# MIT License (see LICENSE)
import math

import pytest
from physics_lab.simulators import Drop, FreeFallParams, FreeFallSimulator, fall_time, impact_speed


def test_fall_time_from_feet():
    """
    h = h_ft × 0.3048, t = √(2h/g).
    100 ft on Earth: √(2·30.48/9.81) ≈ 2.493 s; the Moon is √(9.81/1.62) slower.
    """
    t_earth = fall_time(100.0, 9.81)
    t_moon = fall_time(100.0, 1.62)
    expected = math.sqrt(2.0 * 30.48 / 9.81)
    print("t_earth", t_earth, "expected", expected)
    assert abs(t_earth - expected) < 1e-12
    assert t_moon / t_earth == pytest.approx(math.sqrt(9.81 / 1.62))
    assert fall_time(100.0, 9.81, air_resistance=True) == pytest.approx(1.5 * expected)
    assert impact_speed(100.0, 9.81) == pytest.approx(math.sqrt(2.0 * 9.81 * 30.48))


def test_drop_fraction_is_quadratic():
    d = Drop(1, "ball", 10.0, 9.81, fall_time=2.0, duration=1.0)
    d.elapsed = 0.5
    assert d.fraction == pytest.approx(0.25)
    d.elapsed = 1.0
    assert d.finished and d.fraction == 1.0
    assert Drop(1, "ball", 0.0, 9.81, 0.0, 0.0).fraction == 1.0


def test_countdown_ticks():
    d = Drop(1, "ball", 10.0, 9.81, fall_time=1.0, duration=1.0)
    d.elapsed = 0.25
    assert d.remaining == pytest.approx(0.8)
    d.elapsed = 1.0
    assert d.remaining == pytest.approx(1.0)


def test_drop_plays_and_finishes():
    sim = FreeFallSimulator()
    sim.set_parameter("height1", 100, immediate=True)
    d = sim.drop()
    assert d.fall_time == pytest.approx(fall_time(100.0, 9.81))
    assert d.duration == pytest.approx(d.fall_time / 2.0)
    sim.run_frames(600)
    assert not sim.running
    snap = sim.snapshot()
    assert snap.state[1]["finished"]
    assert snap.state[1]["fallen_ft"] == pytest.approx(100.0)
    assert snap.derived["log"] == ["Dropped ball from 100 ft"]


def test_compare_drop_feather_on_moon():
    sim = FreeFallSimulator()
    a, b = sim.drop_compare()
    assert a.g == 9.81 and b.g == 1.62
    assert b.fall_time > a.fall_time
    sim.run_frames(30)
    assert sim.drops[2].fraction > sim.drops[3].fraction
    assert sim.log.entries[-1] == "Compared drop: ball vs feather"


def test_custom_gravity():
    sim = FreeFallSimulator()
    sim.set_parameter("planet1", "custom", immediate=True)
    assert sim.set_custom_gravity(1, "3.5") == 3.5
    assert sim.gravity(1) == 3.5
    assert sim.set_custom_gravity(1, "strong") == 9.81
    assert sim.set_custom_gravity(1, 0) == 0.01
    with pytest.raises(ValueError):
        sim.gravity(4)


def test_replay_uses_original_drop():
    sim = FreeFallSimulator()
    assert sim.replay() is None
    sim.drop()
    sim.run_frames(600)
    sim.set_parameter("planet1", "jupiter", immediate=True)
    d = sim.replay()
    assert d.g == 9.81
    assert d.height_ft == 10.0


def test_air_resistance_slows_every_drop():
    sim = FreeFallSimulator(FreeFallParams(air_resistance=True))
    d = sim.drop()
    assert d.fall_time == pytest.approx(1.5 * fall_time(10.0, 9.81))
