# MIT License (see LICENSE)
import logging
import math

import numpy as np
import pytest
from physics_lab.history import HistorySeries, Trail
from physics_lab.params import Bound, CommandQueue, apply_parameter, coerce_bool, coerce_float
from physics_lab.simulators import PendulumParams, PendulumSimulator, SeriesCircuitSimulator


def test_history_evicts_oldest():
    h = HistorySeries(maxlen=3, fields=("t", "Ta", "Tb"))
    for i in range(5):
        h.append(t=i, Ta=100 - i, Tb=20 + i)
    assert len(h) == 3
    assert h.column("t").tolist() == [2.0, 3.0, 4.0]
    assert h.last() == {"t": 4.0, "Ta": 96.0, "Tb": 24.0}
    arrays = h.as_arrays()
    assert arrays["Tb"].dtype == np.float64


def test_history_freeze_and_clear():
    h = HistorySeries(maxlen=10, fields=("t",))
    h.append(t=1.0)
    h.freeze()
    assert not h.append(t=2.0)
    assert len(h) == 1
    h.clear()
    assert not h.frozen
    assert len(h) == 0 and not h
    assert h.append(t=3.0)


def test_history_rejects_bad_samples():
    with pytest.raises(ValueError):
        HistorySeries(maxlen=0, fields=("t",))
    h = HistorySeries(maxlen=2, fields=("t", "x"))
    with pytest.raises(KeyError):
        h.append(t=1.0)
    with pytest.raises(KeyError):
        h.column("y")


def test_trail_bounded():
    trail = Trail(maxlen=4)
    for i in range(10):
        trail.append(i, -i)
    assert len(trail) == 4
    assert trail[0] == (6.0, -6.0)
    assert trail.as_array().shape == (4, 2)
    assert Trail().as_array().shape == (0, 2)


def test_coerce_float():
    assert coerce_float("  2.5 ", 1.0) == (2.5, True)
    assert coerce_float("abc", 1.0) == (1.0, False)
    assert coerce_float(float("inf"), 1.0) == (1.0, False)
    assert coerce_float(None, 7.0) == (7.0, False)


def test_coerce_bool():
    assert coerce_bool("on", False) == (True, True)
    assert coerce_bool("No", True) == (False, True)
    assert coerce_bool(0, True) == (False, True)
    assert coerce_bool("maybe", True) == (True, False)


def test_bound_integer():
    assert Bound(0.0, 90.0, integer=True).apply(33.5) == 34.0
    assert Bound(0.0, 90.0).apply(-5.0) == 0.0


def test_apply_parameter_clamps_and_warns(caplog):
    p = PendulumParams()
    with caplog.at_level(logging.WARNING, logger="physics_lab"):
        assert apply_parameter(p, "length", 50)
    assert p.length == 10.0
    assert "clamped" in caplog.text


def test_apply_parameter_rejects_non_finite(caplog):
    p = PendulumParams()
    with caplog.at_level(logging.WARNING, logger="physics_lab"):
        assert not apply_parameter(p, "g", "NaN")
        assert not apply_parameter(p, "g", "heavy")
    assert p.g == 9.81
    assert "rejected" in caplog.text


def test_apply_parameter_strings_and_choices():
    p = PendulumParams()
    assert apply_parameter(p, "mode", "DOUBLE")
    assert p.mode == "double"
    with pytest.raises(ValueError):
        apply_parameter(p, "mode", "triple")
    with pytest.raises(ValueError):
        apply_parameter(p, "colour", 1)
    assert apply_parameter(p, "damping", "true")
    assert p.damping is True
    assert not apply_parameter(p, "damping", "yes")


def test_command_queue_applies_in_order():
    p = PendulumParams()
    q = CommandQueue(p)
    q.submit("length", 2.0)
    q.submit("length", 3.0)
    q.submit("mass", 1.0)
    seen = []
    changed = q.drain(on_change=seen.append)
    assert p.length == 3.0
    assert changed == ["length", "length"]
    assert seen == changed
    assert len(q) == 0


def test_unknown_parameter_raises_at_submit():
    sim = SeriesCircuitSimulator()
    with pytest.raises(ValueError):
        sim.set_parameter("current", 1.0)
    assert len(sim.commands) == 0


def test_params_frozen_during_tick():
    """A command submitted mid-flight only lands at the start of the next tick."""
    sim = PendulumSimulator()
    seen = []
    original = sim.advance

    def advance(dt):
        seen.append(sim.params.g)
        sim.set_parameter("g", 1.62)
        original(dt)

    sim.advance = advance
    sim.step(1 / 60)
    sim.step(1 / 60)
    assert seen == [9.81, 1.62]
    assert not math.isnan(sim.state.theta)
