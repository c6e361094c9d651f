# MIT License (see LICENSE)
import math

import pytest
from physics_lab.circuits import Resistor, SeriesFlow, series_layout, solve_parallel, solve_series
from physics_lab.simulators import ParallelCircuitSimulator, SeriesCircuitSimulator


def test_series_ohms_law():
    """
    Single loop: I = V / ΣR, and the drops add up to the source voltage.
    12 V across 100 Ω + 200 Ω gives 0.04 A, 4 V and 8 V.
    """
    sol = solve_series([Resistor(1, 100.0), Resistor(2, 200.0)], voltage=12.0)
    assert sol.closed
    assert abs(sol.current - 0.04) < 1e-12
    assert abs(sol.drops[1] - 4.0) < 1e-12
    assert abs(sol.drops[2] - 8.0) < 1e-12
    assert abs(sum(sol.drops.values()) - 12.0) < 1e-9
    assert abs(sol.power - 12.0 * 0.04) < 1e-12


def test_series_open_switch_stops_everything():
    sol = solve_series([Resistor(1, 100.0), Resistor(2, 200.0, on=False)], voltage=12.0)
    assert not sol.closed
    assert sol.current == 0.0
    assert all(v == 0.0 for v in sol.drops.values())
    assert sol.power == 0.0


def test_series_empty_loop_is_open():
    sol = solve_series([], voltage=12.0)
    assert sol.current == 0.0
    assert not sol.closed


def test_parallel_two_equal_branches():
    """R_eq of two equal resistors is R/2; each branch carries V/R."""
    sol = solve_parallel([Resistor(1, 100.0), Resistor(2, 100.0)], voltage=10.0)
    assert abs(sol.equivalent_resistance - 50.0) < 1e-9
    assert abs(sol.branch_currents[1] - 0.1) < 1e-12
    assert abs(sol.total_current - 0.2) < 1e-12
    assert abs(sol.power - 2.0) < 1e-12


def test_parallel_off_branch_affects_only_itself():
    sol = solve_parallel([Resistor(1, 60.0), Resistor(2, 120.0, on=False)], voltage=12.0)
    assert sol.branch_currents[2] == 0.0
    assert abs(sol.branch_currents[1] - 0.2) < 1e-12
    assert abs(sol.equivalent_resistance - 60.0) < 1e-9


def test_parallel_all_off_is_infinite():
    sol = solve_parallel([Resistor(1, 60.0, on=False)], voltage=12.0)
    assert math.isinf(sol.equivalent_resistance)
    assert sol.open
    assert sol.total_current == 0.0


def test_resistance_floor():
    r = Resistor(1, 0.0)
    assert r.resistance == pytest.approx(0.1)
    r = Resistor(2, float("nan"))
    assert r.resistance == pytest.approx(0.1)


def test_series_layout_grows_canvas():
    layout = series_layout(2)
    assert layout.canvas_width == 900.0
    assert layout.xs[0] == 150.0

    # 10 resistors need 150 + 80 + 10·80 + 9·20 = 1210 px
    layout = series_layout(10)
    assert layout.canvas_width == pytest.approx(1310.0)
    gaps = [b - a for a, b in zip(layout.xs, layout.xs[1:])]
    assert min(gaps) >= 80.0 + 20.0 - 1e-9


def test_series_simulator_commands():
    sim = SeriesCircuitSimulator()
    assert [r.resistance for r in sim.resistors] == [100.0, 200.0]
    assert sim.solution.current == pytest.approx(0.04)

    r3 = sim.add_resistor(300.0)
    assert r3.id == 3
    assert sim.solution.current == pytest.approx(12.0 / 600.0)

    sim.toggle(2)
    snap = sim.snapshot()
    assert snap.derived["current"] == 0.0
    assert snap.derived["closed"] is False

    sim.toggle(2)
    sim.remove_resistor(1)
    assert [r.id for r in sim.resistors] == [2, 3]
    assert sim.add_resistor().id == 4

    assert sim.set_resistance(2, -5.0) == pytest.approx(0.1)
    with pytest.raises(KeyError):
        sim.toggle(99)


def test_series_voltage_change_is_queued():
    sim = SeriesCircuitSimulator()
    sim.set_parameter("voltage", 24)
    assert sim.solution.current == pytest.approx(0.04)
    sim.step(1 / 60)
    assert sim.solution.current == pytest.approx(0.08)


def test_series_reset_restores_defaults():
    sim = SeriesCircuitSimulator()
    sim.add_resistor(500.0)
    sim.start()
    sim.run_frames(30)
    sim.reset()
    assert [r.resistance for r in sim.resistors] == [80.0, 120.0]
    assert [r.id for r in sim.resistors] == [1, 2]
    assert len(sim.history) == 0
    assert len(sim.flow.particles) == 0
    assert sim.solution.current == pytest.approx(12.0 / 200.0)


def test_series_flow_emits_only_with_current():
    sim = SeriesCircuitSimulator()
    sim.start()
    sim.run_frames(120)
    assert len(sim.flow.particles) > 0
    assert len(sim.history) > 0

    sim.toggle(1)
    sim.flow.clear()
    sim.run_frames(60)
    assert len(sim.flow.particles) == 0
    assert sim.history.last()["current"] == 0.0


def test_series_flow_cap():
    flow = SeriesFlow(cap=5)
    rs = [Resistor(1, 1.0)]
    sol = solve_series(rs, voltage=12.0)
    for _ in range(100):
        flow.step(rs, sol, speed=5.0, dt=0.05)
        assert len(flow.particles) <= 5


def test_parallel_simulator():
    sim = ParallelCircuitSimulator()
    snap = sim.snapshot()
    assert snap.derived["equivalent_resistance"] == pytest.approx(40.0)
    assert snap.derived["total_current"] == pytest.approx(0.3)

    sim.toggle(1)
    sim.toggle(2)
    snap = sim.snapshot()
    assert snap.derived["open"] is True
    assert snap.derived["total_current"] == 0.0

    sim.reset()
    assert [b.resistance for b in sim.resistors] == [80.0, 160.0]


def test_parallel_particles_per_branch():
    sim = ParallelCircuitSimulator()
    sim.toggle(2)
    sim.start()
    sim.run_frames(120)
    assert len(sim.flow.particles.get(1, [])) > 0
    assert len(sim.flow.particles.get(2, [])) == 0
