# MIT License (see LICENSE)
import pytest
from physics_lab.thermal import (
    BodyProps,
    Layer,
    TwoBodyConduction,
    equilibrium_temperature,
    heat_rate,
    slab_heat_rate,
    wall_heat_rate,
)
from physics_lab.simulators import HeatFlowSimulator


def test_slab_fourier_law():
    """Q = k·A·ΔT/d: copper, 0.01 m², 80 K across 0.02 m gives 16040 W."""
    q = slab_heat_rate(401.0, 0.01, 80.0, 0.02)
    assert q == pytest.approx(16040.0)
    assert slab_heat_rate(401.0, 0.01, 0.0, 0.02) == 0.0


def test_zero_thickness_is_finite():
    q = slab_heat_rate(1.0, 1.0, 1.0, 0.0)
    assert q == pytest.approx(1e9)


def test_wall_layers_in_series():
    """
    R = Σ d_i/(k_i·A). Two layers (0.1 m, k=1) and (0.05 m, k=0.5) on 1 m²:
    R = 0.1 + 0.1 = 0.2 K/W, so Q = 20/0.2 = 100 W.
    """
    layers = [Layer(0.1, 1.0), Layer(0.05, 0.5)]
    q = wall_heat_rate(layers, 1.0, 20.0)
    assert q == pytest.approx(100.0)
    assert heat_rate("wall", 999.0, 1.0, 20.0, 0.3, layers) == pytest.approx(100.0)
    # A wall without layers falls back to Fourier's law
    assert heat_rate("wall", 2.0, 1.0, 20.0, 0.4) == pytest.approx(100.0)
    with pytest.raises(ValueError):
        heat_rate("sphere", 1.0, 1.0, 1.0, 1.0)


def test_two_body_reaches_mixing_temperature():
    """
    T_f = (m_a c_a T_a + m_b c_b T_b)/(m_a c_a + m_b c_b).
    Copper (385 J/kgK) at 100 °C against glass (840 J/kgK) at 20 °C: T_f ≈ 45.14 °C.
    """
    events = []
    model = TwoBodyConduction(
        BodyProps(1.0, 385.0, 401.0), BodyProps(1.0, 840.0, 1.0),
        t_a=100.0, t_b=20.0, on_equilibrium=events.append,
    )
    expected = equilibrium_temperature(1.0, 385.0, 100.0, 1.0, 840.0, 20.0)
    assert expected == pytest.approx((385.0 * 100.0 + 840.0 * 20.0) / 1225.0)

    steps = 0
    while not model.equilibrium and steps < 10000:
        model.step(0.05)
        steps += 1
    err = abs(0.5 * (model.t_a + model.t_b) - expected) / expected
    print("steps", steps, "T", model.t_a, model.t_b, "T_f", expected, "relerr", err)
    assert model.equilibrium
    assert err <= 1e-3
    assert len(events) == 1


def test_two_body_energy_is_conserved():
    a, b = BodyProps(2.0, 500.0, 50.0), BodyProps(1.0, 900.0, 200.0)
    model = TwoBodyConduction(a, b, t_a=80.0, t_b=10.0)
    e0 = a.capacity * model.t_a + b.capacity * model.t_b
    for _ in range(200):
        model.step(0.1)
    e1 = a.capacity * model.t_a + b.capacity * model.t_b
    assert abs(e1 - e0) / abs(e0) < 1e-9


def test_equilibrium_is_sticky():
    events = []
    model = TwoBodyConduction(BodyProps(1.0, 385.0, 401.0), BodyProps(1.0, 385.0, 401.0),
                              t_a=50.0, t_b=50.005, on_equilibrium=events.append)
    model.step(0.01)
    assert model.equilibrium
    temps = (model.t_a, model.t_b)
    for _ in range(100):
        model.step(0.01)
    assert (model.t_a, model.t_b) == temps
    assert len(events) == 1
    assert model.history.frozen

    model.reset(t_a=90.0)
    assert not model.equilibrium
    assert model.t_a == 90.0 and model.t_b == 50.005


def test_large_step_never_overshoots():
    """A huge dt lands both bodies on T_f instead of swapping them."""
    model = TwoBodyConduction(BodyProps(0.01, 100.0, 400.0), BodyProps(0.01, 100.0, 400.0),
                              t_a=100.0, t_b=0.0)
    model.step(10.0)
    assert model.t_a == pytest.approx(50.0)
    assert model.t_b == pytest.approx(50.0)
    assert model.equilibrium


def test_heatflow_simulator_steady_view():
    sim = HeatFlowSimulator()
    snap = sim.snapshot()
    assert snap.derived["q"] == pytest.approx(401.0 * 0.01 * 80.0 / 0.02)

    sim.set_parameter("geometry", "wall", immediate=True)
    sim.add_layer(0.1, 1.0)
    sim.add_layer(0.0, -3.0)
    assert sim.layers[1] == Layer(1e-4, 1e-4)
    sim.remove_layer(1)
    assert sim.steady_heat_rate() == pytest.approx(80.0 / (0.1 / (1.0 * 0.01)))
    q1, q2 = sim.compare_heat_rates()
    assert q1 == q2

    sim.set_parameter("material", "custom", immediate=True)
    sim.set_parameter("custom_k", 5000, immediate=True)
    assert sim.params.custom_k == 1000.0

    # the steady view never finishes on its own
    sim.start()
    sim.run_frames(30)
    assert sim.running
    assert len(sim.history) > 0


def test_heatflow_simulator_compare_stops_at_equilibrium():
    events = []
    sim = HeatFlowSimulator(on_equilibrium=events.append)
    sim.set_parameter("compare", True, immediate=True)
    sim.start()
    sim.run_frames(3000)
    snap = sim.snapshot()
    print(snap.state, snap.derived)
    assert snap.state["equilibrium"]
    assert not sim.running
    assert sim.equilibrium_events == 1
    assert len(events) == 1
    assert snap.derived["final_temperature"] == pytest.approx(0.5 * (snap.state["t_a"] + snap.state["t_b"]), abs=0.01)

    sim.reset()
    assert sim.model.t_a == 100.0
    assert not sim.model.equilibrium
