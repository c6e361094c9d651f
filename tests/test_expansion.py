# MIT License (see LICENSE)
import pytest
from physics_lab.core.integrators import ramp_toward
from physics_lab.materials import EXPANSION_MATERIALS
from physics_lab.thermal import ExpansionKind, expanded_size, expansion
from physics_lab.simulators import ThermalExpansionSimulator


def test_linear_areal_volumetric():
    """ΔL = L₀αΔT, ΔA = 2A₀αΔT, ΔV = 3V₀αΔT. Iron (12e-6/°C), 100 mm, +100 °C → 0.12 mm."""
    assert expansion(100.0, 12e-6, 100.0) == pytest.approx(0.12)
    assert expansion(10_000.0, 12e-6, 100.0, "areal") == pytest.approx(24.0)
    assert expansion(1e6, 12e-6, 100.0, ExpansionKind.VOLUMETRIC) == pytest.approx(3600.0)
    assert expanded_size(100.0, 12e-6, -50.0) == pytest.approx(99.94)
    with pytest.raises(ValueError):
        expansion(1.0, 1e-6, 1.0, "cubic")


@pytest.mark.parametrize("material", sorted(EXPANSION_MATERIALS))
@pytest.mark.parametrize("kind", list(ExpansionKind))
def test_no_temperature_change_no_expansion(material, kind):
    """ΔT = 0 gives no change in size for every material and every expansion type."""
    alpha = EXPANSION_MATERIALS[material].alpha
    size = {ExpansionKind.LINEAR: 100.0, ExpansionKind.AREAL: 10_000.0, ExpansionKind.VOLUMETRIC: 1e6}[kind]
    assert expansion(size, alpha, 0.0, kind) == 0.0
    assert expanded_size(size, alpha, 0.0, kind) == size


def test_ramp_toward_never_overshoots():
    t = 20.0
    for _ in range(100):
        t = ramp_toward(t, 70.0, 80.0, 0.1)
        assert t <= 70.0
    assert t == 70.0
    assert ramp_toward(69.995, 70.0, 80.0, 0.0) == 70.0


def test_heat_command_ramps_and_stops():
    sim = ThermalExpansionSimulator()
    sim.heat()
    assert sim.target == 70.0
    assert sim.running
    sim.release()
    sim.run_frames(600)
    snap = sim.snapshot()
    print(snap.state, snap.derived)
    assert not sim.running
    assert snap.state["temperature"] == pytest.approx(70.0)
    assert snap.derived["delta_t"] == pytest.approx(50.0)
    assert snap.derived["expansion"] == pytest.approx(100.0 * 12e-6 * 50.0)
    assert snap.derived["unit"] == "mm"


def test_held_heat_keeps_pushing_target():
    sim = ThermalExpansionSimulator()
    sim.heat()
    sim.run_frames(121)
    assert sim.running
    assert sim.target > 70.0
    sim.release()
    sim.run_frames(2000)
    assert not sim.running


def test_target_bounds_and_bad_input():
    sim = ThermalExpansionSimulator()
    assert sim.set_target(9999)
    assert sim.target == 500.0
    assert not sim.set_target("hot")
    assert not sim.set_target(float("nan"))
    assert sim.target == 500.0
    sim.reset()
    for _ in range(5):
        sim.cool()
    assert sim.target == -50.0


def test_compare_graph_sampling():
    sim = ThermalExpansionSimulator(graph_len=10)
    sim.set_parameter("compare", True, immediate=True)
    sim.set_target(300)
    sim.run_frames(600)
    assert len(sim.graph) == 10
    last = sim.graph.last()
    assert last["expansion2"] > last["expansion1"] > 0.0
    snap = sim.snapshot()
    assert snap.derived["final_size2"] > snap.derived["final_size1"] > 100.0


def test_single_view_has_no_graph():
    sim = ThermalExpansionSimulator()
    sim.set_target(100)
    sim.run_frames(120)
    assert len(sim.graph) == 0


def test_initial_temperature_change_restarts_at_rest():
    """Moving T₀ mid-run puts the sample back on the new reference: ΔT = 0, no expansion."""
    sim = ThermalExpansionSimulator()
    sim.heat()
    sim.run_frames(30)
    assert sim.temperature > 20.0
    sim.set_parameter("initial_temp", 100)
    sim.run_frames(10)
    assert not sim.running
    assert not sim.heating
    assert sim.temperature == sim.target == 100.0
    snap = sim.snapshot()
    assert snap.derived["delta_t"] == 0.0
    assert snap.derived["expansion"] == 0.0
