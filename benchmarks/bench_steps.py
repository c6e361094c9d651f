"""
Microbenchmark: time per tick for every simulator.
Run:
  python benchmarks/bench_steps.py
"""
import time

from physics_lab.profiler import Profiler
from physics_lab.renderer import NullRenderer
from physics_lab.simulators import SIMULATORS


def prepare(sim):
    """Put each simulator in a state where its Stepper does real work."""
    if sim.kind in ("series", "parallel"):
        for _ in range(8):
            sim.add_resistor(50.0)
    elif sim.kind == "heatflow":
        sim.set_parameter("compare", True, immediate=True)
    elif sim.kind == "pendulum":
        sim.set_parameter("mode", "double", immediate=True)
    elif sim.kind == "projectile":
        sim.set_parameter("mode", "comparison", immediate=True)
        sim.set_parameter("air_resistance", True, immediate=True)
        sim.launch()
    elif sim.kind == "thermal":
        sim.set_parameter("compare", True, immediate=True)
        sim.heat()
    elif sim.kind == "freefall":
        sim.set_parameter("height1", 1000, immediate=True)
        sim.set_parameter("speed", 0.1, immediate=True)
        sim.drop()


def run(kind: str, frames: int = 600):
    prof = Profiler()
    sim = SIMULATORS[kind](profiler=prof, renderer=NullRenderer())
    prepare(sim)
    sim.start()

    t0 = time.perf_counter()
    n = sim.run_frames(frames)
    t1 = time.perf_counter()

    per_frame = (t1 - t0) / max(1, n)
    return n, per_frame, prof.stats.summary()


if __name__ == "__main__":
    for kind in SIMULATORS:
        n, per_frame, summary = run(kind)
        print(f"{kind:11s} frames={n:4d}  tick={1e3 * per_frame:8.4f} ms")
        for k in ["step", "render"]:
            if k in summary:
                print(" ", k, {key: round(v, 4) for key, v in summary[k].items()})
        print()
