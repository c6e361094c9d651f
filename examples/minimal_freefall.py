# examples/minimal_freefall.py
from physics_lab import setup_logging
from physics_lab.simulators import FreeFallSimulator

setup_logging("INFO")

sim = FreeFallSimulator()
sim.set_parameter("height1", 100, immediate=True)
drop = sim.drop()
sim.run_frames(600)

print("fall time:", f"{drop.fall_time:.3f} s")
print("impact speed:", f"{sim.snapshot().derived['impact_speeds'][1]:.2f} m/s")

sim.set_parameter("planet3", "moon", immediate=True)
earth, moon = sim.drop_compare()
sim.run_frames(600)
print("earth vs moon:", f"{earth.fall_time:.3f} s", f"{moon.fall_time:.3f} s")
