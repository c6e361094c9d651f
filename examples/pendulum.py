import math

from physics_lab.simulators import PendulumParams, PendulumSimulator

sim = PendulumSimulator(PendulumParams(length=1.0, theta0=30.0))
sim.start()
sim.run_frames(240)

snap = sim.snapshot()
print("theta:", f"{snap.state['theta_deg']:.2f} deg", "omega:", f"{snap.state['omega']:.3f} rad/s")
print("period:", f"{snap.derived['period']:.3f} s", "max speed:", f"{snap.derived['max_speed']:.3f} m/s")
print("energy:", f"{snap.derived['total_energy']:.4f} J")

sim.set_mode("double")
sim.apply_pending()
sim.start()
sim.run_frames(600)
s = sim.state
print("double:", f"theta1={math.degrees(s.theta1):.1f} deg", f"theta2={math.degrees(s.theta2):.1f} deg",
      "trail points:", len(sim.trail))
