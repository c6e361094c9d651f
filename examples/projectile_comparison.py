from physics_lab.renderer import BufferedRenderer
from physics_lab.simulators import ProjectileParams, ProjectileSimulator

renderer = BufferedRenderer(max_frames=1)
sim = ProjectileSimulator(
    ProjectileParams(mode="comparison", v0=50.0, angle=45.0, v0_2=50.0, angle_2=60.0, air_resistance_2=True),
    renderer=renderer,
)
sim.set_auto_scale(True)
sim.launch()
sim.run_frames(2000)

res = sim.results
for name, r in (("projectile1", res.projectile1), ("projectile2", res.projectile2)):
    print(f"{name}: range={r.range:7.2f} m  height={r.max_height:6.2f} m  time={r.time_of_flight:5.2f} s")
print("winners:", res.winners)
print("camera scale:", f"{sim.camera.scale:.3f} px/m", "primitives:", len(renderer.frames[-1].primitives))
