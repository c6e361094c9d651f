from physics_lab.simulators import HeatFlowParams, HeatFlowSimulator


def announce(model):
    print(f"equilibrium after {model.time:.1f} s at {model.t_a:.2f} °C")


sim = HeatFlowSimulator(HeatFlowParams(compare=True, material_a="copper", material_b="glass"),
                        on_equilibrium=announce)
print("steady Q through copper:", f"{sim.steady_heat_rate():.1f} W")
print("expected T_f:", f"{sim.snapshot().derived['final_temperature']:.2f} °C")

sim.start()
sim.run_frames(5000)

history = sim.history.as_arrays()
print("samples:", len(history["t"]), "last:", history["Ta"][-1], history["Tb"][-1])
