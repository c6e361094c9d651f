# MIT License (see LICENSE)
"""
One controller per visualizer.

This subpackage provides:
    - Simulator: the shared controller (parameters, lifecycle, scheduler).
    - The concrete simulators, each with its ``*Params`` dataclass.
    - SIMULATORS / create_simulator: lookup by ``kind`` (used by presets).

Typical usage:
    from physics_lab.simulators import PendulumSimulator

    sim = PendulumSimulator()
    sim.set_parameter("theta0", 45)
    sim.start()
    sim.run_frames(120)
    sim.snapshot().derived["period"]
"""
from .base import Simulator
from .charging import ChargingParams, ChargingSimulator
from .circuits import CircuitParams, CircuitSimulator, ParallelCircuitSimulator, SeriesCircuitSimulator
from .freefall import Drop, FreeFallParams, FreeFallSimulator, fall_time, impact_speed
from .heatflow import HeatFlowParams, HeatFlowSimulator
from .optics import ReflectionParams, ReflectionSimulator, RefractionParams, RefractionSimulator
from .pendulum import DoubleState, PendulumParams, PendulumSimulator, PendulumView, SingleState
from .projectile import ComparisonResults, Launch, ProjectileParams, ProjectileSimulator
from .thermal import ThermalExpansionSimulator, ThermalParams

SIMULATORS: dict[str, type[Simulator]] = {
    cls.kind: cls
    for cls in (
        ChargingSimulator,
        HeatFlowSimulator,
        SeriesCircuitSimulator,
        ParallelCircuitSimulator,
        PendulumSimulator,
        ProjectileSimulator,
        ReflectionSimulator,
        RefractionSimulator,
        ThermalExpansionSimulator,
        FreeFallSimulator,
    )
}


def create_simulator(kind: str, **kwargs) -> Simulator:
    """
    Build a simulator by kind name.

    Raises:
        ValueError: If ``kind`` is not a known simulator.
    """
    try:
        cls = SIMULATORS[kind.lower()]
    except KeyError:
        raise ValueError(f"Unknown simulator: '{kind}' (expected one of {sorted(SIMULATORS)})") from None
    return cls(**kwargs)


__all__ = [
    # Base
    "Simulator",
    "SIMULATORS",
    "create_simulator",
    # Charge
    "ChargingParams",
    "ChargingSimulator",
    # Circuits
    "CircuitParams",
    "CircuitSimulator",
    "SeriesCircuitSimulator",
    "ParallelCircuitSimulator",
    # Heat
    "HeatFlowParams",
    "HeatFlowSimulator",
    "ThermalParams",
    "ThermalExpansionSimulator",
    # Mechanics
    "PendulumParams",
    "PendulumSimulator",
    "PendulumView",
    "SingleState",
    "DoubleState",
    "ProjectileParams",
    "ProjectileSimulator",
    "Launch",
    "ComparisonResults",
    "FreeFallParams",
    "FreeFallSimulator",
    "Drop",
    "fall_time",
    "impact_speed",
    # Optics
    "ReflectionParams",
    "ReflectionSimulator",
    "RefractionParams",
    "RefractionSimulator",
]
