# MIT License (see LICENSE)
"""
physics_lab - Simulation engines for interactive physics visualizers.

This package provides the time-stepped physics, state machines and
animation loop behind a set of classroom visualizers: charging by
friction/induction/conduction, heat conduction, series and parallel
circuits, single and double pendulums, projectile motion with an
auto-scaling camera, reflection and refraction, thermal expansion and
free fall. Rendering is left to adapters that consume drawing primitives.

Main entry points:
    - The simulators (PendulumSimulator, ProjectileSimulator, ...): one
      controller per visualizer with parameters, lifecycle and snapshots.
    - Scheduler / FrameQueue: the cooperative per-frame loop.
    - HistorySeries: bounded FIFO time series for the graphs.

Submodules:
    - core: Acceleration laws, integrators and energy bookkeeping.
    - circuits: Network solvers and electron-flow animation.
    - charge: Charge-transfer state machine.
    - thermal: Two-body conduction, steady heat flow and expansion.
    - optics: Reflection constraint, Snell slab path, mirror equation.
    - io: JSON presets and snapshot export.
    - renderer: Optional visualization adapters.

Example:
    from physics_lab import ProjectileSimulator

    sim = ProjectileSimulator()
    sim.launch()
    sim.run_frames(1000)
    sim.snapshot().derived["result"]["range"]   # ≈ 254.8 m
"""
from .history import HistorySeries, Trail
from .logging_config import setup_logging
from .scheduler import FrameQueue, Scheduler
from .simulators import (
    SIMULATORS,
    ChargingSimulator,
    FreeFallSimulator,
    HeatFlowSimulator,
    ParallelCircuitSimulator,
    PendulumSimulator,
    ProjectileSimulator,
    ReflectionSimulator,
    RefractionSimulator,
    SeriesCircuitSimulator,
    Simulator,
    ThermalExpansionSimulator,
    create_simulator,
)
from .types import Snapshot

__all__ = [
    # Simulators
    "Simulator",
    "SIMULATORS",
    "create_simulator",
    "ChargingSimulator",
    "HeatFlowSimulator",
    "SeriesCircuitSimulator",
    "ParallelCircuitSimulator",
    "PendulumSimulator",
    "ProjectileSimulator",
    "ReflectionSimulator",
    "RefractionSimulator",
    "ThermalExpansionSimulator",
    "FreeFallSimulator",
    # Loop and data
    "Scheduler",
    "FrameQueue",
    "HistorySeries",
    "Trail",
    "Snapshot",
    # Logging
    "setup_logging",
]
