# MIT License (see LICENSE)
"""
DC circuit solvers and electron-flow animation.

This subpackage provides:
    - Network solvers: solve_series, solve_parallel (pure functions).
    - Flow models: SeriesFlow, ParallelFlow (visual particles driven by the solution).

Typical usage:
    from physics_lab.circuits import Resistor, solve_series

    sol = solve_series([Resistor(1, 100.0), Resistor(2, 200.0)], voltage=12.0)
    sol.current  # 0.04 A
"""
from .network import (
    Resistor,
    SeriesSolution,
    ParallelSolution,
    clamp_resistance,
    solve_series,
    solve_parallel,
)
from .flow import SeriesFlow, ParallelFlow, SeriesLayout, series_layout, parallel_branch_y

__all__ = [
    # Network
    "Resistor",
    "SeriesSolution",
    "ParallelSolution",
    "clamp_resistance",
    "solve_series",
    "solve_parallel",
    # Flow
    "SeriesFlow",
    "ParallelFlow",
    "SeriesLayout",
    "series_layout",
    "parallel_branch_y",
]
