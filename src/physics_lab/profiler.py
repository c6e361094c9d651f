# MIT License (see LICENSE)
"""
Lightweight timing of animation-loop phases.

A Scheduler given a Profiler records the wall-clock cost of its "step"
and "render" sections on every frame, which is enough to tell whether a
simulator fits in a 16 ms frame budget.

Example:
    profiler = Profiler()
    sched = Scheduler(step=sim.step, render=sim.render, profiler=profiler)
    ...
    profiler.stats.summary()["step"]["mean_ms"]
"""
from __future__ import annotations
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class ProfileStats:
    """Raw timing samples (seconds) keyed by section name."""
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        self.samples.setdefault(name, []).append(dt)

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Returns:
            Dict mapping section name to {'n', 'mean_ms', 'max_ms', 'total_ms'}.
        """
        out = {}
        for name, times in self.samples.items():
            total = sum(times)
            out[name] = {
                "n": len(times),
                "mean_ms": 1e3 * total / len(times),
                "max_ms": 1e3 * max(times),
                "total_ms": 1e3 * total,
            }
        return out

    def clear(self) -> None:
        self.samples.clear()


class Profiler:
    """Context-manager based section timer."""

    def __init__(self) -> None:
        self.stats = ProfileStats()

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)
