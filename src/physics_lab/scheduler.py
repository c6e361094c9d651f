# MIT License (see LICENSE)
"""
The per-simulator animation loop.

A Scheduler drives one simulator with a host-provided "next frame"
callback (``request_frame``), the way a browser drives a canvas with
requestAnimationFrame. Each invocation of ``tick(timestamp)``:

    1. computes dt = (timestamp − last_timestamp) / 1000, or 0 on the
       first frame after start/resume, clamped to ``max_dt``;
    2. invokes the Stepper unless paused;
    3. invokes the renderer callback;
    4. stops if the termination predicate says so, otherwise re-arms.

Timestamps are host clock values in milliseconds. Everything runs on the
caller's thread; there is no cancellation token. Clearing the running flag
simply stops the loop from re-arming on its next tick.

Example:
    frames = FrameQueue()
    sched = Scheduler(step=sim.step, render=sim.render, request_frame=frames.request)
    sched.start()
    frames.run([0, 16.7, 33.3])
"""
from __future__ import annotations
import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from .profiler import Profiler

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


@dataclass
class SimulationClock:
    """
    Loop state owned by exactly one Scheduler.

    Attributes:
        running: The loop re-arms itself while True.
        paused: The Stepper is skipped while True (rendering continues).
        last_timestamp: Host time of the previous frame in ms, None before the first.
        accumulated_time: Simulated seconds advanced since the last reset.
        frames: Number of ticks processed since the last reset.
    """
    running: bool = False
    paused: bool = False
    last_timestamp: float | None = None
    accumulated_time: float = 0.0
    frames: int = 0

    def reset(self) -> None:
        self.running = False
        self.paused = False
        self.last_timestamp = None
        self.accumulated_time = 0.0
        self.frames = 0


class FrameQueue:
    """
    In-process stand-in for the host's "request next frame" facility.

    Holds the callbacks armed since the last pump and invokes them with the
    supplied timestamp. Used by tests, examples and headless drivers.
    """

    def __init__(self) -> None:
        self._pending: deque[FrameCallback] = deque()

    def request(self, callback: FrameCallback) -> None:
        self._pending.append(callback)

    def pump(self, timestamp: float) -> int:
        """Invoke every callback armed before this call. Returns how many ran."""
        batch = list(self._pending)
        self._pending.clear()
        for cb in batch:
            cb(timestamp)
        return len(batch)

    def run(self, timestamps: Iterable[float]) -> int:
        """Pump once per timestamp, stopping early when nothing is armed."""
        n = 0
        for ts in timestamps:
            if not self._pending:
                break
            n += self.pump(ts)
        return n

    def run_frames(self, count: int, start_ms: float = 0.0, fps: float = 60.0) -> int:
        """Pump ``count`` evenly spaced frames."""
        period = 1000.0 / fps
        return self.run(start_ms + i * period for i in range(count))

    @property
    def armed(self) -> int:
        return len(self._pending)


class Scheduler:
    """
    Cooperative animation loop for one simulator.

    Attributes:
        step: Stepper callback, called with dt in seconds.
        render: Optional callback redrawing derived values and primitives.
        done: Optional termination predicate evaluated after each frame.
        request_frame: Host facility arming the next tick. Defaults to a private FrameQueue.
        max_dt: Upper clamp on a single frame's dt (avoids jumps after a stall).
        profiler: Optional Profiler timing the "step" and "render" sections.
    """

    def __init__(
        self,
        step: Callable[[float], None],
        render: Callable[[], None] | None = None,
        done: Callable[[], bool] | None = None,
        request_frame: Callable[[FrameCallback], Any] | None = None,
        max_dt: float = 0.25,
        profiler: Profiler | None = None,
    ):
        self.step = step
        self.render = render
        self.done = done
        if request_frame is None:
            self.frames = FrameQueue()
            request_frame = self.frames.request
        else:
            self.frames = None
        self.request_frame = request_frame
        self.max_dt = max_dt
        self.profiler = profiler
        self.clock = SimulationClock()
        self._armed = False
        self._in_tick = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self.clock.running

    @property
    def paused(self) -> bool:
        return self.clock.paused

    def start(self) -> None:
        """Start (or resume) the loop. Idempotent while running."""
        if self.clock.running:
            if self.clock.paused:
                self.resume()
            return
        self.clock.running = True
        self.clock.paused = False
        self.clock.last_timestamp = None
        logger.debug("scheduler started")
        self._arm()

    def pause(self) -> None:
        if self.clock.running and not self.clock.paused:
            self.clock.paused = True
            logger.debug("scheduler paused")

    def resume(self) -> None:
        if self.clock.paused:
            self.clock.paused = False
            self.clock.last_timestamp = None
            logger.debug("scheduler resumed")
        if self.clock.running:
            self._arm()

    def toggle_pause(self) -> bool:
        """Flip the paused flag. Returns the new value."""
        if self.clock.paused:
            self.resume()
        else:
            self.pause()
        return self.clock.paused

    def stop(self) -> None:
        """Clear the running flag; the loop stops re-arming on its next tick."""
        if self.clock.running:
            logger.debug("scheduler stopped after %d frames", self.clock.frames)
        self.clock.running = False

    def reset(self) -> None:
        """Stop the loop and zero the clock."""
        self.clock.reset()

    def step_once(self, dt: float) -> bool:
        """
        Advance one manual step while stopped or paused.

        Returns:
            False (and does nothing) when the loop is actively running, so a
            manual step can never double-count a scheduled frame.
        """
        if self.clock.running and not self.clock.paused:
            return False
        dt = min(max(0.0, dt), self.max_dt)
        self.step(dt)
        self.clock.accumulated_time += dt
        if self.render is not None:
            self.render()
        return True

    # ------------------------------------------------------------------
    # Frame callback
    # ------------------------------------------------------------------

    def _arm(self) -> None:
        if not self._armed:
            self._armed = True
            self.request_frame(self.tick)

    def tick(self, timestamp: float) -> None:
        """Process one frame at host time ``timestamp`` (ms)."""
        self._armed = False
        if not self.clock.running:
            return
        if self._in_tick:
            logger.debug("re-entrant tick at %.3f ignored", timestamp)
            return
        self._in_tick = True
        try:
            last = self.clock.last_timestamp
            dt = 0.0 if last is None else (timestamp - last) / 1000.0
            dt = min(max(0.0, dt), self.max_dt)
            self.clock.last_timestamp = timestamp
            self.clock.frames += 1

            if not self.clock.paused:
                self._timed("step", self.step, dt)
                self.clock.accumulated_time += dt
            if self.render is not None:
                self._timed("render", self.render)

            if self.done is not None and self.done():
                self.clock.running = False
                logger.debug("scheduler finished at t=%.3fs", self.clock.accumulated_time)
                return
        finally:
            self._in_tick = False
        if self.clock.running:
            self._arm()

    def _timed(self, name: str, fn: Callable, *args) -> None:
        if self.profiler is None:
            fn(*args)
            return
        with self.profiler.section(name):
            fn(*args)

    def run(self, timestamps: Iterable[float]) -> int:
        """
        Drive the private FrameQueue through ``timestamps``.

        Raises:
            RuntimeError: If a host ``request_frame`` was supplied.
        """
        if self.frames is None:
            raise RuntimeError("run() needs the built-in FrameQueue; pump the host queue instead")
        return self.frames.run(timestamps)
