# MIT License (see LICENSE)
"""
Common controller for every visualizer (the Simulation Engine Pattern).

A Simulator owns:
    - a ``*Params`` dataclass (Parameter Store), changed only through
      ``set_parameter`` → CommandQueue → ``apply_pending``;
    - its DynamicState (subclass attributes);
    - a Scheduler driving ``step`` once per host frame;
    - zero or more HistorySeries for the graphs.

Tick order:
    1. apply_pending(): drain SetParameter commands (the params are then
       frozen for the rest of the tick);
    2. advance(dt): the physics Stepper;
    3. render: the attached RendererAdapter, if any, is handed the simulator.

Subclasses implement ``advance``, ``reset_state``, ``snapshot`` and
``draw``; they may override ``on_params_changed`` and ``is_done``.
"""
from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, TYPE_CHECKING

from ..params import CommandQueue, SetParameter
from ..profiler import Profiler
from ..scheduler import FrameCallback, Scheduler
from ..types import Snapshot

if TYPE_CHECKING:
    from ..renderer.adapter import RendererAdapter

logger = logging.getLogger(__name__)


class Simulator(ABC):
    """
    Base controller.

    Attributes:
        kind: Short name used in presets and snapshots.
        params: The Parameter Store.
        commands: Pending SetParameter commands.
        scheduler: The animation loop.
        renderer: Optional adapter receiving drawing primitives each frame.
        time: Simulated seconds since the last reset.
    """

    kind = "simulator"
    params_type: type = object

    def __init__(
        self,
        params: Any = None,
        request_frame: Callable[[FrameCallback], Any] | None = None,
        profiler: Profiler | None = None,
        max_dt: float = 0.25,
        renderer: "RendererAdapter | None" = None,
    ):
        self.params = params if params is not None else self.params_type()
        self.commands = CommandQueue(self.params)
        self.renderer = renderer
        self.scheduler = Scheduler(
            step=self.step,
            render=self._render_frame,
            done=self.is_done,
            request_frame=request_frame,
            max_dt=max_dt,
            profiler=profiler,
        )
        self.time = 0.0

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    def set_parameter(self, name: str, value: Any, immediate: bool = False) -> SetParameter:
        """
        Queue a parameter change for the next tick.

        Args:
            name: Field of the params dataclass.
            value: Raw value (strings are parsed).
            immediate: Apply now instead of at the next tick.

        Raises:
            ValueError: Unknown parameter name or invalid choice.
        """
        cmd = self.commands.submit(name, value)
        if immediate:
            self.apply_pending()
        return cmd

    def apply_pending(self) -> list[str]:
        changed = self.commands.drain()
        if changed:
            self.on_params_changed(changed)
        return changed

    def on_params_changed(self, names: list[str]) -> None:
        """Hook run after queued parameters changed (recompute derived values)."""

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        self.scheduler.start()

    def pause(self) -> None:
        self.scheduler.pause()

    def resume(self) -> None:
        self.scheduler.resume()

    def toggle_pause(self) -> bool:
        return self.scheduler.toggle_pause()

    def stop(self) -> None:
        self.scheduler.stop()

    @property
    def running(self) -> bool:
        return self.scheduler.running

    @property
    def paused(self) -> bool:
        return self.scheduler.paused

    def reset(self) -> None:
        """Stop the loop and restore the initial DynamicState (parameters are kept)."""
        self.scheduler.reset()
        self.time = 0.0
        self.reset_state()
        logger.debug("%s reset", self.kind)

    def step(self, dt: float) -> None:
        """One tick: drain commands, then advance the physics."""
        self.apply_pending()
        self.advance(dt)

    def step_once(self, dt: float) -> bool:
        """Manual single step while stopped or paused."""
        return self.scheduler.step_once(dt)

    def run(self, timestamps: Iterable[float]) -> int:
        """Drive the built-in frame queue; see Scheduler.run."""
        return self.scheduler.run(timestamps)

    def run_frames(self, count: int, fps: float = 60.0) -> int:
        if self.scheduler.frames is None:
            raise RuntimeError("run_frames() needs the built-in FrameQueue; pump the host queue instead")
        return self.scheduler.frames.run_frames(count, fps=fps)

    def is_done(self) -> bool:
        """Termination predicate checked after each frame."""
        return False

    # ------------------------------------------------------------------
    # Subclass hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def advance(self, dt: float) -> None:
        """The Stepper. Must never raise for any parameter set."""

    @abstractmethod
    def reset_state(self) -> None:
        """Restore the DynamicState to its initial value."""

    @abstractmethod
    def snapshot(self) -> Snapshot:
        """Plain-number view of the state and derived display values."""

    @abstractmethod
    def draw(self, renderer: "RendererAdapter") -> None:
        """Emit drawing primitives for the current state."""

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render_frame(self) -> None:
        if self.renderer is not None:
            self.renderer.render(self)
