# MIT License (see LICENSE)
"""
Renderer adapters for the visualizers.

Simulators never paint anything. Each frame they describe themselves as a
list of geometric primitives (circles, lines, polylines, arcs, text) in
canvas pixels; an adapter turns those into output for some backend
(canvas bridge, matplotlib, a recording, a terminal).
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, TextIO
import sys

import numpy as np

from ..types import Point2

if TYPE_CHECKING:
    from ..simulators.base import Simulator


@dataclass(frozen=True)
class Primitive:
    """
    One drawing instruction.

    Attributes:
        kind: "circle", "line", "polyline", "arc" or "text".
        points: Anchor points (centre, endpoints, vertices or text origin).
        radius: Circle/arc radius.
        angles: (start, end) of an arc in radians.
        text: Label for "text" primitives.
        tag: Semantic role ("bob", "rod", "electron", "incident", ...).
    """
    kind: str
    points: tuple[Point2, ...]
    radius: float = 0.0
    angles: tuple[float, float] = (0.0, 0.0)
    text: str = ""
    tag: str = ""

    def as_dict(self) -> dict:
        d = {"kind": self.kind, "points": [list(p) for p in self.points], "tag": self.tag}
        if self.kind in ("circle", "arc"):
            d["radius"] = self.radius
        if self.kind == "arc":
            d["angles"] = list(self.angles)
        if self.kind == "text":
            d["text"] = self.text
        return d


def _pt(p) -> Point2:
    return float(p[0]), float(p[1])


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Subclasses implement ``begin_frame``, ``draw_primitive`` and
    ``end_frame``; the ``draw_*`` helpers build primitives for them.

    Usage:
        renderer = MyRenderer()
        renderer.render(simulator)
    """

    @abstractmethod
    def begin_frame(self, time: float) -> None:
        """
        Begin a new frame.

        Args:
            time: Current simulation time in seconds.
        """
        ...

    @abstractmethod
    def draw_primitive(self, prim: Primitive) -> None:
        ...

    @abstractmethod
    def end_frame(self) -> None:
        ...

    def draw_circle(self, center, radius: float, tag: str = "") -> None:
        self.draw_primitive(Primitive("circle", (_pt(center),), radius=float(radius), tag=tag))

    def draw_line(self, a, b, tag: str = "") -> None:
        self.draw_primitive(Primitive("line", (_pt(a), _pt(b)), tag=tag))

    def draw_polyline(self, points: Iterable | np.ndarray, tag: str = "") -> None:
        pts = tuple(_pt(p) for p in points)
        if len(pts) >= 2:
            self.draw_primitive(Primitive("polyline", pts, tag=tag))

    def draw_arc(self, center, radius: float, start: float, end: float, tag: str = "") -> None:
        self.draw_primitive(
            Primitive("arc", (_pt(center),), radius=float(radius), angles=(float(start), float(end)), tag=tag)
        )

    def draw_text(self, position, text: str, tag: str = "") -> None:
        self.draw_primitive(Primitive("text", (_pt(position),), text=text, tag=tag))

    def render(self, simulator: "Simulator") -> None:
        """Draw one complete frame of ``simulator``."""
        self.begin_frame(simulator.time)
        simulator.draw(self)
        self.end_frame()


class DebugRenderer(RendererAdapter):
    """
    Console/text renderer for development and testing.

    Output:
        === pendulum t=0.5000 ===
        line rod (300.00, 50.00) -> (350.00, 240.00)
        circle bob (350.00, 240.00) r=12.00
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = True):
        """
        Args:
            output: Output stream (defaults to sys.stdout).
            verbose: If False, only the frame header and primitive counts are written.
        """
        self.output = output or sys.stdout
        self.verbose = verbose
        self._count = 0

    def begin_frame(self, time: float) -> None:
        self._count = 0
        self.output.write(f"=== Frame t={time:.4f} ===\n")

    def draw_primitive(self, prim: Primitive) -> None:
        self._count += 1
        if not self.verbose:
            return
        pts = " -> ".join(f"({x:.2f}, {y:.2f})" for x, y in prim.points)
        line = f"{prim.kind} {prim.tag or '-'} {pts}"
        if prim.kind in ("circle", "arc"):
            line += f" r={prim.radius:.2f}"
        if prim.kind == "text":
            line += f" '{prim.text}'"
        self.output.write(line + "\n")

    def end_frame(self) -> None:
        if not self.verbose:
            self.output.write(f"{self._count} primitives\n")
        self.output.write("\n")
        self.output.flush()


class NullRenderer(RendererAdapter):
    """No-op renderer, for benchmarking the steppers without drawing overhead."""

    def begin_frame(self, time: float) -> None:
        pass

    def draw_primitive(self, prim: Primitive) -> None:
        pass

    def end_frame(self) -> None:
        pass


@dataclass
class Frame:
    time: float
    primitives: list[Primitive] = field(default_factory=list)

    def tagged(self, tag: str) -> list[Primitive]:
        return [p for p in self.primitives if p.tag == tag]


class BufferedRenderer(RendererAdapter):
    """
    Records every frame for later playback or export.

    Example:
        renderer = BufferedRenderer()
        sim.renderer = renderer
        sim.start(); sim.run_frames(100)
        renderer.frames[-1].tagged("bob")
    """

    def __init__(self, max_frames: int | None = None):
        self.frames: list[Frame] = []
        self.max_frames = max_frames
        self._current: Frame | None = None

    def begin_frame(self, time: float) -> None:
        self._current = Frame(time)

    def draw_primitive(self, prim: Primitive) -> None:
        if self._current is None:
            return
        self._current.primitives.append(prim)

    def end_frame(self) -> None:
        if self._current is not None:
            self.frames.append(self._current)
            self._current = None
            if self.max_frames is not None and len(self.frames) > self.max_frames:
                del self.frames[0]

    def clear(self) -> None:
        self.frames.clear()
