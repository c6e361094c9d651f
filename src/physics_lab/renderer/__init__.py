# MIT License (see LICENSE)
"""
Rendering adapters for visualization.

This subpackage provides abstract and concrete renderer implementations:
    - RendererAdapter: Abstract base class defining the rendering interface.
    - DebugRenderer: Text/console output for debugging.
    - NullRenderer: No-op renderer for benchmarking.
    - BufferedRenderer: Records frames of primitives for playback or export.

The simulators have no rendering dependency; these adapters are optional.

Typical usage:
    from physics_lab.renderer import DebugRenderer

    renderer = DebugRenderer()
    renderer.render(simulator)
"""
from .adapter import (
    Primitive,
    Frame,
    RendererAdapter,
    DebugRenderer,
    NullRenderer,
    BufferedRenderer,
)

__all__ = [
    "Primitive",
    "Frame",
    "RendererAdapter",
    "DebugRenderer",
    "NullRenderer",
    "BufferedRenderer",
]
