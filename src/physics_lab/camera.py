# MIT License (see LICENSE)
"""
2D camera for the projectile canvas: world↔screen transforms, pan, zoom,
follow and auto-scale.

World coordinates are metres with y up; screen coordinates are canvas
pixels with y down. With ``scale`` in px/m and the world origin pinned at
screen ``(offset_x, offset_y)`` when the camera sits at (0, 0):

    sx = offset_x + (x − camera_x)·scale
    sy = offset_y − (y − camera_y)·scale

Auto-scale fits a bounding box (trajectories ∪ predicted landing/apex ∪
origin, with minimum spans) into the viewport with 20 % padding and eases
the camera toward it with smoothstep(0.1) per tick, so it never jumps.
Any manual pan or zoom suspends auto-scale for ``resume_delay_ms``.

Auto-scale and follow are mutually exclusive: enabling one disables the
other.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from .util import clamp, lerp, smoothstep

logger = logging.getLogger(__name__)

FOLLOW_TARGETS = ("projectile1", "projectile2", "both")


@dataclass
class Bounds:
    """Axis-aligned world box in metres."""
    min_x: float = 0.0
    max_x: float = 0.0
    min_y: float = 0.0
    max_y: float = 0.0

    def include(self, points: np.ndarray | Iterable) -> None:
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        if len(pts) == 0:
            return
        self.min_x = min(self.min_x, float(pts[:, 0].min()))
        self.max_x = max(self.max_x, float(pts[:, 0].max()))
        self.max_y = max(self.max_y, float(pts[:, 1].max()))

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


def fit_bounds(trajectories: Iterable, predicted_range: float = 0.0, predicted_height: float = 0.0) -> Bounds:
    """
    Box that always contains the origin, every trajectory point and the predictions.

    Minimum spans keep a short or empty flight readable:
    x ∈ [≤ −2, ≥ 10] m and y ∈ [≤ 0, ≥ 5] m.
    """
    box = Bounds()
    for traj in trajectories:
        box.include(traj)
    if predicted_range > 0.0:
        box.max_x = max(box.max_x, predicted_range)
    if predicted_height > 0.0:
        box.max_y = max(box.max_y, predicted_height)
    box.min_x = min(box.min_x, -2.0)
    box.max_x = max(box.max_x, 10.0)
    box.min_y = min(box.min_y, 0.0)
    box.max_y = max(box.max_y, 5.0)
    return box


@dataclass
class CameraView:
    """
    Smoothed camera state.

    Attributes:
        width, height: Canvas size in pixels.
        scale: Current pixels per metre.
        camera_x, camera_y: Current camera position in metres.
        target_*: Values the camera eases toward.
        offset_x, offset_y: Screen position of the world origin at camera (0, 0).
        smoothing: Per-tick interpolation factor.
        min_zoom, max_zoom: Scale limits in px/m.
        resume_delay_ms: Auto-scale pause after manual interaction.
    """
    width: float = 900.0
    height: float = 500.0
    base_scale: float = 4.0
    base_offset_x: float = 50.0
    smoothing: float = 0.1
    padding: float = 0.2
    min_zoom: float = 0.5
    max_zoom: float = 10.0
    resume_delay_ms: float = 2000.0

    def __post_init__(self) -> None:
        self.auto_scale = False
        self.follow = False
        self.follow_target = "both"
        self.reset_view()

    @property
    def base_offset_y(self) -> float:
        return self.height - 50.0

    def reset_view(self) -> None:
        """Restore base scale/offsets and forget any user interaction."""
        self.scale = self.base_scale
        self.target_scale = self.base_scale
        self.camera_x = self.camera_y = 0.0
        self.target_camera_x = self.target_camera_y = 0.0
        self.offset_x = self.base_offset_x
        self.offset_y = self.base_offset_y
        self.max_display_range = 0.0
        self.max_display_height = 0.0
        self.user_interacting = False
        self.last_interaction_ms = 0.0

    def on_reset(self) -> None:
        """Simulation reset: base scale unless auto-scaling, origin unless following."""
        if not self.auto_scale:
            self.scale = self.base_scale
        self.max_display_range = 0.0
        self.max_display_height = 0.0
        if not self.follow:
            self.camera_x = self.camera_y = 0.0
            self.target_camera_x = self.target_camera_y = 0.0

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def world_to_screen(self, x: float, y: float) -> tuple[float, float]:
        return (
            self.offset_x + (x - self.camera_x) * self.scale,
            self.offset_y - (y - self.camera_y) * self.scale,
        )

    def screen_to_world(self, sx: float, sy: float) -> tuple[float, float]:
        return (
            self.camera_x + (sx - self.offset_x) / self.scale,
            self.camera_y - (sy - self.offset_y) / self.scale,
        )

    def world_to_screen_array(self, pts: np.ndarray) -> np.ndarray:
        """Vectorised transform of an [N, 2] array of world points."""
        pts = np.asarray(pts, dtype=np.float64).reshape(-1, 2)
        out = np.empty_like(pts)
        out[:, 0] = self.offset_x + (pts[:, 0] - self.camera_x) * self.scale
        out[:, 1] = self.offset_y - (pts[:, 1] - self.camera_y) * self.scale
        return out

    # ------------------------------------------------------------------
    # Modes
    # ------------------------------------------------------------------

    def set_auto_scale(self, enabled: bool) -> None:
        self.auto_scale = bool(enabled)
        if self.auto_scale:
            self.follow = False
            self.user_interacting = False
            self.last_interaction_ms = 0.0
        logger.debug("auto-scale %s", "on" if self.auto_scale else "off")

    def set_follow(self, enabled: bool, target: str | None = None) -> None:
        if target is not None:
            self.set_follow_target(target)
        self.follow = bool(enabled)
        if self.follow:
            self.auto_scale = False

    def set_follow_target(self, target: str) -> None:
        if target not in FOLLOW_TARGETS:
            raise ValueError(f"Unknown follow target: '{target}' (expected one of {FOLLOW_TARGETS})")
        self.follow_target = target

    # ------------------------------------------------------------------
    # Manual interaction
    # ------------------------------------------------------------------

    def mark_interaction(self, now_ms: float) -> None:
        self.user_interacting = True
        self.last_interaction_ms = now_ms

    def auto_scale_suspended(self, now_ms: float) -> bool:
        """True while a manual interaction is younger than ``resume_delay_ms``."""
        if self.user_interacting and now_ms - self.last_interaction_ms < self.resume_delay_ms:
            return True
        self.user_interacting = False
        return False

    def pan(self, dx_px: float, dy_px: float, now_ms: float) -> None:
        """Drag the view by a screen-space delta."""
        self.camera_x -= dx_px / self.scale
        self.camera_y += dy_px / self.scale
        self._ease_manual()
        self.mark_interaction(now_ms)

    def zoom(self, sx: float, sy: float, zoom_in: bool, now_ms: float) -> None:
        """Zoom ×1.1 (in) or ×0.9 (out) keeping the world point under (sx, sy) fixed."""
        wx, wy = self.screen_to_world(sx, sy)
        self.scale = clamp(self.scale * (1.1 if zoom_in else 0.9), self.min_zoom, self.max_zoom)
        self.camera_x = wx - (sx - self.offset_x) / self.scale
        self.camera_y = wy + (sy - self.offset_y) / self.scale
        self._ease_manual()
        self.mark_interaction(now_ms)

    def _ease_manual(self) -> None:
        if self.auto_scale:
            return
        self.camera_x = lerp(self.camera_x, self.target_camera_x, self.smoothing)
        self.camera_y = lerp(self.camera_y, self.target_camera_y, self.smoothing)
        self.scale = lerp(self.scale, self.target_scale, self.smoothing)

    # ------------------------------------------------------------------
    # Per-tick updates
    # ------------------------------------------------------------------

    def fit_launch(self, max_range: float, max_height: float) -> None:
        """
        Launch-time fit of the predicted flight (×1.2 padding), jumping directly.

        The scale never drops below ``min_zoom``.
        """
        available_w = self.width - self.offset_x - 50.0
        available_h = self.offset_y - 50.0
        padded_range = max_range * 1.2
        padded_height = max_height * 1.2
        by_w = available_w / padded_range if padded_range > 0.0 else self.scale
        by_h = available_h / padded_height if padded_height > 0.0 else self.scale
        self.scale = max(self.min_zoom, min(by_w, by_h))
        self.max_display_range = padded_range
        self.max_display_height = padded_height

    def update_auto_scale(self, box: Bounds, now_ms: float, center_origin_visible: bool = False) -> bool:
        """
        Ease toward the view that fits ``box``.

        Returns:
            False when auto-scale is off or suspended by a recent interaction.
        """
        if not self.auto_scale or self.auto_scale_suspended(now_ms):
            return False

        view_w = box.width + box.width * self.padding + 10.0
        view_h = box.height + box.height * self.padding + 10.0
        target = min((self.width - 100.0) / view_w, (self.height - 100.0) / view_h)
        target = clamp(target, self.min_zoom, self.max_zoom)

        cx = 0.5 * (box.min_x + box.max_x)
        if center_origin_visible:
            cx = max(cx, 0.0)
        cy = 0.5 * (box.min_y + box.max_y)

        self.target_scale = target
        self.target_camera_x = cx - (self.width / 2.0 - self.offset_x) / target
        self.target_camera_y = cy + (self.height / 2.0 - self.offset_y) / target

        k = smoothstep(self.smoothing)
        self.camera_x = lerp(self.camera_x, self.target_camera_x, k)
        self.camera_y = lerp(self.camera_y, self.target_camera_y, k)
        self.scale = lerp(self.scale, self.target_scale, k)
        return True

    def update_follow(self, positions: dict[str, tuple[float, float] | None]) -> bool:
        """
        Ease the camera so the followed point sits at the canvas centre.

        Args:
            positions: ``{"projectile1": (x, y) | None, "projectile2": ...}``;
                None marks a projectile that is not in flight. For "both",
                the mean of those with y ≥ 0 is followed.
        """
        if not self.follow:
            return False
        tx = ty = 0.0
        if self.follow_target == "both":
            active = [p for p in positions.values() if p is not None and p[1] >= 0.0]
            if active:
                tx = sum(p[0] for p in active) / len(active)
                ty = sum(p[1] for p in active) / len(active)
        else:
            p = positions.get(self.follow_target)
            if p is not None:
                tx, ty = p
        self.target_camera_x = tx - (self.width / 2.0 - self.offset_x) / self.scale
        self.target_camera_y = ty + (self.height / 2.0 - self.offset_y) / self.scale
        self._ease_manual()
        return True
