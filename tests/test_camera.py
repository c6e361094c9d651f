# MIT License (see LICENSE)
import numpy as np
import pytest
from physics_lab.camera import CameraView, fit_bounds
from physics_lab.simulators import ProjectileSimulator


def test_world_screen_round_trip():
    cam = CameraView()
    cam.camera_x, cam.camera_y, cam.scale = 12.0, -3.0, 2.5
    sx, sy = cam.world_to_screen(40.0, 7.0)
    x, y = cam.screen_to_world(sx, sy)
    assert x == pytest.approx(40.0) and y == pytest.approx(7.0)
    arr = cam.world_to_screen_array(np.array([[40.0, 7.0], [0.0, 0.0]]))
    assert arr[0].tolist() == pytest.approx([sx, sy])


def test_origin_maps_to_offset():
    cam = CameraView()
    assert cam.world_to_screen(0.0, 0.0) == (50.0, 450.0)
    # y is up in the world, down on screen
    assert cam.world_to_screen(0.0, 10.0)[1] < 450.0


def test_fit_bounds_minimum_spans():
    box = fit_bounds([])
    assert (box.min_x, box.max_x, box.min_y, box.max_y) == (-2.0, 10.0, 0.0, 5.0)
    box = fit_bounds([[(0.0, 0.0), (120.0, 40.0)]], predicted_range=200.0, predicted_height=30.0)
    assert box.max_x == 200.0 and box.max_y == 40.0


def test_auto_scale_eases_without_jumping():
    """Each tick moves smoothstep(0.1) ≈ 2.8 % of the way toward the target."""
    cam = CameraView()
    cam.set_auto_scale(True)
    box = fit_bounds([], predicted_range=250.0, predicted_height=60.0)
    s0 = cam.scale
    assert cam.update_auto_scale(box, now_ms=0.0)
    k = 0.1 * 0.1 * (3.0 - 2.0 * 0.1)
    assert cam.scale == pytest.approx(s0 + (cam.target_scale - s0) * k)
    for _ in range(400):
        cam.update_auto_scale(box, now_ms=0.0)
    assert cam.scale == pytest.approx(cam.target_scale, rel=1e-3)
    assert cam.min_zoom <= cam.scale <= cam.max_zoom


def test_manual_interaction_suspends_auto_scale():
    cam = CameraView()
    cam.set_auto_scale(True)
    box = fit_bounds([], predicted_range=250.0, predicted_height=60.0)
    cam.pan(30.0, 0.0, now_ms=1000.0)
    assert not cam.update_auto_scale(box, now_ms=1500.0)
    assert not cam.update_auto_scale(box, now_ms=2999.0)
    assert cam.update_auto_scale(box, now_ms=3000.0)


def test_zoom_keeps_point_under_cursor():
    cam = CameraView()
    before = cam.screen_to_world(300.0, 200.0)
    cam.zoom(300.0, 200.0, zoom_in=True, now_ms=0.0)
    # with no smoothing toward targets the anchored point is exact
    cam2 = CameraView(smoothing=0.0)
    cam2.zoom(300.0, 200.0, zoom_in=True, now_ms=0.0)
    assert cam2.scale == pytest.approx(4.4)
    assert cam2.screen_to_world(300.0, 200.0) == pytest.approx(before)
    for _ in range(100):
        cam2.zoom(300.0, 200.0, zoom_in=True, now_ms=0.0)
    assert cam2.scale == cam2.max_zoom


def test_follow_and_auto_scale_are_exclusive():
    cam = CameraView()
    cam.set_auto_scale(True)
    cam.set_follow(True, "projectile1")
    assert cam.follow and not cam.auto_scale
    cam.set_auto_scale(True)
    assert cam.auto_scale and not cam.follow
    with pytest.raises(ValueError):
        cam.set_follow_target("projectile3")


def test_follow_centres_target():
    cam = CameraView(smoothing=1.0)
    cam.set_follow(True, "both")
    cam.update_follow({"projectile1": (100.0, 20.0), "projectile2": (50.0, 40.0)})
    sx, sy = cam.world_to_screen(75.0, 30.0)
    assert sx == pytest.approx(cam.width / 2.0)
    assert sy == pytest.approx(cam.height / 2.0)


def test_follow_ignores_landed_projectiles():
    cam = CameraView(smoothing=1.0)
    cam.set_follow(True, "both")
    cam.update_follow({"projectile1": (100.0, 20.0), "projectile2": None})
    sx, _ = cam.world_to_screen(100.0, 20.0)
    assert sx == pytest.approx(cam.width / 2.0)


def test_projectile_follow_camera_moves():
    sim = ProjectileSimulator()
    sim.set_follow(True, "projectile1")
    sim.launch()
    sim.run_frames(100)
    assert sim.camera.follow
    assert sim.camera.camera_x != 0.0
    sim.reset_view()
    assert sim.camera.camera_x == 0.0 and sim.camera.scale == sim.camera.base_scale
