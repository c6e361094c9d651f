# MIT License (see LICENSE)
import io
import logging

import pytest
from physics_lab import SIMULATORS, create_simulator, setup_logging
from physics_lab.scheduler import FrameQueue


def test_registry_covers_every_visualizer():
    assert sorted(SIMULATORS) == sorted([
        "charging", "heatflow", "series", "parallel", "pendulum",
        "projectile", "reflection", "refraction", "thermal", "freefall",
    ])
    assert create_simulator("Pendulum").kind == "pendulum"
    with pytest.raises(ValueError):
        create_simulator("orbit")


def test_every_simulator_lifecycle():
    """start → pause → resume → reset never raises and leaves the loop stopped."""
    for kind in SIMULATORS:
        sim = create_simulator(kind)
        sim.start()
        sim.run_frames(5)
        sim.pause()
        sim.run_frames(2)
        sim.resume()
        sim.run_frames(2)
        sim.reset()
        assert not sim.running
        assert sim.time == 0.0


def test_host_driven_simulator():
    frames = FrameQueue()
    sim = create_simulator("series", request_frame=frames.request)
    sim.start()
    frames.run_frames(61)
    assert sim.time == pytest.approx(1.0)
    with pytest.raises(RuntimeError):
        sim.run_frames(1)


def test_setup_logging_does_not_stack_handlers():
    out = io.StringIO()
    logger = setup_logging("INFO", stream=out)
    n = len(logger.handlers)
    setup_logging("DEBUG")
    assert len(logger.handlers) == n
    logging.getLogger("physics_lab.test").info("hello")
    assert "hello" in out.getvalue()
    setup_logging("WARNING")
