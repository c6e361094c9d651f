# MIT License (see LICENSE)
import pytest
from physics_lab.profiler import Profiler
from physics_lab.scheduler import FrameQueue, Scheduler


class Recorder:
    def __init__(self, finish_after=None):
        self.dts = []
        self.renders = 0
        self.finish_after = finish_after

    def step(self, dt):
        self.dts.append(dt)

    def render(self):
        self.renders += 1

    def done(self):
        return self.finish_after is not None and len(self.dts) >= self.finish_after


def test_first_frame_has_zero_dt():
    rec = Recorder()
    frames = FrameQueue()
    sched = Scheduler(rec.step, rec.render, request_frame=frames.request)
    sched.start()
    frames.run([1000.0, 1016.0, 1048.0])
    assert rec.dts == pytest.approx([0.0, 0.016, 0.032])
    assert sched.clock.accumulated_time == pytest.approx(0.048)
    assert sched.clock.frames == 3


def test_dt_clamped_after_stall():
    rec = Recorder()
    sched = Scheduler(rec.step, max_dt=0.25)
    sched.start()
    sched.run([0.0, 5000.0, 4000.0])
    assert rec.dts == [0.0, 0.25, 0.0]


def test_pause_skips_step_but_renders():
    rec = Recorder()
    sched = Scheduler(rec.step, rec.render)
    sched.start()
    sched.run([0.0, 16.0])
    sched.pause()
    sched.run([32.0, 48.0])
    assert len(rec.dts) == 2
    assert rec.renders == 4
    sched.resume()
    sched.run([1000.0, 1016.0])
    # resuming does not count the paused gap
    assert rec.dts[2:] == pytest.approx([0.0, 0.016])


def test_toggle_pause():
    sched = Scheduler(lambda dt: None)
    sched.start()
    assert sched.toggle_pause() is True
    assert sched.paused
    assert sched.toggle_pause() is False
    assert sched.running


def test_done_stops_loop():
    rec = Recorder(finish_after=3)
    sched = Scheduler(rec.step, rec.render, done=rec.done)
    sched.start()
    n = sched.run(float(i) * 16.0 for i in range(100))
    assert n == 3
    assert not sched.running
    assert sched.frames.armed == 0


def test_stop_stops_rearming():
    rec = Recorder()
    sched = Scheduler(rec.step)
    sched.start()
    sched.run([0.0, 16.0])
    sched.stop()
    assert sched.run([32.0, 48.0]) == 1
    assert len(rec.dts) == 2


def test_start_is_idempotent():
    rec = Recorder()
    sched = Scheduler(rec.step)
    sched.start()
    sched.start()
    assert sched.frames.armed == 1
    sched.run([0.0])
    assert len(rec.dts) == 1


def test_step_once_only_when_not_running():
    rec = Recorder()
    sched = Scheduler(rec.step, rec.render)
    assert sched.step_once(0.1)
    sched.start()
    assert not sched.step_once(0.1)
    sched.pause()
    assert sched.step_once(1.0)
    assert rec.dts == [0.1, 0.25]
    assert rec.renders == 2


def test_reset_zeroes_clock():
    sched = Scheduler(lambda dt: None)
    sched.start()
    sched.run([0.0, 100.0])
    sched.reset()
    assert not sched.running
    assert sched.clock.frames == 0
    assert sched.clock.accumulated_time == 0.0


def test_host_frame_source():
    armed = []
    sched = Scheduler(lambda dt: None, request_frame=armed.append)
    sched.start()
    assert armed == [sched.tick]
    with pytest.raises(RuntimeError):
        sched.run([0.0])


def test_profiler_sections():
    profiler = Profiler()
    sched = Scheduler(lambda dt: None, lambda: None, profiler=profiler)
    sched.start()
    sched.run([0.0, 16.0, 32.0])
    summary = profiler.stats.summary()
    assert summary["step"]["n"] == 3
    assert summary["render"]["n"] == 3
    assert summary["step"]["max_ms"] >= 0.0
