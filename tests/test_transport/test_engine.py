"""
Test Suite: Transport Animation Engine
======================================

Drives the engine with a ManualFrameScheduler: start latching, frame
content, stop/restart semantics and self-rescheduling.
"""

import pytest

from qpu_visualizer.transport.engine import (
    ManualFrameScheduler,
    TransportEngine,
    render_frames,
)
from qpu_visualizer.transport.schedule import PHASE_HANDOVER_START, PHASE_TRANSPORT


@pytest.fixture
def scheduler():
    return ManualFrameScheduler()


@pytest.fixture
def engine(scheduler):
    return TransportEngine(scheduler=scheduler)


class TestLifecycle:

    def test_start_requests_one_frame(self, engine, scheduler):
        assert not engine.running
        engine.start()
        assert engine.running
        assert scheduler.pending == 1

    def test_double_start_is_noop(self, engine, scheduler):
        engine.start()
        engine.start()
        assert scheduler.pending == 1

    def test_first_frame_latches_start(self, engine, scheduler):
        engine.start()
        scheduler.advance(100.0)
        frame = engine.last_frame
        assert frame.elapsed == 0.0
        assert frame.state.time == 0.0
        assert frame.state.stage == PHASE_HANDOVER_START
        assert scheduler.pending == 1, "Engine must re-request a frame after each one"

    def test_elapsed_time_drives_cycle(self, engine, scheduler):
        engine.start()
        scheduler.advance(100.0)
        scheduler.advance(104.0)
        frame = engine.last_frame
        assert frame.elapsed == pytest.approx(4.0)
        assert frame.state.time == pytest.approx(0.5)
        assert frame.state.stage == PHASE_TRANSPORT
        assert frame.cursor_time == pytest.approx(4.0)
        assert frame.ring_angle == pytest.approx(320.0)

    def test_stop_cancels_pending_frame(self, engine, scheduler):
        engine.start()
        scheduler.advance(1.0)
        engine.stop()
        assert not engine.running
        assert scheduler.pending == 0
        assert scheduler.advance(2.0) == 0
        engine.stop()

    def test_restart_begins_at_zero(self, engine, scheduler):
        engine.start()
        scheduler.advance(10.0)
        scheduler.advance(13.0)
        engine.stop()
        engine.start()
        scheduler.advance(50.0)
        assert engine.last_frame.state.time == 0.0
        assert engine.last_frame.timestamp == 50.0

    def test_on_frame_may_stop_engine(self, scheduler):
        frames = []

        def _once(frame):
            frames.append(frame)
            engine.stop()

        engine = TransportEngine(scheduler=scheduler, on_frame=_once)
        engine.start()
        scheduler.advance(0.0)
        scheduler.advance(1.0)
        assert len(frames) == 1
        assert scheduler.pending == 0

    def test_restart_from_on_frame_keeps_one_loop(self, scheduler):
        frames = []

        def _restart_once(frame):
            frames.append(frame)
            if len(frames) == 1:
                engine.set_path_policy("sequential")
                engine.stop()
                engine.start()

        engine = TransportEngine(scheduler=scheduler, on_frame=_restart_once)
        engine.start()
        scheduler.advance(0.0)
        assert scheduler.pending == 1, "Restart inside on_frame must not add a second loop"
        assert scheduler.advance(1.0) == 1
        assert len(frames) == 2
        assert frames[-1].state.time == 0.0
        engine.stop()
        assert scheduler.pending == 0

    def test_verbose(self, scheduler, capsys):
        engine = TransportEngine(scheduler=scheduler, verbose=True)
        engine.start()
        engine.stop()
        out = capsys.readouterr().out
        assert "started" in out and "stopped" in out


class TestFrames:

    def test_frame_at_is_pure(self, engine):
        assert engine.frame_at(6.0, 2.0).state == engine.frame_at(6.0, 2.0).state
        assert engine.frame_at(6.0, 2.0).state.time == pytest.approx(0.5)

    def test_frame_before_start_clamps(self, engine):
        frame = engine.frame_at(1.0, 5.0)
        assert frame.elapsed == 0.0
        assert frame.state.time == 0.0

    def test_frame_carries_waveforms(self, engine):
        frame = engine.frame_at(3.0)
        assert len(frame.waveforms) == 100

    def test_path_policy_switch(self, engine, scheduler):
        engine.start()
        scheduler.advance(0.0)
        engine.set_path_policy("straight")
        scheduler.advance(2.4)
        assert engine.last_frame.state.path_policy == "sequential"
        assert engine.last_frame.state.label == "Sequential Transport"

    def test_unknown_policy_raises(self):
        with pytest.raises(ValueError):
            TransportEngine(path_policy="zigzag")

    def test_render_frames(self):
        frames = render_frames([5.0, 6.0, 9.0, 13.0], path_policy="sequential")
        assert len(frames) == 4
        assert [f.state.time for f in frames] == pytest.approx([0.0, 0.125, 0.5, 0.0])
