"""
Tests for the host frame clock.
"""
import time

import pytest

from dartaim.core import FrameClock


def test_frame_clock_basic():
    """Test basic frame limiting."""
    clock = FrameClock(target_fps=50.0)

    assert clock.target_fps == 50.0
    assert clock.frame_time == 0.02

    for _ in range(5):
        dt = clock.tick()
        assert 0.0 <= dt <= clock.max_dt

    assert clock.frame_count == 5
    assert clock.actual_fps > 0


def test_frame_clock_unlimited():
    """Test unlimited FPS."""
    clock = FrameClock(target_fps=0)

    assert clock.frame_time == 0.0

    start = time.time()
    for _ in range(100):
        clock.tick()
    elapsed = time.time() - start

    # Should be very fast (< 0.1 sec)
    assert elapsed < 0.1


def test_stalled_frame_is_clamped():
    """A long stall is reported as max_dt."""
    clock = FrameClock(target_fps=0, max_dt=0.05)

    time.sleep(0.1)
    dt = clock.tick()

    assert dt == 0.05
    assert clock.clamped_frames == 1


def test_clamp():
    """Test delta clamping."""
    clock = FrameClock(max_dt=0.1)

    assert clock.clamp(0.016) == 0.016
    assert clock.clamp(5.0) == 0.1
    assert clock.clamp(-0.2) == 0.0


def test_invalid_max_dt():
    with pytest.raises(ValueError):
        FrameClock(max_dt=0.0)


def test_reset_and_stats():
    """Test statistics reset."""
    clock = FrameClock(target_fps=0, max_dt=0.1)
    clock.tick()
    clock.clamp(1.0)

    stats = clock.get_stats()
    assert stats["frame_count"] == 1
    assert stats["clamped_frames"] == 1

    clock.reset()
    assert clock.frame_count == 0
    assert clock.clamped_frames == 0
    assert clock.actual_fps == 0.0
