"""
Frame clock for host loops driving the aim engine.
"""
import time
import logging

logger = logging.getLogger(__name__)


class FrameClock:
    """
    Frame limiter that also measures the time delta fed to the engine.

    A stalled frame (window drag, debugger pause) would otherwise hand the
    engine a multi-second delta, so the measured delta is clamped to max_dt.

    Usage:
        clock = FrameClock(target_fps=60)

        while True:
            dt = clock.tick()
            engine.advance(dt)
            render()
    """

    def __init__(self, target_fps: float = 60.0, max_dt: float = 0.1):
        """
        Initialize frame clock.

        Args:
            target_fps: Target frames per second (0 = unlimited)
            max_dt: Upper bound for the delta returned by tick() (seconds)
        """
        if max_dt <= 0:
            raise ValueError("max_dt must be positive")

        self.target_fps = target_fps
        self.frame_time = 1.0 / target_fps if target_fps > 0 else 0.0
        self.max_dt = max_dt
        self.last_frame_time = time.time()

        # Statistics
        self.actual_fps = 0.0
        self.frame_count = 0
        self.clamped_frames = 0
        self.start_time = time.time()

        logger.info(f"FrameClock initialized: target={target_fps} FPS, max_dt={max_dt}s")

    def tick(self) -> float:
        """
        Wait to maintain target FPS and return the frame delta.

        Returns:
            Time since last tick in seconds, clamped to [0, max_dt]
        """
        current_time = time.time()
        elapsed = current_time - self.last_frame_time

        if self.frame_time > 0:
            sleep_time = self.frame_time - elapsed

            if sleep_time > 0:
                time.sleep(sleep_time)
                current_time = time.time()
                elapsed = current_time - self.last_frame_time

        self.last_frame_time = current_time
        self.frame_count += 1

        total_time = current_time - self.start_time
        if total_time > 0:
            self.actual_fps = self.frame_count / total_time

        return self.clamp(elapsed)

    def clamp(self, dt: float) -> float:
        """Clamp a raw delta into [0, max_dt]."""
        if dt > self.max_dt:
            self.clamped_frames += 1
            logger.debug(f"Stalled frame: dt={dt:.3f}s clamped to {self.max_dt}s")
            return self.max_dt
        return max(0.0, dt)

    def reset(self) -> None:
        """Reset statistics."""
        self.last_frame_time = time.time()
        self.frame_count = 0
        self.clamped_frames = 0
        self.start_time = time.time()
        self.actual_fps = 0.0

    def get_stats(self) -> dict:
        """Get timing statistics."""
        return {
            "target_fps": self.target_fps,
            "actual_fps": self.actual_fps,
            "frame_count": self.frame_count,
            "clamped_frames": self.clamped_frames,
        }
