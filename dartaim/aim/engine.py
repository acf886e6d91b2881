"""
Aim engine: the time-driven cursor state machine.

1. AIMING_ANGLE → AIMING_RADIUS: confirm() locks the jittered bearing
2. AIMING_RADIUS → LOCKED: confirm() locks the jittered radius and scores the throw
3. LOCKED → AIMING_ANGLE: hold timer expires

The host calls advance(dt) once per frame and confirm() on player input,
both from the same thread. Scored throws leave through the on_hit callback;
the engine knows nothing about rounds or targets.
"""
from typing import Callable, Optional, Tuple
import logging

import numpy as np

from dartaim.core import HitResult
from dartaim.board import DartboardScorer, polar_to_cartesian, wrap_angle
from .aim_state import (
    AimConfig,
    AimingAngle,
    AimingRadius,
    AimPhase,
    AimState,
    DifficultyParams,
    Locked,
)
from .jitter import JitterModel

logger = logging.getLogger(__name__)


class AimEngine:
    """
    Two-stage dart aiming with ramping speed and simulated hand jitter.

    Speed ramps only within a single aiming attempt: each phase starts at
    its base speed and accelerates the longer the player waits.
    """

    def __init__(
            self,
            difficulty: Optional[DifficultyParams] = None,
            config: Optional[AimConfig] = None,
            scorer: Optional[DartboardScorer] = None,
            on_hit: Optional[Callable[[HitResult], object]] = None,
            seed: Optional[int] = None,
            auto_setup: bool = True
    ):
        """
        Initialize aim engine.

        Args:
            difficulty: Speeds, ramps and jitter (default: DifficultyParams())
            config: Aim geometry and hold timing (default: AimConfig())
            scorer: Board scorer (default: standard board)
            on_hit: Receives each HitResult when a throw completes
            seed: Jitter seed for reproducible wobble (None = random)
            auto_setup: Call setup() immediately
        """
        self.difficulty = difficulty or DifficultyParams()
        self.config = config or AimConfig()
        self.scorer = scorer or DartboardScorer()
        self.on_hit = on_hit

        self.jitter = JitterModel.from_seed(
            angle_amplitude=self.difficulty.angle_jitter_amplitude,
            angle_frequency=self.difficulty.angle_jitter_frequency,
            radius_amplitude=self.difficulty.radius_jitter_amplitude,
            radius_frequency=self.difficulty.radius_jitter_frequency,
            seed=seed,
        )

        self.state: Optional[AimState] = None
        self.elapsed_time = 0.0
        self.is_ready = False

        # Statistics
        self.throws_completed = 0
        self.state_transitions = 0

        if auto_setup:
            self.setup()

    def setup(self) -> None:
        """Enter the first aiming phase. Safe to call more than once."""
        if self.is_ready:
            return

        self.state = self._fresh_state()
        self.is_ready = True

        logger.info(
            f"AimEngine ready: angular={self.difficulty.base_angular_speed}"
            f"-{self.difficulty.max_angular_speed} rad/s, "
            f"radial={self.difficulty.base_radial_speed}"
            f"-{self.difficulty.max_radial_speed} units/s, "
            f"radius_max={self.config.radius_max}"
        )

    def advance(self, dt: float) -> None:
        """
        Advance the simulation by one frame.

        Args:
            dt: Frame delta in seconds (negative values count as zero)
        """
        if not self.is_ready:
            return

        dt = max(0.0, dt)
        self.elapsed_time += dt
        state = self.state

        if state.phase == AimPhase.AIMING_ANGLE:
            # Clockwise sweep: theta decreases
            speed = self.angular_speed(state.time_in_phase)
            state.theta = wrap_angle(state.theta - speed * dt)
            state.time_in_phase += dt

        elif state.phase == AimPhase.AIMING_RADIUS:
            speed = self.radial_speed(state.time_in_phase)
            state.r += state.direction * speed * dt

            # Bounce between center and radius_max
            if state.r >= self.config.radius_max:
                state.r = self.config.radius_max
                state.direction = -1
            elif state.r <= 0.0:
                state.r = 0.0
                state.direction = 1

            state.time_in_phase += dt

        elif state.phase == AimPhase.LOCKED:
            state.timer -= dt
            if state.timer <= 0:
                self._transition_to(self._fresh_state())

    def confirm(self) -> Optional[HitResult]:
        """
        Lock the current aiming phase.

        Returns:
            HitResult when this call completes a throw, otherwise None
        """
        if not self.is_ready:
            logger.debug("Confirm ignored: engine not set up")
            return None

        state = self.state

        if state.phase == AimPhase.AIMING_ANGLE:
            locked_theta = state.theta + self.jitter.angle(self.elapsed_time)
            self._transition_to(AimingRadius(
                locked_theta=locked_theta,
                r=self.config.display_radius,
            ))
            return None

        if state.phase == AimPhase.AIMING_RADIUS:
            locked_r = self._clamp_radius(state.r + self.jitter.radius(self.elapsed_time))
            hit = self.scorer.score(state.locked_theta, locked_r)

            self._transition_to(Locked(
                locked_theta=state.locked_theta,
                locked_r=locked_r,
                timer=self.config.lock_hold_sec,
            ))
            self.throws_completed += 1

            logger.info(f"Throw {self.throws_completed}: {hit.label} ({hit.total} points)")

            if self.on_hit is not None:
                self.on_hit(hit)

            return hit

        logger.debug("Confirm ignored while locked")
        return None

    def reset(self) -> None:
        """Abandon the current throw and start a fresh angle phase."""
        if not self.is_ready:
            return
        self._transition_to(self._fresh_state())

    def angular_speed(self, time_in_phase: Optional[float] = None) -> float:
        """
        Angular cursor speed after time_in_phase seconds of angle aiming.

        Args:
            time_in_phase: Seconds since the angle phase was entered
                (default: current angle phase timer)

        Returns:
            Speed in rad/s, capped at max_angular_speed
        """
        if time_in_phase is None:
            time_in_phase = self.angle_time_in_phase
        d = self.difficulty
        return min(d.max_angular_speed, d.base_angular_speed + d.angular_ramp * time_in_phase)

    def radial_speed(self, time_in_phase: Optional[float] = None) -> float:
        """Radial cursor speed, see angular_speed()."""
        if time_in_phase is None:
            time_in_phase = self.radius_time_in_phase
        d = self.difficulty
        return min(d.max_radial_speed, d.base_radial_speed + d.radial_ramp * time_in_phase)

    def get_phase(self) -> Optional[AimPhase]:
        """Current phase (None before setup)."""
        return self.state.phase if self.state is not None else None

    def get_display_polar(self) -> Tuple[float, float]:
        """
        Jittered cursor position for the current frame.

        Returns:
            (theta, r) in board polar coordinates
        """
        state = self.state
        t = self.elapsed_time

        if state is None:
            return self.config.initial_theta, self.config.display_radius

        if state.phase == AimPhase.AIMING_ANGLE:
            return state.theta + self.jitter.angle(t), self.config.display_radius

        if state.phase == AimPhase.AIMING_RADIUS:
            return state.locked_theta, self._clamp_radius(state.r + self.jitter.radius(t))

        return state.locked_theta, state.locked_r

    def get_display_position(self) -> Tuple[float, float]:
        """Jittered cursor position as board-local (x, y)."""
        return polar_to_cartesian(*self.get_display_polar())

    # Logical aim fields

    @property
    def phase(self) -> Optional[AimPhase]:
        return self.get_phase()

    @property
    def theta(self) -> float:
        """Raw (unjittered) cursor bearing."""
        if isinstance(self.state, AimingAngle):
            return self.state.theta
        if self.state is None:
            return self.config.initial_theta
        return self.state.locked_theta

    @property
    def r(self) -> float:
        """Raw (unjittered) cursor radius."""
        if isinstance(self.state, AimingRadius):
            return self.state.r
        if isinstance(self.state, Locked):
            return self.state.locked_r
        return self.config.display_radius

    @property
    def locked_theta(self) -> Optional[float]:
        if isinstance(self.state, (AimingRadius, Locked)):
            return self.state.locked_theta
        return None

    @property
    def locked_r(self) -> Optional[float]:
        if isinstance(self.state, Locked):
            return self.state.locked_r
        return None

    @property
    def radius_direction(self) -> Optional[int]:
        if isinstance(self.state, AimingRadius):
            return self.state.direction
        return None

    @property
    def angle_time_in_phase(self) -> float:
        if isinstance(self.state, AimingAngle):
            return self.state.time_in_phase
        return 0.0

    @property
    def radius_time_in_phase(self) -> float:
        if isinstance(self.state, AimingRadius):
            return self.state.time_in_phase
        return 0.0

    @property
    def lock_timer(self) -> float:
        if isinstance(self.state, Locked):
            return self.state.timer
        return 0.0

    def get_stats(self) -> dict:
        """Get engine statistics."""
        phase = self.get_phase()
        return {
            "current_phase": phase.value if phase else None,
            "state_transitions": self.state_transitions,
            "throws_completed": self.throws_completed,
            "elapsed_time": self.elapsed_time,
        }

    def _fresh_state(self) -> AimingAngle:
        return AimingAngle(theta=wrap_angle(self.config.initial_theta))

    def _clamp_radius(self, r: float) -> float:
        return float(np.clip(r, 0.0, self.config.radius_max))

    def _transition_to(self, new_state: AimState) -> None:
        """Transition to new state."""
        logger.debug(f"Aim transition: {self.state.phase.value} → {new_state.phase.value}")
        self.state = new_state
        self.state_transitions += 1
