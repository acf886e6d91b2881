"""
Aim phases and configuration for the aim state machine.

State flow:
- AIMING_ANGLE: Cursor sweeps clockwise around the board at a fixed radius
- AIMING_RADIUS: Bearing is locked, cursor bounces between center and edge
- LOCKED: Throw scored, marker held briefly before the next attempt

Each phase carries only the data that is meaningful while it is active,
so e.g. a radius direction cannot exist during angle aiming.
"""
from enum import Enum
from dataclasses import dataclass
from typing import Union

import numpy as np

from dartaim.core import check_number_fields


class AimPhase(Enum):
    """Phases of a single throw."""
    AIMING_ANGLE = "aiming_angle"
    AIMING_RADIUS = "aiming_radius"
    LOCKED = "locked"


@dataclass
class AimingAngle:
    theta: float
    time_in_phase: float = 0.0

    @property
    def phase(self) -> AimPhase:
        return AimPhase.AIMING_ANGLE


@dataclass
class AimingRadius:
    locked_theta: float
    r: float
    direction: int = 1  # +1 outward, -1 inward
    time_in_phase: float = 0.0

    @property
    def phase(self) -> AimPhase:
        return AimPhase.AIMING_RADIUS


@dataclass
class Locked:
    locked_theta: float
    locked_r: float
    timer: float  # Seconds left before the next throw

    @property
    def phase(self) -> AimPhase:
        return AimPhase.LOCKED


AimState = Union[AimingAngle, AimingRadius, Locked]


@dataclass(frozen=True)
class DifficultyParams:
    """Cursor speeds, ramps and jitter."""
    # Angle phase (rad/s, ramp in rad/s^2)
    base_angular_speed: float = 1.8
    max_angular_speed: float = 4.0
    angular_ramp: float = 0.6

    # Radius phase (board units/s, ramp in units/s^2)
    base_radial_speed: float = 1.2
    max_radial_speed: float = 2.6
    radial_ramp: float = 0.4

    # Jitter
    angle_jitter_amplitude: float = 0.04  # radians
    angle_jitter_frequency: float = 7.0  # rad/s
    radius_jitter_amplitude: float = 0.02  # board units
    radius_jitter_frequency: float = 9.0  # rad/s

    def __post_init__(self):
        check_number_fields(self)
        if self.base_angular_speed > self.max_angular_speed:
            raise ValueError("base_angular_speed must not exceed max_angular_speed")
        if self.base_radial_speed > self.max_radial_speed:
            raise ValueError("base_radial_speed must not exceed max_radial_speed")
        non_negative = {
            "base_angular_speed": self.base_angular_speed,
            "angular_ramp": self.angular_ramp,
            "base_radial_speed": self.base_radial_speed,
            "radial_ramp": self.radial_ramp,
            "angle_jitter_amplitude": self.angle_jitter_amplitude,
            "angle_jitter_frequency": self.angle_jitter_frequency,
            "radius_jitter_amplitude": self.radius_jitter_amplitude,
            "radius_jitter_frequency": self.radius_jitter_frequency,
        }
        for name, value in non_negative.items():
            if value < 0:
                raise ValueError(f"{name} must be non-negative")


@dataclass(frozen=True)
class AimConfig:
    """Fixed aim geometry and timings."""
    initial_theta: float = float(np.pi / 2)  # Start at 12 o'clock
    display_radius: float = 0.85  # Cursor radius while aiming the angle
    radius_max: float = 1.1  # Past the board edge so misses are possible
    lock_hold_sec: float = 0.6  # Marker hold before the next throw

    def __post_init__(self):
        check_number_fields(self)
        if self.radius_max <= 0:
            raise ValueError("radius_max must be positive")
        if not 0 <= self.display_radius <= self.radius_max:
            raise ValueError("display_radius must lie within [0, radius_max]")
        if self.lock_hold_sec < 0:
            raise ValueError("lock_hold_sec must be non-negative")
