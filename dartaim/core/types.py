"""
Core data types for the dart aim engine.
Defines contracts between modules to ensure stable interfaces.
"""
from dataclasses import dataclass, fields
from enum import Enum
from numbers import Integral, Real
from typing import Any, Tuple

import numpy as np


class Ring(str, Enum):
    """Board scoring bands."""
    MISS = "MISS"
    BULL_INNER = "BULL_INNER"  # 50 points
    BULL_OUTER = "BULL_OUTER"  # 25 points
    SINGLE = "SINGLE"
    DOUBLE = "DOUBLE"
    TRIPLE = "TRIPLE"


def check_number_fields(config: Any) -> None:
    """
    Validate the int and float fields of a config dataclass.

    Booleans are rejected even though they are ints.

    Raises:
        ValueError: If a numeric field holds a non-number, a non-finite value,
            or a fractional value where an int is declared
    """
    for f in fields(config):
        if f.type not in (int, float):
            continue
        value = getattr(config, f.name)
        if isinstance(value, bool) or not isinstance(value, Real):
            raise ValueError(f"{f.name} must be a number, got {value!r}")
        if not np.isfinite(value):
            raise ValueError(f"{f.name} must be finite, got {value!r}")
        if f.type is int and not isinstance(value, Integral):
            raise ValueError(f"{f.name} must be an integer, got {value!r}")


@dataclass(frozen=True)
class BoardGeometry:
    """
    Dartboard geometric parameters in board units.
    The outer edge of the double ring is 1.0.
    """
    # Radii (from center)
    bull_inner_radius: float = 0.035  # Inner bull (50 points)
    bull_outer_radius: float = 0.08  # Outer bull (25 points)
    triple_inner_radius: float = 0.57  # Inner edge of triple ring
    triple_outer_radius: float = 0.64  # Outer edge of triple ring
    double_inner_radius: float = 0.93  # Inner edge of double ring
    double_outer_radius: float = 1.0  # Outer edge of double ring (board edge)

    # Segment configuration (clockwise from 12 o'clock)
    segment_sequence: Tuple[int, ...] = (20, 1, 18, 4, 13, 6, 10, 15, 2, 17,
                                         3, 19, 7, 16, 8, 11, 14, 9, 12, 5)

    def __post_init__(self):
        check_number_fields(self)
        radii = (
            self.bull_inner_radius,
            self.bull_outer_radius,
            self.triple_inner_radius,
            self.triple_outer_radius,
            self.double_inner_radius,
            self.double_outer_radius,
        )
        if any(r <= 0 for r in radii):
            raise ValueError("Board radii must be positive")
        if list(radii) != sorted(radii):
            raise ValueError("Board radii must increase from bull to double ring")
        if not self.segment_sequence:
            raise ValueError("Segment sequence must not be empty")

    @property
    def num_segments(self) -> int:
        return len(self.segment_sequence)

    @property
    def segment_width(self) -> float:
        """Angular width of one segment in radians."""
        return 2 * np.pi / self.num_segments


@dataclass(frozen=True)
class HitResult:
    """
    Scored outcome of one completed throw.
    """
    ring: Ring
    segment_index: int  # 0..19 (0 = 20 at top), -1 for bulls and misses
    number: int  # Segment number, 25/50 for bulls, 0 for a miss
    multiplier: int  # 0 = miss, 1 = single/bull, 2 = double, 3 = triple
    total: int  # Points scored
    label: str  # e.g. "T20", "D5", "25", "50", "MISS"

    @property
    def is_miss(self) -> bool:
        return self.ring is Ring.MISS

    @property
    def is_bull(self) -> bool:
        return self.ring in (Ring.BULL_INNER, Ring.BULL_OUTER)
