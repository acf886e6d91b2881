"""
Dartboard geometry calculations and segment mapping.

Bearings are in radians, measured from the +x axis of the board plane.
The aim cursor sweeps clockwise by decreasing theta, so the 20 segment
sits at theta = pi/2 and the 6 segment at theta = 0.
"""
import numpy as np
from typing import List, Optional, Tuple
import logging

from dartaim.core import BoardGeometry, HitResult, Ring

logger = logging.getLogger(__name__)

TWO_PI = 2 * np.pi


def wrap_angle(theta: float) -> float:
    """Wrap a bearing into (-pi, pi]."""
    wrapped = float(np.pi - np.mod(np.pi - theta, TWO_PI))
    return wrapped + TWO_PI if wrapped <= -np.pi else wrapped


def wrap_0_to_2pi(theta: float) -> float:
    """Wrap an angle into [0, 2pi)."""
    wrapped = float(np.mod(theta, TWO_PI))
    # np.mod can round tiny negative inputs up to exactly 2pi
    return 0.0 if wrapped >= TWO_PI else wrapped


def polar_to_cartesian(theta: float, r: float) -> Tuple[float, float]:
    """Convert a board bearing and radius to board-local (x, y)."""
    return float(r * np.cos(theta)), float(r * np.sin(theta))


def cartesian_to_polar(x: float, y: float) -> Tuple[float, float]:
    """
    Convert board-local (x, y) to polar coordinates.

    Returns:
        (theta, r) with theta in (-pi, pi]
    """
    r = float(np.hypot(x, y))
    theta = wrap_angle(float(np.arctan2(y, x)))
    return theta, r


class DartboardScorer:
    """
    Maps board polar coordinates to segments, rings and scores.

    Scoring is pure: the same (theta, r) always yields an equal HitResult,
    and every real input yields exactly one ring.
    """

    def __init__(self, board_geometry: Optional[BoardGeometry] = None):
        """
        Initialize scorer.

        Args:
            board_geometry: Board dimensions (default: BoardGeometry())
        """
        self.geometry = board_geometry or BoardGeometry()

        logger.info(
            f"DartboardScorer initialized: {self.geometry.num_segments} segments, "
            f"board radius={self.geometry.double_outer_radius}"
        )

    def segment_index_from_theta(self, theta: float) -> int:
        """
        Convert a bearing to a segment index.

        Args:
            theta: Bearing in radians (any real value)

        Returns:
            Index into the segment sequence (0 = straight up)
        """
        width = self.geometry.segment_width

        # Clockwise rotation from straight up
        delta = wrap_0_to_2pi(np.pi / 2 - theta)

        # Offset by half a segment so index 0 is centered on straight up
        index = int(np.floor((delta + width / 2) / width))
        return index % self.geometry.num_segments

    def segment_number(self, theta: float) -> int:
        """Segment number (1-20) under a bearing."""
        return self.geometry.segment_sequence[self.segment_index_from_theta(theta)]

    def radius_to_ring(self, r: float) -> Tuple[Ring, int]:
        """
        Convert radius to ring and multiplier.

        Args:
            r: Distance from center in board units

        Returns:
            (ring, multiplier); bulls report multiplier 1, a miss 0
        """
        g = self.geometry

        if r > g.double_outer_radius:
            return Ring.MISS, 0

        elif r <= g.bull_inner_radius:
            return Ring.BULL_INNER, 1

        elif r <= g.bull_outer_radius:
            return Ring.BULL_OUTER, 1

        elif g.double_inner_radius <= r <= g.double_outer_radius:
            return Ring.DOUBLE, 2

        elif g.triple_inner_radius <= r <= g.triple_outer_radius:
            return Ring.TRIPLE, 3

        else:
            return Ring.SINGLE, 1

    def score(self, theta: float, r: float) -> HitResult:
        """
        Score a locked board position.

        Args:
            theta: Bearing in radians
            r: Distance from center in board units

        Returns:
            HitResult for the position
        """
        ring, multiplier = self.radius_to_ring(r)

        if ring is Ring.MISS:
            hit = HitResult(ring=ring, segment_index=-1, number=0,
                            multiplier=0, total=0, label="MISS")
        elif ring is Ring.BULL_INNER:
            hit = HitResult(ring=ring, segment_index=-1, number=50,
                            multiplier=1, total=50, label="50")
        elif ring is Ring.BULL_OUTER:
            hit = HitResult(ring=ring, segment_index=-1, number=25,
                            multiplier=1, total=25, label="25")
        else:
            index = self.segment_index_from_theta(theta)
            number = self.geometry.segment_sequence[index]
            prefix = {1: "", 2: "D", 3: "T"}[multiplier]
            hit = HitResult(
                ring=ring,
                segment_index=index,
                number=number,
                multiplier=multiplier,
                total=number * multiplier,
                label=f"{prefix}{number}",
            )

        logger.debug(f"Score: θ={theta:.3f}rad, r={r:.3f} → {hit.label} = {hit.total}")

        return hit

    def is_on_board(self, r: float) -> bool:
        """Check if a radius lands inside the scoring area."""
        return r <= self.geometry.double_outer_radius

    def get_ring_boundaries(self) -> dict:
        """
        Get all ring boundaries in board units.

        Returns:
            Dictionary with ring names and radii
        """
        g = self.geometry
        return {
            "bull_inner": g.bull_inner_radius,
            "bull_outer": g.bull_outer_radius,
            "triple_inner": g.triple_inner_radius,
            "triple_outer": g.triple_outer_radius,
            "double_inner": g.double_inner_radius,
            "double_outer": g.double_outer_radius,
        }

    def get_segment_boundaries(self) -> List[Tuple[int, float, float]]:
        """
        Get segment edge bearings.

        Returns:
            List of (segment_number, start_theta, end_theta) tuples, where
            start is the edge reached first when sweeping clockwise
        """
        boundaries = []
        half_width = self.geometry.segment_width / 2

        for i, number in enumerate(self.geometry.segment_sequence):
            center = np.pi / 2 - i * self.geometry.segment_width
            boundaries.append((
                number,
                wrap_angle(center + half_width),
                wrap_angle(center - half_width),
            ))

        return boundaries


_default_scorer: Optional[DartboardScorer] = None


def score(theta: float, r: float) -> HitResult:
    """Score a position on the standard board."""
    global _default_scorer
    if _default_scorer is None:
        _default_scorer = DartboardScorer()
    return _default_scorer.score(theta, r)
