"""
Simulated hand jitter.

Jitter is a smooth sinusoid of elapsed time rather than per-frame noise,
so the cursor does not flicker and a given seed always reproduces the
same wobble.
"""
from dataclasses import dataclass
from typing import Optional
import logging

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SinusoidalJitter:
    """One jitter channel: amplitude * sin(frequency * t + phase)."""
    amplitude: float
    frequency: float  # rad/s
    phase: float = 0.0  # Seed offset in radians

    def __call__(self, t: float) -> float:
        return float(self.amplitude * np.sin(self.frequency * t + self.phase))


@dataclass(frozen=True)
class JitterModel:
    """Independent angular and radial jitter channels."""
    angle: SinusoidalJitter
    radius: SinusoidalJitter

    @classmethod
    def from_seed(
            cls,
            angle_amplitude: float,
            angle_frequency: float,
            radius_amplitude: float,
            radius_frequency: float,
            seed: Optional[int] = None
    ) -> "JitterModel":
        """
        Build a jitter model with phase offsets drawn once from a seeded RNG.

        Args:
            angle_amplitude: Peak angular offset (radians)
            angle_frequency: Angular wobble frequency (rad/s)
            radius_amplitude: Peak radial offset (board units)
            radius_frequency: Radial wobble frequency (rad/s)
            seed: RNG seed (None = fresh entropy)

        Returns:
            JitterModel with fixed phase offsets
        """
        rng = np.random.default_rng(seed)
        angle_phase, radius_phase = rng.uniform(0.0, 2 * np.pi, size=2)

        logger.debug(
            f"Jitter seeded: angle_phase={angle_phase:.3f}, radius_phase={radius_phase:.3f}"
        )

        return cls(
            angle=SinusoidalJitter(angle_amplitude, angle_frequency, float(angle_phase)),
            radius=SinusoidalJitter(radius_amplitude, radius_frequency, float(radius_phase)),
        )
