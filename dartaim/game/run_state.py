"""
Run and round bookkeeping.

A run is a sequence of rounds. Each round hands the player a fixed number
of darts to reach a target score; clearing the target earns the overshoot
as coins and unlocks the next, harder round. Missing it ends the run.
"""
from enum import Enum
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field
import logging

import numpy as np

from dartaim.core import HitResult, build_config, check_number_fields

logger = logging.getLogger(__name__)


class RunPhase(Enum):
    """Run progress."""
    AIMING = "aiming"  # Darts left in the current round
    ROUND_COMPLETE = "round-complete"  # Target reached, waiting for next round
    RUN_OVER = "run-over"  # Target missed


@dataclass(frozen=True)
class RunConfig:
    """Round sizing and target progression."""
    darts_per_round: int = 9
    starting_target: int = 75
    target_growth: float = 1.25  # Target multiplier per cleared round

    def __post_init__(self):
        check_number_fields(self)
        if self.darts_per_round <= 0:
            raise ValueError("darts_per_round must be positive")
        if self.starting_target < 0:
            raise ValueError("starting_target must be non-negative")
        if self.target_growth <= 0:
            raise ValueError("target_growth must be positive")


def build_run_config(settings: Optional[Dict[str, Any]] = None) -> RunConfig:
    """Construct RunConfig from the `run` section of settings."""
    settings = settings or {}
    return build_config(RunConfig, settings.get("run"))


@dataclass
class RunState:
    """Tracks rounds, darts, target and coins for one run."""
    config: RunConfig = field(default_factory=RunConfig)

    round: int = field(init=False)
    darts_left: int = field(init=False)
    target_score: int = field(init=False)
    throws: List[HitResult] = field(init=False)  # Newest first
    coins: int = field(init=False)
    phase: RunPhase = field(init=False)

    def __post_init__(self):
        """Start a fresh run."""
        self.reset_run()

    @property
    def total_score(self) -> int:
        """Points scored this round."""
        return sum(hit.total for hit in self.throws)

    @property
    def score_needed(self) -> int:
        return max(0, self.target_score - self.total_score)

    @property
    def score_over(self) -> int:
        return max(0, self.total_score - self.target_score)

    def submit_throw(self, hit: HitResult) -> bool:
        """
        Record a completed throw.

        The round resolves when the last dart lands.

        Args:
            hit: Scored throw handed off by the aim engine

        Returns:
            True if the throw was recorded, False if the round is not accepting darts
        """
        if self.phase != RunPhase.AIMING:
            logger.debug(f"Throw ignored: run is {self.phase.value}")
            return False
        if self.darts_left <= 0:
            return False

        self.throws.insert(0, hit)
        self.darts_left -= 1

        logger.debug(
            f"Round {self.round}: {hit.label} for {hit.total} "
            f"(total {self.total_score}/{self.target_score}, {self.darts_left} darts left)"
        )

        if self.darts_left == 0:
            total = self.total_score

            if total >= self.target_score:
                self.coins += total - self.target_score
                self.phase = RunPhase.ROUND_COMPLETE
                logger.info(
                    f"Round {self.round} complete: {total}/{self.target_score}, coins={self.coins}"
                )
            else:
                self.phase = RunPhase.RUN_OVER
                logger.info(f"Run over in round {self.round}: {total}/{self.target_score}")

        return True

    def start_next_round(self) -> bool:
        """
        Advance to the next round with a higher target.

        Returns:
            True if started, False if the current round is not complete
        """
        if self.phase != RunPhase.ROUND_COMPLETE:
            return False

        self.round += 1
        # Half-up rounding
        self.target_score = int(np.floor(self.target_score * self.config.target_growth + 0.5))
        self.throws = []
        self.darts_left = self.config.darts_per_round
        self.phase = RunPhase.AIMING

        logger.info(f"Round {self.round} started: target={self.target_score}")
        return True

    def reset_run(self) -> None:
        """Reset to round one."""
        self.round = 1
        self.target_score = self.config.starting_target
        self.darts_left = self.config.darts_per_round
        self.throws = []
        self.coins = 0
        self.phase = RunPhase.AIMING

        logger.info("Run reset")
