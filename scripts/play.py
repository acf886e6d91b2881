"""
Interactive aim game in an OpenCV window.

Drives the aim engine with a frame clock and hands every scored throw to the
run tracker.

Usage:
    python scripts/play.py
    python scripts/play.py --config config/default_config.yaml --seed 7

Controls:
    SPACE: Confirm (lock angle, then radius)
    n:     Next round (after a round is complete)
    r:     Reset run
    q:     Quit
"""
import cv2
import sys
import argparse
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dartaim.core import DEFAULT_CONFIG_PATH, FrameClock, load_settings
from dartaim.aim import AimEngine, AimPhase, build_aim_config, build_difficulty_params
from dartaim.board import DartboardScorer
from dartaim.board.visualizer import BoardVisualizer
from dartaim.game import RunPhase, RunState, build_run_config
import logging

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class AimGame:
    """Host loop: input, timing and rendering around the aim engine."""

    WINDOW_NAME = "Throw For Broke"

    def __init__(self, config_path: Path, seed=None, target_fps: float = 60.0):
        settings = load_settings(config_path)

        self.scorer = DartboardScorer()
        self.run = RunState(config=build_run_config(settings))
        self.engine = AimEngine(
            difficulty=build_difficulty_params(settings),
            config=build_aim_config(settings),
            scorer=self.scorer,
            on_hit=self.run.submit_throw,
            seed=seed,
        )
        self.visualizer = BoardVisualizer(self.scorer)
        self.clock = FrameClock(target_fps=target_fps)

        self.board_image = self.visualizer.draw_board(self.visualizer.new_canvas())
        self.last_hit = None

    def confirm(self) -> None:
        """Forward confirm only while the run accepts darts."""
        if self.run.phase != RunPhase.AIMING:
            return
        hit = self.engine.confirm()
        if hit is not None:
            self.last_hit = hit

    def render(self):
        image = self.board_image
        position = self.engine.get_display_position()

        if self.engine.get_phase() == AimPhase.LOCKED:
            image = self.visualizer.draw_hit(image, position, self.last_hit)
        else:
            image = self.visualizer.draw_cursor(image, position)

        info = {
            "Round": self.run.round,
            "Target": self.run.target_score,
            "Score": self.run.total_score,
            "Darts": self.run.darts_left,
            "Coins": self.run.coins,
        }
        if self.last_hit is not None:
            info["Last"] = self.last_hit.label
        if self.run.phase == RunPhase.ROUND_COMPLETE:
            info["Status"] = "ROUND COMPLETE - press n"
        elif self.run.phase == RunPhase.RUN_OVER:
            info["Status"] = "RUN OVER - press r"

        return self.visualizer.draw_info_panel(image, info)

    def run_loop(self) -> None:
        """Run until the player quits."""
        print("\n" + "=" * 60)
        print("Throw For Broke")
        print("=" * 60)
        print("Controls:")
        print("  - SPACE: Lock angle, then radius")
        print("  - 'n': Next round")
        print("  - 'r': Reset run")
        print("  - 'q': Quit")
        print("=" * 60 + "\n")

        cv2.namedWindow(self.WINDOW_NAME)

        while True:
            dt = self.clock.tick()
            self.engine.advance(dt)

            cv2.imshow(self.WINDOW_NAME, self.render())

            key = cv2.waitKey(1) & 0xFF

            if key == ord('q'):
                break
            elif key == ord(' '):
                self.confirm()
            elif key == ord('n'):
                if self.run.start_next_round():
                    self.engine.reset()
                    self.last_hit = None
            elif key == ord('r'):
                self.run.reset_run()
                self.engine.reset()
                self.last_hit = None

        cv2.destroyAllWindows()

        # Print summary
        print("\n" + "=" * 60)
        print("Summary:")
        print(f"  Rounds reached: {self.run.round}")
        print(f"  Coins: {self.run.coins}")
        print(f"  Throws: {self.engine.throws_completed}")
        print("=" * 60)


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Interactive dart aim game"
    )

    parser.add_argument(
        "--config",
        type=str,
        default=str(DEFAULT_CONFIG_PATH),
        help=f"Settings file (default: {DEFAULT_CONFIG_PATH})"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Jitter seed for a reproducible wobble"
    )
    parser.add_argument(
        "--fps",
        type=float,
        default=60.0,
        help="Target frame rate (default: 60)"
    )

    return parser.parse_args()


def main():
    """Run the game."""
    args = parse_args()

    try:
        game = AimGame(Path(args.config), seed=args.seed, target_fps=args.fps)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return

    game.run_loop()


if __name__ == "__main__":
    main()
