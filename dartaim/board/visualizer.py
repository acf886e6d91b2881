"""
Board visualization for host loops.
"""
import cv2
import numpy as np
from typing import Optional, Tuple
import logging

from dartaim.core import HitResult
from .geometry import DartboardScorer, polar_to_cartesian

logger = logging.getLogger(__name__)


class BoardVisualizer:
    """
    Renders the dartboard, aim cursor and landed darts onto an image.

    Board units have y pointing up; image rows grow downward, so y is
    flipped when converting to pixels.
    """

    # Color scheme (BGR)
    COLORS = {
        "board": (21, 16, 20),
        "rings": (55, 149, 13),  # Green
        "segments": (192, 188, 183),  # Wire grey
        "cursor": (31, 59, 255),  # Red-orange
        "marker": (255, 255, 255),
        "text": (255, 255, 255),
    }

    def __init__(
            self,
            scorer: Optional[DartboardScorer] = None,
            size_px: int = 640,
            margin_px: int = 40,
            view_radius: float = 1.15
    ):
        """
        Initialize visualizer.

        Args:
            scorer: DartboardScorer for geometry
            size_px: Output image width and height
            margin_px: Border kept free around the view
            view_radius: Board radius mapped to the edge of the view
        """
        self.scorer = scorer or DartboardScorer()
        self.size_px = size_px
        self.center = (size_px // 2, size_px // 2)
        self.scale = (size_px / 2 - margin_px) / view_radius

    def board_to_pixel(self, x: float, y: float) -> Tuple[int, int]:
        """Convert board-local coordinates to pixel coordinates."""
        return (
            int(round(self.center[0] + x * self.scale)),
            int(round(self.center[1] - y * self.scale)),
        )

    def new_canvas(self) -> np.ndarray:
        """Blank image sized for this visualizer."""
        return np.zeros((self.size_px, self.size_px, 3), dtype=np.uint8)

    def draw_board(self, image: np.ndarray) -> np.ndarray:
        """
        Draw board face, ring boundaries, segment wires and numbers.

        Args:
            image: Input image

        Returns:
            Image with board drawn
        """
        result = image.copy()
        geometry = self.scorer.geometry
        outer_px = int(geometry.double_outer_radius * self.scale)

        cv2.circle(result, self.center, outer_px, self.COLORS["board"], -1)

        for radius in self.scorer.get_ring_boundaries().values():
            cv2.circle(result, self.center, int(radius * self.scale), self.COLORS["rings"], 1)

        half_width = geometry.segment_width / 2
        text_radius = (geometry.triple_outer_radius + geometry.double_inner_radius) / 2

        for number, start_theta, _ in self.scorer.get_segment_boundaries():
            # Wire from outer bull to board edge
            inner = self.board_to_pixel(*polar_to_cartesian(start_theta, geometry.bull_outer_radius))
            outer = self.board_to_pixel(*polar_to_cartesian(start_theta, geometry.double_outer_radius))
            cv2.line(result, inner, outer, self.COLORS["segments"], 1)

            text_x, text_y = self.board_to_pixel(
                *polar_to_cartesian(start_theta - half_width, text_radius)
            )
            cv2.putText(
                result,
                str(number),
                (text_x - 8, text_y + 5),
                cv2.FONT_HERSHEY_SIMPLEX,
                0.45,
                self.COLORS["text"],
                1
            )

        return result

    def draw_cursor(self, image: np.ndarray, position: Tuple[float, float]) -> np.ndarray:
        """Draw the aim crosshair at a board-local position."""
        result = image.copy()
        pos = self.board_to_pixel(*position)

        cv2.circle(result, pos, 10, self.COLORS["cursor"], 2)
        cv2.line(result, (pos[0] - 14, pos[1]), (pos[0] + 14, pos[1]), self.COLORS["cursor"], 1)
        cv2.line(result, (pos[0], pos[1] - 14), (pos[0], pos[1] + 14), self.COLORS["cursor"], 1)

        return result

    def draw_hit(
            self,
            image: np.ndarray,
            position: Tuple[float, float],
            hit: Optional[HitResult] = None
    ) -> np.ndarray:
        """
        Draw landed dart marker.

        Args:
            image: Input image
            position: Board-local landing position
            hit: Optional scored result to label the marker with

        Returns:
            Image with hit marker
        """
        result = image.copy()
        pos = self.board_to_pixel(*position)

        cv2.circle(result, pos, 5, self.COLORS["marker"], -1)

        if hit is not None:
            cv2.putText(
                result,
                hit.label,
                (pos[0] + 12, pos[1] - 12),
                cv2.FONT_HERSHEY_SIMPLEX,
                0.7,
                self.COLORS["text"],
                2
            )

        return result

    def draw_info_panel(
            self,
            image: np.ndarray,
            info_dict: dict,
            position: Tuple[int, int] = (10, 25)
    ) -> np.ndarray:
        """
        Draw info panel with text overlay.

        Args:
            image: Input image
            info_dict: Dictionary with info to display
            position: Top-left position (x, y)

        Returns:
            Image with info panel
        """
        result = image.copy()

        x, y = position
        line_height = 22

        for i, (key, value) in enumerate(info_dict.items()):
            cv2.putText(
                result,
                f"{key}: {value}",
                (x, y + i * line_height),
                cv2.FONT_HERSHEY_SIMPLEX,
                0.55,
                self.COLORS["text"],
                1
            )

        return result
