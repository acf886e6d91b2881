"""
Board module - dartboard geometry and scoring.

The OpenCV overlay lives in `dartaim.board.visualizer` and is imported
explicitly by hosts that render.
"""
from .geometry import (
    DartboardScorer,
    cartesian_to_polar,
    polar_to_cartesian,
    score,
    wrap_0_to_2pi,
    wrap_angle,
)

__all__ = [
    "DartboardScorer",
    "cartesian_to_polar",
    "polar_to_cartesian",
    "score",
    "wrap_0_to_2pi",
    "wrap_angle",
]
