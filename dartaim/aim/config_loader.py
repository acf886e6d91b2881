"""
Utilities to load aim-related configuration from YAML files.

Recognised sections:
    difficulty: DifficultyParams fields (speeds, ramps, jitter)
    aim:        AimConfig fields (start bearing, radii, hold time)
"""
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
import logging

from dartaim.core import build_config, load_settings
from .aim_state import AimConfig, DifficultyParams

logger = logging.getLogger(__name__)


def build_difficulty_params(settings: Optional[Dict[str, Any]] = None) -> DifficultyParams:
    """
    Construct DifficultyParams from settings.

    Args:
        settings: Raw settings dictionary (e.g., from load_settings)

    Returns:
        Populated DifficultyParams instance

    Raises:
        ValueError: If the section is malformed or breaks a base <= max invariant
    """
    settings = settings or {}
    return build_config(DifficultyParams, settings.get("difficulty"))


def build_aim_config(settings: Optional[Dict[str, Any]] = None) -> AimConfig:
    """Construct AimConfig from settings."""
    settings = settings or {}
    return build_config(AimConfig, settings.get("aim"))


def load_aim_config(config_path: Optional[Path] = None) -> Tuple[DifficultyParams, AimConfig]:
    """
    Convenience wrapper to load and build the aim configs in one call.
    """
    settings = load_settings(config_path)
    difficulty = build_difficulty_params(settings)
    aim_config = build_aim_config(settings)

    logger.debug(f"Aim config: {difficulty}, {aim_config}")

    return difficulty, aim_config
