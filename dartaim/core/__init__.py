"""
Core module - shared data types, utilities, and configuration.
"""
from .types import (
    BoardGeometry,
    HitResult,
    Ring,
    check_number_fields,
)
from .config_loader import (
    DEFAULT_CONFIG_PATH,
    build_config,
    known_overrides,
    load_settings,
    load_yaml,
)
from .frame_clock import FrameClock

__all__ = [
    # Types
    "BoardGeometry",
    "HitResult",
    "Ring",
    "check_number_fields",
    # Config
    "load_yaml",
    "DEFAULT_CONFIG_PATH",
    "build_config",
    "known_overrides",
    "load_settings",
    # Timing
    "FrameClock",
]
