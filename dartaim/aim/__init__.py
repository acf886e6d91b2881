"""
Aim module - cursor state machine, difficulty ramping, and jitter.
"""
from .aim_state import (
    AimConfig,
    AimingAngle,
    AimingRadius,
    AimPhase,
    AimState,
    DifficultyParams,
    Locked,
)
from .jitter import JitterModel, SinusoidalJitter
from .engine import AimEngine
from .config_loader import (
    build_aim_config,
    build_difficulty_params,
    load_aim_config,
)

__all__ = [
    "AimConfig",
    "AimingAngle",
    "AimingRadius",
    "AimPhase",
    "AimState",
    "DifficultyParams",
    "Locked",
    "JitterModel",
    "SinusoidalJitter",
    "AimEngine",
    "build_aim_config",
    "build_difficulty_params",
    "load_aim_config",
]
