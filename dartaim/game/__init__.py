"""
Game module - run and round bookkeeping.
"""
from .run_state import RunConfig, RunPhase, RunState, build_run_config

__all__ = [
    "RunConfig",
    "RunPhase",
    "RunState",
    "build_run_config",
]
