"""
Dart aim engine - two-phase aiming, hand jitter, and dartboard scoring.
"""
__version__ = "0.1.0"
