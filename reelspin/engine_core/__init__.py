"""
Engine Core - Deterministic spin resolution.

The engine is the runtime that:
1. Takes a MachineSpec and a RandomProvider
2. Draws a fresh ReelGrid
3. Scores every active payline against it
4. Returns an immutable SpinOutcome
5. Notifies subscribers when a spin starts and completes
"""

from .random_provider import (
    RandomProvider,
    SeededRandomProvider,
    SystemRandomProvider,
    SequenceRandomProvider,
    build_random_provider,
)
from .grid import ReelGrid
from .reel_generator import ReelGenerator
from .outcome import PaylineMatch, SpinOutcome
from .payline_evaluator import PaylineEvaluator
from .notifications import Notification
from .engine import SlotEngine

__all__ = [
    "RandomProvider",
    "SeededRandomProvider",
    "SystemRandomProvider",
    "SequenceRandomProvider",
    "build_random_provider",
    "ReelGrid",
    "ReelGenerator",
    "PaylineMatch",
    "SpinOutcome",
    "PaylineEvaluator",
    "Notification",
    "SlotEngine",
]
