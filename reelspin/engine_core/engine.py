"""
Slot Engine - The single entry point for resolving spins.

Lifecycle of spin():
1. Reject if a spin is already in progress (SpinInProgressError)
2. Mark in progress, emit spin_started
3. Generate reels, evaluate paylines, build the SpinOutcome
4. Emit spin_completed(outcome)
5. Clear the in-progress flag, even if step 3 or 4 raised

Notifications are synchronous: a spin_started subscriber already sees
can_spin == False, and a slow subscriber delays the flag reset.
"""

from __future__ import annotations
import logging
import threading

from ..errors import SpinInProgressError
from ..spec_schema.machine_spec import MachineSpec
from ..spec_schema.validation import ensure_valid
from .notifications import Notification
from .outcome import SpinOutcome
from .payline_evaluator import PaylineEvaluator
from .random_provider import RandomProvider
from .reel_generator import ReelGenerator

logger = logging.getLogger(__name__)


class SlotEngine:
    """
    Resolves spins for one machine spec.

    Usage:
        engine = SlotEngine(default_machine_spec(), SeededRandomProvider(42))
        engine.spin_completed.subscribe(show_result)

        outcome = engine.spin()
        if outcome.is_win:
            ...

    At most one spin runs at a time per engine. A second request while
    the flag is set fails immediately; it is never queued.
    """

    def __init__(self, spec: MachineSpec, random_provider: RandomProvider):
        if spec is None:
            raise ValueError("spec is required")
        if random_provider is None:
            raise ValueError("random_provider is required")

        self.spec = ensure_valid(spec)
        self.random_provider = random_provider
        self.reel_generator = ReelGenerator(spec, random_provider)
        self.payline_evaluator = PaylineEvaluator(spec)

        self.spin_started = Notification("spin_started")
        self.spin_completed = Notification("spin_completed")

        self._guard = threading.Lock()
        self._spinning = False

    @property
    def can_spin(self) -> bool:
        return not self._spinning

    @property
    def is_spinning(self) -> bool:
        return self._spinning

    def initialize(self) -> None:
        """Reset the engine to spinnable. Safe to call repeatedly."""
        with self._guard:
            self._spinning = False

    def spin(self) -> SpinOutcome:
        """
        Resolve one spin.

        Raises:
            SpinInProgressError: another spin on this engine has not finished.
            Any error from the random provider or a subscriber, unchanged.
        """
        self._acquire()
        try:
            logger.debug("Spin started on '%s'", self.spec.name)
            self.spin_started.emit()

            try:
                outcome = self._resolve()
            except Exception as e:
                logger.warning("Spin failed on '%s': %s: %s", self.spec.name, type(e).__name__, e)
                raise

            self.spin_completed.emit(outcome)
            logger.info(
                "Spin completed on '%s': %d winning line(s), total payout %d",
                self.spec.name, len(outcome.matches), outcome.total_payout,
            )
            return outcome
        finally:
            self._release()

    def _acquire(self) -> None:
        # Test-and-set under the guard; never block on an in-flight spin
        with self._guard:
            if self._spinning:
                logger.warning("Rejected spin on '%s': spin already in progress", self.spec.name)
                raise SpinInProgressError()
            self._spinning = True

    def _release(self) -> None:
        with self._guard:
            self._spinning = False

    def _resolve(self) -> SpinOutcome:
        grid = self.reel_generator.generate()
        matches = self.payline_evaluator.evaluate(grid)
        return SpinOutcome(grid, matches)
