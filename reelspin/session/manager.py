"""
Session Manager - Creates and tracks play sessions.

A session is one player at one machine:
- Created with a spec and a random provider
- Owns exactly one SlotEngine
- Tracks spin count, total won and the last outcome
- Destroyed when the player leaves

Sessions are EPHEMERAL: nothing is written anywhere. Ending a session
drops its engine and outcomes.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
import logging
import threading
import time
import uuid

from ..engine_core import SlotEngine, SpinOutcome, RandomProvider, build_random_provider
from ..spec_schema import MachineSpec

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a play session."""
    READY = "ready"
    SPINNING = "spinning"
    ENDED = "ended"


@dataclass
class SpinSession:
    """
    An ephemeral play session.

    Subscribes to its engine's notifications so that state, counters
    and last_outcome follow every spin, including ones driven directly
    through session.engine.
    """
    session_id: str
    engine: SlotEngine
    created_at: float
    player_name: str = "Player"

    state: SessionState = SessionState.READY
    spin_count: int = 0
    total_won: int = 0
    last_outcome: SpinOutcome | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.engine.spin_started.subscribe(self._on_spin_started)
        self.engine.spin_completed.subscribe(self._on_spin_completed)

    @property
    def spec(self) -> MachineSpec:
        return self.engine.spec

    def is_active(self) -> bool:
        return self.state != SessionState.ENDED

    def spin(self) -> SpinOutcome:
        """Spin this session's engine."""
        if not self.is_active():
            raise RuntimeError(f"Session {self.session_id} has ended")
        try:
            return self.engine.spin()
        finally:
            if self.is_active() and self.engine.can_spin:
                self.state = SessionState.READY

    def _on_spin_started(self) -> None:
        self.state = SessionState.SPINNING

    def _on_spin_completed(self, outcome: SpinOutcome) -> None:
        self.spin_count += 1
        self.total_won += outcome.total_payout
        self.last_outcome = outcome

    def close(self) -> None:
        self.engine.spin_started.unsubscribe(self._on_spin_started)
        self.engine.spin_completed.unsubscribe(self._on_spin_completed)
        self.state = SessionState.ENDED
        self.last_outcome = None


class SessionManager:
    """
    Manages play sessions.

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, SpinSession] = {}
        self._lock = threading.Lock()

    def create_session(
        self,
        spec: MachineSpec,
        random_provider: RandomProvider | None = None,
        seed: int | None = None,
        player_name: str = "Player",
    ) -> SpinSession:
        """
        Create a new session.

        Args:
            spec: Machine specification (validated by the engine)
            random_provider: Explicit provider; wins over seed
            seed: Seed for a reproducible provider when no provider is given
            player_name: Display name

        Returns:
            New SpinSession, ready to spin
        """
        provider = random_provider or build_random_provider(seed)
        engine = SlotEngine(spec, provider)
        engine.initialize()

        session = SpinSession(
            session_id=str(uuid.uuid4()),
            engine=engine,
            created_at=time.time(),
            player_name=player_name,
            metadata={"seed": seed} if seed is not None else {},
        )
        with self._lock:
            self._sessions[session.session_id] = session
        logger.info("Created session %s on '%s'", session.session_id, spec.name)
        return session

    def get_session(self, session_id: str) -> SpinSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """End a session and drop it. Returns False if it did not exist."""
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.close()
        logger.info(
            "Ended session %s after %d spin(s)", session_id, session.spin_count
        )
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """End sessions older than max_age. Returns how many were ended."""
        now = time.time()
        stale = [
            sid for sid, session in list(self._sessions.items())
            if now - session.created_at > max_age_seconds
        ]
        for sid in stale:
            self.end_session(sid)
        return len(stale)
