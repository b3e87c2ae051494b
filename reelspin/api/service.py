"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine calls
2. Manages sessions
3. Formats responses for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .schemas import (
    CreateSessionRequest,
    MachineSpecResponse,
    SessionResponse,
    SpinResponse,
    ErrorResponse,
    PaylineMatchInfo,
    SymbolInfo,
    PaylineInfo,
    SessionStatus,
    ErrorCode,
)
from ..errors import SpinInProgressError
from ..session import SessionManager, SpinSession
from ..spec_schema import MachineSpec, default_machine_spec, ensure_valid


@dataclass
class SpinService:
    """
    Main API service.

    Usage:
        service = SpinService()

        session = service.create_session(CreateSessionRequest(seed=7))
        result = service.spin(session.session_id)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)
    default_spec: MachineSpec = field(default_factory=default_machine_spec)

    # Used when a request does not carry its own seed
    default_seed: int | None = None

    def get_default_spec(self) -> MachineSpecResponse:
        return MachineSpecResponse(**_spec_fields(self.default_spec))

    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """
        Create a new play session.

        Raises SpecValidationError if an inline spec is invalid.
        """
        if request.spec is not None:
            spec = ensure_valid(MachineSpec.from_dict(request.spec.model_dump()))
        else:
            spec = self.default_spec

        seed = request.seed if request.seed is not None else self.default_seed
        session = self.session_manager.create_session(
            spec=spec,
            seed=seed,
            player_name=request.player_name,
        )
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _session_not_found(session_id)
        return self._session_to_response(session)

    def get_session_spec(self, session_id: str) -> MachineSpecResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _session_not_found(session_id)
        return MachineSpecResponse(**_spec_fields(session.spec))

    def end_session(self, session_id: str) -> bool:
        return self.session_manager.end_session(session_id)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    def spin(self, session_id: str) -> SpinResponse | ErrorResponse:
        """
        Spin a session's machine.

        Concurrency violations come back as SPIN_IN_PROGRESS errors;
        anything else raised by the engine propagates.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return _session_not_found(session_id)

        try:
            outcome = session.spin()
        except SpinInProgressError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.SPIN_IN_PROGRESS)

        return SpinResponse(
            session_id=session.session_id,
            grid=[[s.symbol_id for s in row] for row in outcome.grid.rows()],
            matches=[PaylineMatchInfo(**m.to_dict()) for m in outcome.matches],
            total_payout=outcome.total_payout,
            is_win=outcome.is_win,
            winning_positions=list(outcome.winning_positions),
            spin_count=session.spin_count,
            total_won=session.total_won,
        )

    def _session_to_response(self, session: SpinSession) -> SessionResponse:
        return SessionResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            player_name=session.player_name,
            machine_name=session.spec.name,
            can_spin=session.engine.can_spin,
            spin_count=session.spin_count,
            total_won=session.total_won,
            created_at=session.created_at,
        )


def _session_not_found(session_id: str) -> ErrorResponse:
    return ErrorResponse(
        error=f"Session not found: {session_id}",
        error_code=ErrorCode.SESSION_NOT_FOUND,
    )


def _spec_fields(spec: MachineSpec) -> dict:
    return {
        "name": spec.name,
        "reel_count": spec.reel_count,
        "row_count": spec.row_count,
        "min_match_count": spec.min_match_count,
        "symbols": [
            SymbolInfo(id=s.symbol_id, name=s.name, value=s.value) for s in spec.symbols
        ],
        "paylines": [
            PaylineInfo(positions=list(p.positions), active=p.active, name=p.name)
            for p in spec.paylines
        ],
    }
