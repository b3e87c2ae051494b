"""
API Module - HTTP interface for game clients.

Exposes the engine via REST API. A client:
1. Fetches the machine spec to lay out its reels
2. Opens a play session
3. Requests spins and renders the returned grid and wins
4. Ends the session

All state is session-scoped and in-memory.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    MachineSpecPayload,
    # Responses
    MachineSpecResponse,
    SessionResponse,
    SpinResponse,
    ErrorResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    # Shared
    SymbolInfo,
    PaylineInfo,
    PaylineMatchInfo,
    SessionStatus,
    ErrorCode,
)
from .service import SpinService
from .app import create_app

__all__ = [
    "CreateSessionRequest",
    "MachineSpecPayload",
    "MachineSpecResponse",
    "SessionResponse",
    "SpinResponse",
    "ErrorResponse",
    "SessionListResponse",
    "EndSessionResponse",
    "HealthResponse",
    "SymbolInfo",
    "PaylineInfo",
    "PaylineMatchInfo",
    "SessionStatus",
    "ErrorCode",
    "SpinService",
    "create_app",
]
