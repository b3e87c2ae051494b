"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between game clients and the engine.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- INVALID_SPEC: Supplied machine spec failed validation
- SPIN_IN_PROGRESS: A spin on this session has not finished yet
- VALIDATION_ERROR: Request body failed schema validation outside the spec
- INTERNAL_ERROR: The random source failed mid-spin
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    READY = "ready"
    SPINNING = "spinning"
    ENDED = "ended"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_SPEC = "INVALID_SPEC"
    SPIN_IN_PROGRESS = "SPIN_IN_PROGRESS"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class SymbolInfo(BaseModel):
    """A symbol as configured on the machine."""
    id: int
    name: str
    value: int = Field(0, ge=0)


class PaylineInfo(BaseModel):
    """A payline as configured on the machine."""
    positions: list[int]
    active: bool = True
    name: Optional[str] = None


class MachineSpecPayload(BaseModel):
    """Machine spec document, accepted inline when creating a session."""
    name: str = "custom"
    reel_count: int = Field(..., ge=1)
    row_count: int = Field(..., ge=1)
    min_match_count: int = Field(..., ge=1)
    symbols: list[SymbolInfo] = Field(..., min_length=1)
    paylines: list[PaylineInfo] = Field(default_factory=list)


class PaylineMatchInfo(BaseModel):
    """A winning payline in a spin result."""
    payline_index: int
    symbol_id: int
    symbol_name: str
    match_count: int
    payout: int
    matched_positions: list[int]


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to open a play session."""
    player_name: str = Field("Player", min_length=1, max_length=64)
    seed: Optional[int] = Field(
        None, description="Seed for reproducible spins; omit for OS entropy"
    )
    spec: Optional[MachineSpecPayload] = Field(
        None, description="Inline machine spec; omit to use the server default"
    )


# =============================================================================
# Response Models
# =============================================================================

class MachineSpecResponse(MachineSpecPayload):
    """The machine spec a session plays on."""
    api_version: str = "v1"


class SessionResponse(BaseModel):
    """Session summary."""
    session_id: str
    status: SessionStatus
    player_name: str
    machine_name: str
    can_spin: bool
    spin_count: int = 0
    total_won: int = 0
    created_at: float
    api_version: str = "v1"


class SpinResponse(BaseModel):
    """
    Result of one spin.

    grid is row-major: grid[row][reel] is a symbol id, so the cell index
    of grid[row][reel] is row * reel_count + reel.
    """
    session_id: str
    grid: list[list[int]]
    matches: list[PaylineMatchInfo] = Field(default_factory=list)
    total_payout: int = 0
    is_win: bool = False
    winning_positions: list[int] = Field(default_factory=list)
    spin_count: int
    total_won: int
    api_version: str = "v1"


class ErrorResponse(BaseModel):
    """Standard error body."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
