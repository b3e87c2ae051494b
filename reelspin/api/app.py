"""
FastAPI Application - REST API for game clients.

Endpoints:
    GET    /api/v1/health                   Liveness check
    GET    /api/v1/spec                     Default machine spec
    POST   /api/v1/sessions                 Create play session
    GET    /api/v1/sessions                 List active sessions
    GET    /api/v1/sessions/{id}            Get session status
    GET    /api/v1/sessions/{id}/spec       Machine spec of a session
    DELETE /api/v1/sessions/{id}            End session
    POST   /api/v1/sessions/{id}/spin       Resolve one spin

All responses are JSON with explicit Pydantic schemas. Rendering the
grid, animating reels and showing wins are left to the client.
"""

from typing import Optional, Union
import logging
import os

# Environment configuration
REELSPIN_ENV = os.getenv("REELSPIN_ENV", "development")
REELSPIN_SPEC_PATH = os.getenv("REELSPIN_SPEC_PATH", None)
REELSPIN_SEED = os.getenv("REELSPIN_SEED", None)
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

logger = logging.getLogger(__name__)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional SpinService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    from fastapi import FastAPI
    from fastapi.exceptions import RequestValidationError
    from fastapi.middleware.cors import CORSMiddleware
    from fastapi.responses import JSONResponse

    from .. import __version__
    from ..errors import SpecValidationError
    from ..spec_schema import load_spec
    from .service import SpinService
    from .schemas import (
        CreateSessionRequest,
        MachineSpecResponse,
        SessionResponse,
        SpinResponse,
        ErrorResponse,
        SessionListResponse,
        EndSessionResponse,
        HealthResponse,
        ErrorCode,
    )

    app = FastAPI(
        title="ReelSpin Engine API",
        description="""
Slot machine spin-resolution engine.

## Spin Flow

1. `POST /sessions` opens a session on the default machine or an inline spec
2. `POST /sessions/{id}/spin` resolves one spin and returns the grid,
   winning paylines and total payout
3. `DELETE /sessions/{id}` ends the session

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `INVALID_SPEC` | Inline machine spec failed validation |
| `SPIN_IN_PROGRESS` | Previous spin on the session has not finished |
| `VALIDATION_ERROR` | Request body is malformed outside the inline spec |
| `INTERNAL_ERROR` | Random source failed; the session can spin again |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Service instance
    if service is None:
        kwargs = {}
        if REELSPIN_SPEC_PATH:
            kwargs["default_spec"] = load_spec(REELSPIN_SPEC_PATH)
        if REELSPIN_SEED is not None:
            kwargs["default_seed"] = int(REELSPIN_SEED)
        service = SpinService(**kwargs)
    api_service = service
    logger.info(
        "ReelSpin API starting (env=%s, machine=%s)",
        REELSPIN_ENV, api_service.default_spec.name,
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def error_status(error: ErrorResponse) -> int:
        return {
            ErrorCode.SESSION_NOT_FOUND: 404,
            ErrorCode.SPIN_IN_PROGRESS: 409,
        }.get(error.error_code, 400)

    # =========================================================================
    # Health / Spec Endpoints
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["Meta"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service="reelspin", version=__version__)

    @app.get(
        "/api/v1/spec",
        response_model=MachineSpecResponse,
        tags=["Machine"],
        summary="Default machine spec",
    )
    async def get_default_spec() -> MachineSpecResponse:
        return api_service.get_default_spec()

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={400: {"model": ErrorResponse, "description": "Invalid machine spec"}},
        tags=["Sessions"],
        summary="Create a new play session",
    )
    async def create_session(
        request: Optional[CreateSessionRequest] = None,
    ) -> Union[SessionResponse, JSONResponse]:
        """
        Create a new play session.

        Omit `spec` to play the server's default machine. Pass `seed` for
        reproducible spins.
        """
        try:
            return api_service.create_session(request or CreateSessionRequest())
        except SpecValidationError as e:
            return make_error_response(
                ErrorCode.INVALID_SPEC,
                "Machine spec failed validation",
                details={"errors": e.errors},
            )

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        response = api_service.get_session(session_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response.error_code, response.error, error_status(response))
        return response

    @app.get(
        "/api/v1/sessions/{session_id}/spec",
        response_model=MachineSpecResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Machine spec of a session",
    )
    async def get_session_spec(session_id: str) -> Union[MachineSpecResponse, JSONResponse]:
        response = api_service.get_session_spec(session_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response.error_code, response.error, error_status(response))
        return response

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a play session",
    )
    async def end_session(session_id: str) -> EndSessionResponse:
        success = api_service.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Spin Endpoint
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/spin",
        response_model=SpinResponse,
        responses={
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse, "description": "Spin already in progress"},
        },
        tags=["Spins"],
        summary="Resolve one spin",
    )
    async def spin(session_id: str) -> Union[SpinResponse, JSONResponse]:
        """
        Resolve one spin on the session's machine.

        The grid is row-major: `grid[row][reel]` holds a symbol id.
        """
        response = api_service.spin(session_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response.error_code, response.error, error_status(response))
        return response

    # Schema constraints on an inline spec report the same way as validate_spec
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request, exc: RequestValidationError) -> JSONResponse:
        spec_errors = []
        other_errors = []
        for error in exc.errors():
            loc = [str(part) for part in error.get("loc", ())]
            if loc[:2] == ["body", "spec"]:
                spec_errors.append(f"{'.'.join(loc[2:]) or 'spec'}: {error['msg']}")
            else:
                other_errors.append(f"{'.'.join(loc[1:]) or 'body'}: {error['msg']}")

        if spec_errors and not other_errors:
            return make_error_response(
                ErrorCode.INVALID_SPEC,
                "Machine spec failed validation",
                details={"errors": spec_errors},
            )
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Invalid request body",
            details={"errors": spec_errors + other_errors},
        )

    # Random source failures surface here; the engine has already reset itself
    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(request, exc: RuntimeError) -> JSONResponse:
        logger.warning("Request %s failed: %s", request.url.path, exc)
        return make_error_response(ErrorCode.INTERNAL_ERROR, str(exc), status_code=500)

    return app
