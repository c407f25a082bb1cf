"""
FastAPI Application - REST API for the presentation client.

Endpoints:
    GET    /api/v1/health                       Liveness and catalog size
    GET    /api/v1/catalog                      Event counts for the setup screen
    POST   /api/v1/sessions                     Create session (picks drag or tap)
    GET    /api/v1/sessions                     List active sessions
    GET    /api/v1/sessions/{id}                Get session status
    DELETE /api/v1/sessions/{id}                End session
    POST   /api/v1/sessions/{id}/game           Deal a new game
    POST   /api/v1/sessions/{id}/restart        Deal again with the same options
    GET    /api/v1/sessions/{id}/state          Get game state
    POST   /api/v1/sessions/{id}/place          Place a card (ends the turn)
    POST   /api/v1/sessions/{id}/reorder        Rearrange the current hand
    POST   /api/v1/sessions/{id}/reveal/clear   Dismiss the revealed card

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Union
import logging
import os

from .. import __version__

# Environment configuration
TIMECARDS_ENV = os.getenv("TIMECARDS_ENV", "development")
TIMECARDS_EVENTS_DIR = os.getenv("TIMECARDS_EVENTS_DIR", None)
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

logger = logging.getLogger(__name__)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    from fastapi import FastAPI, Request
    from fastapi.exceptions import RequestValidationError
    from fastapi.middleware.cors import CORSMiddleware
    from fastapi.responses import JSONResponse

    from ..catalog import EventCatalog, load_default_catalog
    from ..session import SessionManager
    from .service import APIService, ServiceError
    from .schemas import (
        # Request models
        CreateSessionRequest,
        StartGameRequest,
        PlaceCardRequest,
        ReorderHandRequest,
        # Response models
        CatalogSummaryResponse,
        EndSessionResponse,
        ErrorResponse,
        GameStateResponse,
        HealthResponse,
        PlacementResponse,
        SessionListResponse,
        SessionResponse,
        # Enums
        ErrorCode,
    )

    app = FastAPI(
        title="Timecards API",
        description="""
Historical timeline card game engine.

Players take turns placing event cards from their hand into a shared
timeline sorted by year. A correct placement keeps the card on the
timeline; a wrong one discards it and draws a replacement. The first
player to empty their hand wins, once every player has had the same
number of turns.

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `NO_GAME` | The session has no game dealt |
| `EMPTY_POOL` | No events match the selected filters |
| `INVALID_CONFIG` | Setup options out of range |
| `GAME_NOT_PLAYING` | The game is over |
| `CARD_NOT_IN_HAND` | The card is not in the current player's hand |
| `INVALID_INDEX` | Timeline or hand index out of range |
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
        catalog = (
            EventCatalog.from_directory(TIMECARDS_EVENTS_DIR)
            if TIMECARDS_EVENTS_DIR else load_default_catalog()
        )
        service = APIService(session_manager=SessionManager(catalog))
    api_service = service

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Union[dict, None] = None,
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

    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, exc: ServiceError):
        return make_error_response(exc.error_code, exc.message, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Request validation failed",
            status_code=422,
            details={"errors": [
                {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
                for err in exc.errors()
            ]},
        )

    # =========================================================================
    # Health & Catalog
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["Health"],
        summary="Health check",
    )
    async def health() -> HealthResponse:
        return HealthResponse(
            version=__version__,
            environment=TIMECARDS_ENV,
            event_count=len(api_service.catalog),
        )

    @app.get(
        "/api/v1/catalog",
        response_model=CatalogSummaryResponse,
        tags=["Catalog"],
        summary="Event counts by category, difficulty and era",
    )
    async def catalog_summary() -> CatalogSummaryResponse:
        return api_service.catalog_summary()

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        status_code=201,
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session(request: CreateSessionRequest) -> SessionResponse:
        """
        Create a new game session.

        Pass `mode` to choose drag or tap directly, or describe the
        device with `viewport_width`, `has_touch` and `coarse_pointer`.
        """
        return api_service.create_session(request)

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
    async def get_session(session_id: str) -> SessionResponse:
        return api_service.get_session(session_id)

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="End a session",
    )
    async def end_session(session_id: str):
        if not api_service.end_session(session_id):
            return make_error_response(
                ErrorCode.SESSION_NOT_FOUND,
                f"Session {session_id} not found",
                status_code=404,
            )
        return EndSessionResponse(success=True, session_id=session_id)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/game",
        response_model=GameStateResponse,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Deal a new game",
    )
    async def start_game(session_id: str, request: StartGameRequest) -> GameStateResponse:
        """
        Deal a new game with the setup options.

        Pass `seed` to replay an earlier shuffle; the response always
        carries the seed that was used.
        """
        return api_service.start_game(session_id, request)

    @app.post(
        "/api/v1/sessions/{session_id}/restart",
        response_model=GameStateResponse,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Deal again with the last options",
    )
    async def restart_game(session_id: str) -> GameStateResponse:
        return api_service.restart_game(session_id)

    @app.get(
        "/api/v1/sessions/{session_id}/state",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Get the current game state",
    )
    async def get_state(session_id: str) -> GameStateResponse:
        """Hand cards never include their year."""
        return api_service.get_game_state(session_id)

    @app.post(
        "/api/v1/sessions/{session_id}/place",
        response_model=PlacementResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Place a card on the timeline",
    )
    async def place_card(session_id: str, request: PlaceCardRequest) -> PlacementResponse:
        """
        Place a card from the current player's hand at a timeline index.

        The placement is judged against the timeline as it is now.
        Either way the turn passes to the next player.
        """
        return api_service.place_card(session_id, request)

    @app.post(
        "/api/v1/sessions/{session_id}/reorder",
        response_model=PlacementResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Rearrange the current player's hand",
    )
    async def reorder_hand(session_id: str, request: ReorderHandRequest) -> PlacementResponse:
        return api_service.reorder_hand(session_id, request)

    @app.post(
        "/api/v1/sessions/{session_id}/reveal/clear",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Dismiss the revealed card",
    )
    async def clear_reveal(session_id: str) -> GameStateResponse:
        return api_service.clear_reveal(session_id)

    logger.info("Timecards API ready (%s, %d events)", TIMECARDS_ENV, len(api_service.catalog))
    return app


# For running directly: uvicorn timecards.api.app:app
app = create_app()
