"""
API Module - Presentation client interface.

Exposes the engine via REST API. The client:
1. Creates a session, declaring its device so a mode can be chosen
2. Deals a game with the setup options
3. Sends placements and hand reorders
4. Renders the returned state

All state is session-scoped and in-memory.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    StartGameRequest,
    PlaceCardRequest,
    ReorderHandRequest,
    # Responses
    CatalogSummaryResponse,
    GameStateResponse,
    PlacementResponse,
    SessionResponse,
    ErrorResponse,
    # Shared
    CardInfo,
    PlayerInfo,
    PlacementInfo,
    ErrorCode,
)
from .service import APIService, ServiceError, SessionNotFoundError

__all__ = [
    # Requests
    "CreateSessionRequest",
    "StartGameRequest",
    "PlaceCardRequest",
    "ReorderHandRequest",
    # Responses
    "CatalogSummaryResponse",
    "GameStateResponse",
    "PlacementResponse",
    "SessionResponse",
    "ErrorResponse",
    # Shared
    "CardInfo",
    "PlayerInfo",
    "PlacementInfo",
    "ErrorCode",
    # Service
    "APIService",
    "ServiceError",
    "SessionNotFoundError",
]
