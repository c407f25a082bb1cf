"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between the presentation client and
the engine. Hidden information stays hidden: cards in hands never carry
their year, and the deck is reported as a count only.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- NO_GAME: The session has no game in progress
- EMPTY_POOL: No events match the selected filters
- INVALID_CONFIG: Game options out of range
- GAME_NOT_PLAYING / CARD_NOT_IN_HAND / INVALID_INDEX: Rejected move
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from ..engine_core.config import (
    DEFAULT_CARDS_PER_PLAYER,
    DEFAULT_PLAYER_COUNT,
    DEFAULT_STARTING_EVENTS,
)
from ..engine_core.state import Category, Difficulty


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    CREATED = "created"
    ACTIVE = "active"
    GAME_OVER = "game_over"


class GamePhase(str, Enum):
    SETUP = "setup"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class InteractionMode(str, Enum):
    DRAG = "drag"
    TAP = "tap"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    NO_GAME = "NO_GAME"
    EMPTY_POOL = "EMPTY_POOL"
    INVALID_CONFIG = "INVALID_CONFIG"
    GAME_NOT_PLAYING = "GAME_NOT_PLAYING"
    CARD_NOT_IN_HAND = "CARD_NOT_IN_HAND"
    INVALID_INDEX = "INVALID_INDEX"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """A card as the client may see it."""
    event_id: str
    name: str
    category: Category
    difficulty: Difficulty
    description: str = ""
    image_url: Optional[str] = None
    year: Optional[int] = Field(default=None, description="Only set once the year is revealed")
    year_label: Optional[str] = None


class PlayerInfo(BaseModel):
    """A player and their hand."""
    player_id: int
    name: str
    hand: list[CardInfo] = Field(default_factory=list)
    hand_size: int = 0
    has_won: bool = False
    win_turn: Optional[int] = None
    is_current_turn: bool = False


class PlacementInfo(BaseModel):
    """Outcome of a placement."""
    success: bool
    card: CardInfo
    correct_position: Optional[int] = None


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """
    Request to create a new session.

    Either give the mode directly or describe the device and let the
    server choose.
    """
    mode: Optional[InteractionMode] = None
    viewport_width: Optional[int] = Field(default=None, ge=0)
    has_touch: bool = False
    coarse_pointer: bool = False


class StartGameRequest(BaseModel):
    """Setup screen options."""
    player_count: int = Field(default=DEFAULT_PLAYER_COUNT, ge=1)
    cards_per_player: int = Field(default=DEFAULT_CARDS_PER_PLAYER, ge=1)
    starting_timeline_events: int = Field(default=DEFAULT_STARTING_EVENTS, ge=1)
    player_names: list[str] = Field(default_factory=list)
    selected_difficulties: list[Difficulty] = Field(default_factory=list)
    selected_categories: list[Category] = Field(default_factory=list)
    selected_eras: list[str] = Field(default_factory=list)
    seed: Optional[int] = Field(default=None, description="Shuffle seed, for replays")


class PlaceCardRequest(BaseModel):
    event_id: str
    index: int = Field(ge=0, description="Timeline insertion index, 0..len(timeline)")


class ReorderHandRequest(BaseModel):
    old_index: int = Field(ge=0)
    new_index: int = Field(ge=0)


# =============================================================================
# Response Models
# =============================================================================

class GameStateResponse(BaseModel):
    """Full game state for rendering."""
    session_id: str
    phase: GamePhase
    timeline: list[CardInfo] = Field(default_factory=list)
    deck_count: int = 0
    players: list[PlayerInfo] = Field(default_factory=list)
    current_player_index: int = 0
    turn_number: int = 1
    round_number: int = 1
    winners: list[PlayerInfo] = Field(default_factory=list, description="Ordered by win turn")
    last_placement: Optional[PlacementInfo] = None
    revealing_card: Optional[CardInfo] = None
    random_seed: Optional[int] = None


class PlacementResponse(BaseModel):
    """Result of a move plus the state after it."""
    placement: Optional[PlacementInfo] = None
    changes: list[str] = Field(default_factory=list)
    state: GameStateResponse


class SessionResponse(BaseModel):
    session_id: str
    status: SessionStatus
    mode: InteractionMode
    created_at: float
    has_game: bool = False


class SessionListResponse(BaseModel):
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    success: bool
    session_id: str


class CatalogSummaryResponse(BaseModel):
    total: int
    by_category: dict[str, int] = Field(default_factory=dict)
    by_difficulty: dict[str, int] = Field(default_factory=dict)
    by_era: dict[str, int] = Field(default_factory=dict)
    eras: list[str] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Standard error body."""
    error: str
    error_code: ErrorCode
    details: Optional[dict] = None


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    environment: str
    event_count: int
