"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Events are loaded once into a catalog
2. A session is created (in-memory only) with an interaction mode
3. start(config): the catalog filters a pool and a game is dealt
4. During the game the presentation layer sends intents:
   - PlacementIntent ends the turn
   - ReorderIntent rearranges the hand and does not
5. restart() deals again with the same config; reset() returns to setup
6. end_session() drops the session and all its state

PERSISTENCE RULES:
- No database, no files: game state lives only in the session
- Every transition replaces the GameState snapshot wholesale
- Interaction controller state is disposable and never enters GameState
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import time
import uuid

from ..catalog import EventCatalog
from ..engine_core.action import ActionResult, ErrorCode
from ..engine_core.config import GameConfig
from ..engine_core.reducer import Reducer, initialize_game
from ..engine_core.state import GamePhase, GameState, HistoricalEvent
from ..interaction import (
    DragController,
    Intent,
    InteractionMode,
    PlacementIntent,
    ReorderIntent,
    TapController,
    create_controller,
)

logger = logging.getLogger(__name__)


class EmptyPoolError(Exception):
    """Raised when a game would be dealt from an empty event pool."""


class SessionState(Enum):
    """State of a game session."""
    CREATED = "created"  # Waiting for setup
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Game completed, may be restarted
    ABANDONED = "abandoned"  # Session ended


@dataclass
class GameSession:
    """
    An ephemeral game session.

    Contains:
    - The event catalog games are dealt from
    - The current canonical game state
    - The last config, for restart
    - The interaction controller for the session's mode
    - The card just discarded, for reveal feedback
    """
    session_id: str
    catalog: EventCatalog
    created_at: float
    mode: InteractionMode = InteractionMode.DRAG

    state: SessionState = SessionState.CREATED
    game_state: GameState | None = None
    last_config: GameConfig | None = None
    revealing_card: HistoricalEvent | None = None

    controller: DragController | TapController | None = None
    reducer: Reducer = field(default_factory=Reducer)

    def __post_init__(self):
        if self.controller is None:
            self.controller = create_controller(self.mode)

    def is_active(self) -> bool:
        """Check if session is still usable."""
        return self.state != SessionState.ABANDONED

    def start(self, config: GameConfig, seed: int | None = None) -> GameState:
        """
        Deal a new game.

        Raises:
            EmptyPoolError: if the config's filters leave no events
        """
        pool = self.catalog.pool_for(config)
        if not pool:
            raise EmptyPoolError("Cannot start game: no events match the selected filters")

        self.last_config = config
        self._reset_transient()
        self.game_state = initialize_game(config, pool, seed=seed)
        if self.game_state.phase == GamePhase.GAME_OVER:
            self.state = SessionState.GAME_OVER
        else:
            self.state = SessionState.ACTIVE
        logger.info(
            "Session %s started a %d-player game (seed %s)",
            self.session_id, config.player_count, self.game_state.random_seed,
        )
        return self.game_state

    def restart(self, seed: int | None = None) -> GameState | None:
        """New shuffle with the last config. No-op before the first start."""
        if self.last_config is None:
            return None
        logger.info("Session %s restarting", self.session_id)
        return self.start(self.last_config, seed=seed)

    def reset(self):
        """Back to setup; the config is kept for a later restart."""
        self.game_state = None
        self.state = SessionState.CREATED
        self._reset_transient()

    def handle(self, intent: Intent) -> ActionResult:
        """Apply a placement or reorder intent to the current game."""
        if self.game_state is None:
            return ActionResult.failure("No game in progress", error_code=ErrorCode.GAME_NOT_PLAYING)

        result = self.reducer.apply(self.game_state, intent.to_action())
        if not result.success:
            return result

        self.game_state = result.new_state
        if isinstance(intent, PlacementIntent):
            placement = result.placement
            self.revealing_card = None if placement.success else placement.event
            if self.game_state.phase == GamePhase.GAME_OVER:
                self.state = SessionState.GAME_OVER
                logger.info(
                    "Session %s game over after %d turns; winners: %s",
                    self.session_id,
                    self.game_state.turn_number - 1,
                    ", ".join(w.name for w in self.game_state.winners),
                )
        return result

    def place(self, event_id: str, index: int) -> ActionResult:
        return self.handle(PlacementIntent(event_id=event_id, index=index))

    def reorder(self, old_index: int, new_index: int) -> ActionResult:
        return self.handle(ReorderIntent(old_index=old_index, new_index=new_index))

    def clear_reveal(self):
        self.revealing_card = None

    def _reset_transient(self):
        self.revealing_card = None
        self.controller = create_controller(self.mode)


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions over a shared event catalog
    - Track active sessions
    - Clean up ended sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, catalog: EventCatalog):
        self.catalog = catalog
        self._sessions: dict[str, GameSession] = {}

    def create_session(self, mode: InteractionMode = InteractionMode.DRAG) -> GameSession:
        """Create a new session waiting for setup."""
        session = GameSession(
            session_id=str(uuid.uuid4()),
            catalog=self.catalog,
            created_at=time.time(),
            mode=mode,
        )
        self._sessions[session.session_id] = session
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """
        End a session and clean up.

        Returns False if there was no such session.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False
        session.state = SessionState.ABANDONED
        session.game_state = None
        session.revealing_card = None
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]
