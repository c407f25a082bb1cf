"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to session and engine calls
2. Manages sessions
3. Formats responses, hiding years that are not yet revealed

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

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
    # Shared
    CardInfo,
    PlayerInfo,
    PlacementInfo,
    # Enums
    ErrorCode,
    GamePhase as APIGamePhase,
    InteractionMode as APIInteractionMode,
    SessionStatus,
)
from ..catalog import ALL_ERAS, EventCatalog
from ..engine_core.action import ActionResult
from ..engine_core.config import ConfigError, GameConfig
from ..engine_core.state import GameState, HistoricalEvent, PlacementResult, Player
from ..formatting import format_year, rank_winners
from ..interaction import DeviceProfile, InteractionMode, select_mode
from ..session import EmptyPoolError, GameSession, SessionManager, SessionState

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """A request the service cannot satisfy."""

    def __init__(self, message: str, error_code: ErrorCode, status_code: int = 400):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class SessionNotFoundError(ServiceError):
    def __init__(self, session_id: str):
        super().__init__(
            f"Session {session_id} not found",
            ErrorCode.SESSION_NOT_FOUND,
            status_code=404,
        )


_SESSION_STATUS = {
    SessionState.CREATED: SessionStatus.CREATED,
    SessionState.ACTIVE: SessionStatus.ACTIVE,
    SessionState.GAME_OVER: SessionStatus.GAME_OVER,
}


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService(SessionManager(load_default_catalog()))

        session = service.create_session(CreateSessionRequest())
        state = service.start_game(session.session_id, StartGameRequest(player_count=2))
        result = service.place_card(session.session_id, PlaceCardRequest(event_id=..., index=1))
    """
    session_manager: SessionManager

    @property
    def catalog(self) -> EventCatalog:
        return self.session_manager.catalog

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """Create a session; the interaction mode is fixed for its lifetime."""
        if request.mode is not None:
            mode = InteractionMode(request.mode.value)
        elif request.viewport_width is not None:
            mode = select_mode(DeviceProfile(
                viewport_width=request.viewport_width,
                has_touch=request.has_touch,
                coarse_pointer=request.coarse_pointer,
            ))
        else:
            mode = InteractionMode.DRAG

        session = self.session_manager.create_session(mode=mode)
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse:
        return self._session_to_response(self._require_session(session_id))

    def end_session(self, session_id: str) -> bool:
        return self.session_manager.end_session(session_id)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    # -------------------------------------------------------------------------
    # Game
    # -------------------------------------------------------------------------

    def start_game(self, session_id: str, request: StartGameRequest) -> GameStateResponse:
        """Deal a new game with the setup screen options."""
        session = self._require_session(session_id)
        try:
            config = GameConfig.create(
                player_count=request.player_count,
                cards_per_player=request.cards_per_player,
                starting_timeline_events=request.starting_timeline_events,
                player_names=request.player_names,
                selected_difficulties=request.selected_difficulties,
                selected_categories=request.selected_categories,
                selected_eras=request.selected_eras,
                strict=True,
            )
        except ConfigError as e:
            raise ServiceError(str(e), ErrorCode.INVALID_CONFIG)

        try:
            session.start(config, seed=request.seed)
        except EmptyPoolError as e:
            raise ServiceError(str(e), ErrorCode.EMPTY_POOL)

        return self._state_to_response(session)

    def restart_game(self, session_id: str) -> GameStateResponse:
        session = self._require_session(session_id)
        if session.restart() is None:
            raise ServiceError("No previous game to restart", ErrorCode.NO_GAME)
        return self._state_to_response(session)

    def get_game_state(self, session_id: str) -> GameStateResponse:
        session = self._require_session(session_id)
        return self._state_to_response(session)

    def place_card(self, session_id: str, request: PlaceCardRequest) -> PlacementResponse:
        """Place a card; ends the current player's turn."""
        session = self._require_game(session_id)
        result = session.place(request.event_id, request.index)
        return self._result_to_response(session, result)

    def reorder_hand(self, session_id: str, request: ReorderHandRequest) -> PlacementResponse:
        """Rearrange the current player's hand; does not end the turn."""
        session = self._require_game(session_id)
        result = session.reorder(request.old_index, request.new_index)
        return self._result_to_response(session, result)

    def clear_reveal(self, session_id: str) -> GameStateResponse:
        session = self._require_game(session_id)
        session.clear_reveal()
        return self._state_to_response(session)

    def catalog_summary(self) -> CatalogSummaryResponse:
        summary = self.catalog.summary()
        return CatalogSummaryResponse(
            total=summary.total,
            by_category=summary.by_category,
            by_difficulty=summary.by_difficulty,
            by_era=summary.by_era,
            eras=list(ALL_ERAS),
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _require_session(self, session_id: str) -> GameSession:
        session = self.session_manager.get_session(session_id)
        if not session:
            raise SessionNotFoundError(session_id)
        return session

    def _require_game(self, session_id: str) -> GameSession:
        session = self._require_session(session_id)
        if session.game_state is None:
            raise ServiceError("No game in progress", ErrorCode.NO_GAME, status_code=409)
        return session

    def _result_to_response(self, session: GameSession, result: ActionResult) -> PlacementResponse:
        if not result.success:
            code = ErrorCode.VALIDATION_ERROR
            if result.error_code and result.error_code.name in ErrorCode.__members__:
                code = ErrorCode[result.error_code.name]
            raise ServiceError(result.error or "Move rejected", code, status_code=409)

        return PlacementResponse(
            placement=_placement_info(result.placement) if result.placement else None,
            changes=result.state_changes,
            state=self._state_to_response(session),
        )

    def _session_to_response(self, session: GameSession) -> SessionResponse:
        return SessionResponse(
            session_id=session.session_id,
            status=_SESSION_STATUS.get(session.state, SessionStatus.CREATED),
            mode=APIInteractionMode(session.mode.value),
            created_at=session.created_at,
            has_game=session.game_state is not None,
        )

    def _state_to_response(self, session: GameSession) -> GameStateResponse:
        state: GameState | None = session.game_state
        if state is None:
            return GameStateResponse(session_id=session.session_id, phase=APIGamePhase.SETUP)

        return GameStateResponse(
            session_id=session.session_id,
            phase=APIGamePhase(state.phase.value),
            timeline=[_card_info(e, reveal=True) for e in state.timeline],
            deck_count=len(state.deck),
            players=[
                _player_info(p, is_current=(i == state.current_player_index))
                for i, p in enumerate(state.players)
            ],
            current_player_index=state.current_player_index,
            turn_number=state.turn_number,
            round_number=state.round_number,
            winners=[_player_info(w) for w in rank_winners(state.winners)],
            last_placement=(
                _placement_info(state.last_placement_result)
                if state.last_placement_result else None
            ),
            revealing_card=(
                _card_info(session.revealing_card, reveal=True)
                if session.revealing_card else None
            ),
            random_seed=state.random_seed,
        )


def _card_info(event: HistoricalEvent, reveal: bool) -> CardInfo:
    return CardInfo(
        event_id=event.id,
        name=event.display_name,
        category=event.category,
        difficulty=event.difficulty,
        description=event.description,
        image_url=event.image_ref,
        year=event.year if reveal else None,
        year_label=format_year(event.year) if reveal else None,
    )


def _player_info(player: Player, is_current: bool = False) -> PlayerInfo:
    return PlayerInfo(
        player_id=player.id,
        name=player.name,
        hand=[_card_info(e, reveal=False) for e in player.hand],
        hand_size=player.hand_size,
        has_won=player.has_won,
        win_turn=player.win_turn,
        is_current_turn=is_current,
    )


def _placement_info(placement: PlacementResult) -> PlacementInfo:
    return PlacementInfo(
        success=placement.success,
        card=_card_info(placement.event, reveal=True),
        correct_position=placement.correct_position,
    )
