"""
Engine Core - Deterministic game state management.

The engine is the runtime that:
1. Deals a new game from an event pool (initialize_game)
2. Manages immutable GameState snapshots
3. Validates placements against timeline neighbours
4. Applies placements and hand reorders via the reducer
5. Detects winners and the end of the final round
"""

from .state import (
    Category,
    Difficulty,
    DropPosition,
    GamePhase,
    GameState,
    HistoricalEvent,
    PlacementResult,
    Player,
)
from .config import ConfigError, GameConfig
from .action import Action, ActionPayload, ActionResult, ActionType, ErrorCode
from .reducer import (
    Reducer,
    apply_action,
    drop_position_at,
    drop_positions,
    initialize_game,
    is_placement_correct,
    next_player_index,
    place_card,
    reorder_hand,
    pass_turn,
    should_game_end,
    skip_empty_hands,
)

__all__ = [
    "Category",
    "Difficulty",
    "DropPosition",
    "GamePhase",
    "GameState",
    "HistoricalEvent",
    "PlacementResult",
    "Player",
    "ConfigError",
    "GameConfig",
    "Action",
    "ActionPayload",
    "ActionResult",
    "ActionType",
    "ErrorCode",
    "Reducer",
    "apply_action",
    "drop_position_at",
    "drop_positions",
    "initialize_game",
    "is_placement_correct",
    "next_player_index",
    "place_card",
    "reorder_hand",
    "pass_turn",
    "should_game_end",
    "skip_empty_hands",
]
