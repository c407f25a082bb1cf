"""
Action System - Actions, payloads, and results.

Actions represent the two things a player can ask of the engine:
1. Place a held card into the timeline (ends the turn)
2. Reorder their own hand (free, does not end the turn)

Both interaction modes build the same actions, so the reducer never
needs to know whether a card was dragged or tapped.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    PLACE_CARD = "place_card"
    REORDER_HAND = "reorder_hand"


class ErrorCode(Enum):
    """Why a request was rejected."""
    GAME_NOT_PLAYING = "GAME_NOT_PLAYING"
    CARD_NOT_IN_HAND = "CARD_NOT_IN_HAND"
    INVALID_INDEX = "INVALID_INDEX"
    NO_HANDLER = "NO_HANDLER"


@dataclass(frozen=True)
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    PLACE_CARD uses event_id and index; REORDER_HAND uses
    old_index and new_index.
    """
    event_id: str | None = None
    index: int | None = None
    old_index: int | None = None
    new_index: int | None = None


@dataclass(frozen=True)
class Action:
    """A complete request to be applied to the game state."""
    action_type: ActionType
    payload: ActionPayload

    @classmethod
    def place(cls, event_id: str, index: int) -> Action:
        """Factory for a placement at timeline insertion index."""
        return cls(
            action_type=ActionType.PLACE_CARD,
            payload=ActionPayload(event_id=event_id, index=index),
        )

    @classmethod
    def reorder(cls, old_index: int, new_index: int) -> Action:
        """Factory for moving a card within the current player's hand."""
        return cls(
            action_type=ActionType.REORDER_HAND,
            payload=ActionPayload(old_index=old_index, new_index=new_index),
        )


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether the request was accepted
    - New state (if accepted)
    - Error and code (if rejected)
    - The placement outcome, for "placed" / "discarded" feedback

    Note that success means the request was valid. A valid placement
    can still put the card in the wrong spot; see placement.success.
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: ErrorCode | None = None

    placement: Any | None = None  # PlacementResult
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: ErrorCode | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        placement: Any | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            placement=placement,
            state_changes=changes or [],
        )
