"""
Intents - What a gesture asks the engine to do.

Drag and tap modes both reduce a gesture to one of these values, and
the session turns it into an engine Action. Nothing here touches
GameState.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence, Union

from ..engine_core.action import Action
from ..engine_core.reducer import drop_position_at
from ..engine_core.state import DropPosition, HistoricalEvent


@dataclass(frozen=True)
class PlacementIntent:
    """Place the held card event_id at timeline insertion index. Ends the turn."""
    event_id: str
    index: int

    @property
    def ends_turn(self) -> bool:
        return True

    def drop_position(self, timeline: Sequence[HistoricalEvent]) -> DropPosition:
        """Neighbours of index in the given (current) timeline."""
        return drop_position_at(timeline, self.index)

    def to_action(self) -> Action:
        return Action.place(self.event_id, self.index)


@dataclass(frozen=True)
class ReorderIntent:
    """Move a card within the current hand. Does not end the turn."""
    old_index: int
    new_index: int

    @property
    def ends_turn(self) -> bool:
        return False

    def to_action(self) -> Action:
        return Action.reorder(self.old_index, self.new_index)


Intent = Union[PlacementIntent, ReorderIntent]
