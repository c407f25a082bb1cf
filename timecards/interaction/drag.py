"""
Drag Mode - Continuous pointer tracking.

The controller follows one drag gesture at a time:
1. start: a card is picked up from the hand
2. hover: the pointer position over the timeline moves the preview index
3. end: the drop target decides between placement, reorder, or snap back

All of this is transient. A cancelled or abandoned drag leaves the
game exactly as it was.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Union

from ..engine_core.state import HistoricalEvent
from .intents import Intent, PlacementIntent, ReorderIntent


class Edge(Enum):
    """Edge zones at either end of the timeline."""
    START = "start"
    END = "end"


@dataclass(frozen=True)
class TimelineTarget:
    """
    Dropped over the timeline.

    index is the insertion point under the pointer; None means
    "use the current preview index".
    """
    index: int | None = None


@dataclass(frozen=True)
class HandSlotTarget:
    """Dropped over another slot in the player's own hand."""
    index: int


DropTarget = Union[TimelineTarget, HandSlotTarget, None]


@dataclass(frozen=True)
class DragState:
    """Transient drag state; never part of GameState."""
    dragged_card: HistoricalEvent | None = None
    source_index: int | None = None
    is_dragging: bool = False
    preview_index: int | None = None


class DragController:
    """Turns drag gestures into intents."""

    def __init__(self):
        self.state = DragState()

    @property
    def is_dragging(self) -> bool:
        return self.state.is_dragging

    @property
    def preview_index(self) -> int | None:
        return self.state.preview_index

    def start(self, hand: Sequence[HistoricalEvent], event_id: str) -> bool:
        """
        Pick up a card from the hand.

        Returns False (and stays idle) if the card is not in the hand.
        """
        for i, event in enumerate(hand):
            if event.id == event_id:
                self.state = DragState(dragged_card=event, source_index=i, is_dragging=True)
                return True
        return False

    def hover_card(self, timeline_index: int, pointer_x: float, card_center_x: float) -> int | None:
        """
        Pointer is over the timeline card at timeline_index.

        Left of the card's centre previews an insertion before it,
        otherwise after it.
        """
        if not self.state.is_dragging:
            return None
        preview = timeline_index if pointer_x < card_center_x else timeline_index + 1
        self._set_preview(preview)
        return preview

    def hover_edge(self, edge: Edge, timeline: Sequence[HistoricalEvent]) -> int | None:
        """Pointer is over a start/end zone; pins the preview to that end."""
        if not self.state.is_dragging:
            return None
        preview = 0 if edge == Edge.START else len(timeline)
        self._set_preview(preview)
        return preview

    def end(self, target: DropTarget, timeline: Sequence[HistoricalEvent]) -> Intent | None:
        """
        Finish the gesture.

        Returns:
            PlacementIntent when dropped on the timeline,
            ReorderIntent when dropped on another hand slot,
            None when the card snaps back.
        """
        state = self.state
        self.state = DragState()

        card = state.dragged_card
        if card is None:
            return None

        if isinstance(target, TimelineTarget):
            index = target.index if target.index is not None else state.preview_index
            if index is None or not 0 <= index <= len(timeline):
                return None
            return PlacementIntent(event_id=card.id, index=index)

        if isinstance(target, HandSlotTarget):
            if state.source_index is None or target.index == state.source_index:
                return None
            return ReorderIntent(old_index=state.source_index, new_index=target.index)

        return None

    def cancel(self):
        """Drop the gesture with no effect."""
        self.state = DragState()

    def _set_preview(self, index: int):
        self.state = DragState(
            dragged_card=self.state.dragged_card,
            source_index=self.state.source_index,
            is_dragging=True,
            preview_index=index,
        )
