"""
Tap Mode - Discrete select-then-target interaction for touch devices.

Tap a hand card to select it (tap again to deselect). While a card is
selected the timeline offers one insertion target before the first
card and one after each card. Tapping a target commits the placement
and clears the selection, whatever the outcome.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence

from ..engine_core.reducer import drop_positions
from ..engine_core.state import DropPosition, HistoricalEvent
from .intents import PlacementIntent


@dataclass(frozen=True)
class TapState:
    """Transient selection state; never part of GameState."""
    selected_card: HistoricalEvent | None = None


class TapController:
    """Turns taps into placement intents."""

    def __init__(self):
        self.state = TapState()

    @property
    def selected_card(self) -> HistoricalEvent | None:
        return self.state.selected_card

    @property
    def has_selection(self) -> bool:
        return self.state.selected_card is not None

    def tap_hand_card(self, event: HistoricalEvent) -> HistoricalEvent | None:
        """Toggle selection of a hand card. Returns the new selection."""
        if self.state.selected_card is not None and self.state.selected_card.id == event.id:
            self.state = TapState()
        else:
            self.state = TapState(selected_card=event)
        return self.state.selected_card

    def insertion_targets(self, timeline: Sequence[HistoricalEvent]) -> list[DropPosition]:
        """
        Targets to render; none without a selection.

        An empty timeline still gets one target.
        """
        if not self.has_selection:
            return []
        return drop_positions(timeline)

    def tap_target(self, index: int, timeline: Sequence[HistoricalEvent]) -> PlacementIntent | None:
        """
        Commit the selected card at insertion index.

        Returns None (keeping any selection) when nothing is selected
        or the index is not a valid target.
        """
        card = self.state.selected_card
        if card is None or not 0 <= index <= len(timeline):
            return None
        self.state = TapState()
        return PlacementIntent(event_id=card.id, index=index)

    def clear(self):
        self.state = TapState()
