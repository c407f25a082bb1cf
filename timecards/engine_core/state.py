"""
Game State - Immutable state container for the timeline game.

Design principles:
- Immutable: all mutations return new state (copy-on-write snapshots)
- Identity by id: events compare by their id, never by year
- Serializable: plain values only, so snapshots can be compared and replayed
- The timeline is always sorted ascending by year
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum


class GamePhase(Enum):
    """High-level game phases."""
    SETUP = "setup"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class Category(Enum):
    """Closed set of event categories."""
    CONFLICT = "conflict"
    DISASTERS = "disasters"
    EXPLORATION = "exploration"
    CULTURAL = "cultural"
    INFRASTRUCTURE = "infrastructure"
    DIPLOMATIC = "diplomatic"


class Difficulty(Enum):
    """How well known an event is."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class HistoricalEvent:
    """
    A historical-event card.

    Supplied by the catalog and never modified afterwards.
    Two events are the same card when their ids match; years may collide.
    """
    id: str
    display_name: str
    year: int  # Negative years are BCE
    category: Category
    difficulty: Difficulty
    description: str = ""
    image_ref: str | None = None

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if not isinstance(other, HistoricalEvent):
            return False
        return self.id == other.id


@dataclass(frozen=True)
class DropPosition:
    """
    A requested insertion point into the timeline.

    left_event/right_event are the neighbours adjacent to index when the
    position was built. place_card reads them again from the timeline.
    """
    index: int
    left_event: HistoricalEvent | None = None
    right_event: HistoricalEvent | None = None


@dataclass(frozen=True)
class PlacementResult:
    """Outcome of the most recently resolved placement."""
    success: bool
    event: HistoricalEvent
    correct_position: int | None = None  # Where the card would have fit, on failure


@dataclass(frozen=True)
class Player:
    """
    State for a single player.

    The hand keeps the player's own order (it drives the fan-out and
    drag-reorder), it is not sorted by year.
    """
    id: int
    name: str
    hand: tuple[HistoricalEvent, ...] = ()
    has_won: bool = False
    win_turn: int | None = None

    @property
    def hand_size(self) -> int:
        return len(self.hand)

    def find_card(self, event_id: str) -> HistoricalEvent | None:
        for event in self.hand:
            if event.id == event_id:
                return event
        return None

    def with_hand(self, hand: tuple[HistoricalEvent, ...]) -> Player:
        """Return new player with a different hand."""
        return replace(self, hand=tuple(hand))


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state that the engine operates on.
    All state changes go through the reducer and produce a new snapshot.
    """
    phase: GamePhase = GamePhase.SETUP
    timeline: tuple[HistoricalEvent, ...] = ()
    deck: tuple[HistoricalEvent, ...] = ()
    players: tuple[Player, ...] = ()
    current_player_index: int = 0
    turn_number: int = 1
    round_number: int = 1

    # Snapshots of players at the moment their hand emptied
    winners: tuple[Player, ...] = ()
    last_placement_result: PlacementResult | None = None

    # Cards removed by failed placements
    discard: tuple[HistoricalEvent, ...] = ()

    # Seed used to shuffle the pool, for replay
    random_seed: int | None = None

    # Size of the seed timeline dealt at initialize
    starting_timeline_size: int = 0

    @property
    def current_player(self) -> Player:
        """Get the current player."""
        return self.players[self.current_player_index]

    @property
    def num_players(self) -> int:
        return len(self.players)

    def with_player(self, player: Player) -> GameState:
        """Return new state with updated player."""
        new_players = tuple(
            player if p.id == player.id else p
            for p in self.players
        )
        return self._copy_with(players=new_players)

    def card_count(self) -> int:
        """Count every card the game currently tracks, discards included."""
        in_hands = sum(p.hand_size for p in self.players)
        return in_hands + len(self.deck) + len(self.timeline) + len(self.discard)

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
