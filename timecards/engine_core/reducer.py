"""
Reducer - Applies placements and hand reorders to game state.

The reducer is the single point of state change.

Design principles:
- Pure functions: (state, input) -> new_state
- Game edge cases (empty deck, empty timeline, empty hand, short pool)
  are ordinary branches, never exceptions
- Invalid requests are rejected with an ActionResult, state untouched
- Placements are judged against the timeline as it is at commit time
"""

from __future__ import annotations
import bisect
import random
from typing import Sequence

from .state import (
    DropPosition,
    GamePhase,
    GameState,
    HistoricalEvent,
    PlacementResult,
    Player,
)
from .config import GameConfig
from .action import Action, ActionResult, ActionType, ErrorCode
from .deal import (
    add_to_hand,
    array_move,
    draw,
    insert_into_timeline,
    remove_from_hand,
    shuffle,
    sort_by_year,
)


# =============================================================================
# Setup
# =============================================================================

def initialize_game(
    config: GameConfig,
    event_pool: Sequence[HistoricalEvent],
    seed: int | None = None,
) -> GameState:
    """
    Deal a new game.

    The pool is shuffled once. The first starting_timeline_events cards
    seed the timeline (sorted by year), then each player in turn gets the
    next cards_per_player consecutive cards, and the rest is the deck.
    A pool smaller than needed deals short hands and an empty deck.

    Args:
        config: Game options
        event_pool: Already filtered events
        seed: Seed for the shuffle; a fresh one is drawn when omitted

    Returns:
        Initial GameState in the PLAYING phase (GAME_OVER if the pool
        left every hand empty)
    """
    if seed is None:
        seed = random.randrange(1_000_000_000)
    rng = random.Random(seed)

    shuffled = shuffle(event_pool, rng)

    timeline_count = config.starting_timeline_events
    timeline = sort_by_year(shuffled[:timeline_count])
    remaining = shuffled[timeline_count:]

    players = []
    deck_index = 0
    for i in range(config.player_count):
        hand = remaining[deck_index:deck_index + config.cards_per_player]
        deck_index += len(hand)
        players.append(Player(id=i, name=config.name_for(i), hand=tuple(hand)))

    state = GameState(
        phase=GamePhase.PLAYING,
        timeline=timeline,
        deck=remaining[deck_index:],
        players=tuple(players),
        current_player_index=0,
        turn_number=1,
        round_number=1,
        winners=(),
        last_placement_result=None,
        random_seed=seed,
        starting_timeline_size=len(timeline),
    )
    return skip_empty_hands(state)


# =============================================================================
# Placement rules
# =============================================================================

def drop_positions(timeline: Sequence[HistoricalEvent]) -> list[DropPosition]:
    """All len(timeline) + 1 insertion points, left to right."""
    return [drop_position_at(timeline, i) for i in range(len(timeline) + 1)]


def drop_position_at(timeline: Sequence[HistoricalEvent], index: int) -> DropPosition:
    """Build the DropPosition for index from the timeline's current neighbours."""
    left = timeline[index - 1] if 0 < index <= len(timeline) else None
    right = timeline[index] if 0 <= index < len(timeline) else None
    return DropPosition(index=index, left_event=left, right_event=right)


def is_placement_correct(
    timeline: Sequence[HistoricalEvent],
    event: HistoricalEvent,
    drop_position: DropPosition,
) -> bool:
    """
    Check a placement against its immediate neighbours.

    The year must be >= the left neighbour's and <= the right neighbour's.
    Equal years are accepted on either side.
    """
    left, right = drop_position.left_event, drop_position.right_event
    if left is not None and event.year < left.year:
        return False
    if right is not None and event.year > right.year:
        return False
    return True


def correct_position(timeline: Sequence[HistoricalEvent], event: HistoricalEvent) -> int:
    """First insertion index where event would be a correct placement."""
    return bisect.bisect_left([e.year for e in timeline], event.year)


# =============================================================================
# Turn progression
# =============================================================================

def next_player_index(current_index: int, player_count: int) -> int:
    return (current_index + 1) % player_count


def should_game_end(state: GameState) -> bool:
    """
    The game ends once someone has won and play is back at player 0.

    Ending only when the round closes gives every player the same
    number of turns, which is how several players can win together.
    """
    if not state.winners:
        return False
    return state.current_player_index == 0


def pass_turn(state: GameState) -> GameState:
    """Hand play to the next player, counting the turn and closing the round at player 0."""
    next_index = next_player_index(state.current_player_index, state.num_players)
    round_number = state.round_number + 1 if next_index == 0 else state.round_number
    new_state = state._copy_with(
        current_player_index=next_index,
        turn_number=state.turn_number + 1,
        round_number=round_number,
    )
    if should_game_end(new_state):
        new_state = new_state._copy_with(phase=GamePhase.GAME_OVER)
    return new_state


def skip_empty_hands(state: GameState) -> GameState:
    """
    Pass the turn of a current player who holds no cards.

    Only a short pool deals such a player. They have no move to make,
    so their turn passes (and counts) until someone with cards is up or
    the round closes on a winner. If nobody holds a card and nobody has
    won, the game is over with no winners.
    """
    for _ in range(state.num_players):
        if state.phase != GamePhase.PLAYING or state.current_player.hand:
            return state
        if not state.winners and not any(p.hand for p in state.players):
            return state._copy_with(phase=GamePhase.GAME_OVER)
        state = pass_turn(state)
    return state


def place_card(
    state: GameState,
    event: HistoricalEvent,
    drop_position: DropPosition,
) -> tuple[GameState, PlacementResult]:
    """
    Resolve one turn: the current player places event at drop_position.

    Only drop_position.index is used; its neighbours are read from the
    current timeline. An index outside 0..len(timeline) is incorrect.

    Correct: the card joins the timeline at that index.
    Incorrect: the card is discarded and a replacement drawn, if any.
    Either way the hand emptying is a win, the turn passes to the next
    player holding cards, and the end condition is checked.

    Returns:
        (new state, placement result)
    """
    player_index = state.current_player_index
    player = state.current_player

    # Neighbours come from the timeline now; an index past either end never fits
    index = drop_position.index
    in_range = 0 <= index <= len(state.timeline)
    if in_range:
        drop_position = drop_position_at(state.timeline, index)
    success = in_range and is_placement_correct(state.timeline, event, drop_position)

    timeline = state.timeline
    deck = state.deck
    discard = state.discard
    hand = remove_from_hand(player.hand, event.id)

    if success:
        timeline = insert_into_timeline(state.timeline, event, index)
        result = PlacementResult(success=True, event=event)
    else:
        discard = discard + (event,)
        replacement, deck = draw(state.deck)
        if replacement is not None:
            hand = add_to_hand(hand, replacement)
        result = PlacementResult(
            success=False,
            event=event,
            correct_position=correct_position(state.timeline, event),
        )

    new_player = player.with_hand(hand)
    winners = state.winners
    if not hand and not player.has_won:
        new_player = Player(
            id=player.id,
            name=player.name,
            hand=(),
            has_won=True,
            win_turn=state.turn_number,
        )
        winners = winners + (new_player,)

    players = list(state.players)
    players[player_index] = new_player

    new_state = state._copy_with(
        timeline=timeline,
        deck=deck,
        discard=discard,
        players=tuple(players),
        winners=winners,
        last_placement_result=result,
    )
    return skip_empty_hands(pass_turn(new_state)), result


def reorder_hand(state: GameState, old_index: int, new_index: int) -> GameState:
    """
    Move one card within the current player's hand.

    A free action: turn, round, deck and timeline are untouched.
    """
    player = state.current_player
    moved = array_move(player.hand, old_index, new_index)
    if moved == player.hand:
        return state
    return state.with_player(player.with_hand(moved))


# =============================================================================
# Request validation and dispatch
# =============================================================================

class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState. Validates the request,
    then delegates to place_card / reorder_hand.
    """

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or error.
        """
        if state.phase != GamePhase.PLAYING:
            return ActionResult.failure(
                f"Game is not in progress (phase: {state.phase.value})",
                error_code=ErrorCode.GAME_NOT_PLAYING,
            )

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code=ErrorCode.NO_HANDLER,
            )
        return handler(state, action)

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.PLACE_CARD: self._handle_place,
            ActionType.REORDER_HAND: self._handle_reorder,
        }
        return handlers.get(action_type)

    def _handle_place(self, state: GameState, action: Action) -> ActionResult:
        """Handle a placement; ends the turn whether or not the card fits."""
        player = state.current_player
        event_id = action.payload.event_id
        index = action.payload.index

        event = player.find_card(event_id) if event_id else None
        if event is None:
            return ActionResult.failure(
                f"Card {event_id} not in {player.name}'s hand",
                error_code=ErrorCode.CARD_NOT_IN_HAND,
            )

        if index is None or not 0 <= index <= len(state.timeline):
            return ActionResult.failure(
                f"Insertion index {index} outside timeline of {len(state.timeline)} cards",
                error_code=ErrorCode.INVALID_INDEX,
            )

        # Neighbours are taken from the timeline now, not from when the gesture began
        position = drop_position_at(state.timeline, index)
        new_state, placement = place_card(state, event, position)

        if placement.success:
            changes = [f"{player.name} placed {event.display_name} ({event.year})"]
        else:
            changes = [f"{player.name} misplaced {event.display_name}; card discarded"]
        if new_state.phase == GamePhase.GAME_OVER:
            names = ", ".join(w.name for w in new_state.winners)
            changes.append(f"Game over. Winner(s): {names}")

        return ActionResult.success_with_state(new_state, changes=changes, placement=placement)

    def _handle_reorder(self, state: GameState, action: Action) -> ActionResult:
        """Handle a hand reorder; does not consume the turn."""
        hand_size = state.current_player.hand_size
        old_index = action.payload.old_index
        new_index = action.payload.new_index

        for value in (old_index, new_index):
            if value is None or not 0 <= value < hand_size:
                return ActionResult.failure(
                    f"Hand index {value} outside hand of {hand_size} cards",
                    error_code=ErrorCode.INVALID_INDEX,
                )

        new_state = reorder_hand(state, old_index, new_index)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"{state.current_player.name} moved card {old_index} to {new_index}"],
        )


def apply_action(state: GameState, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer()
    return reducer.apply(state, action)
