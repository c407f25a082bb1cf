"""
Tests for the reducer (state transitions).

Tests:
- Dealing a new game
- Placement validation against neighbours
- Turn, round and win bookkeeping
- Request validation and error codes
"""

import pytest

from ..engine_core.action import Action, ErrorCode
from ..engine_core.config import GameConfig
from ..engine_core.reducer import (
    Reducer,
    apply_action,
    drop_position_at,
    drop_positions,
    initialize_game,
    is_placement_correct,
    pass_turn,
    place_card,
    reorder_hand,
    should_game_end,
    skip_empty_hands,
)
from ..engine_core.state import DropPosition, GamePhase, Player
from .conftest import make_event


def _with_hand(state, player_index, hand):
    player = state.players[player_index]
    return state.with_player(player.with_hand(tuple(hand)))


class TestInitializeGame:
    """Tests for dealing."""

    def test_deal_sizes(self, two_player_config, event_pool):
        state = initialize_game(two_player_config, event_pool, seed=1)

        assert state.phase == GamePhase.PLAYING
        assert len(state.timeline) == 2
        assert [p.hand_size for p in state.players] == [3, 3]
        assert len(state.deck) == 2
        assert state.current_player_index == 0
        assert state.turn_number == 1
        assert state.round_number == 1
        assert state.winners == ()

    def test_timeline_sorted(self, two_player_config, event_pool):
        state = initialize_game(two_player_config, event_pool, seed=9)
        years = [e.year for e in state.timeline]
        assert years == sorted(years)

    def test_every_card_dealt_once(self, two_player_config, event_pool):
        state = initialize_game(two_player_config, event_pool, seed=5)
        dealt = list(state.timeline) + list(state.deck)
        for player in state.players:
            dealt.extend(player.hand)
        assert sorted(e.id for e in dealt) == sorted(e.id for e in event_pool)

    def test_seed_reproduces_deal(self, two_player_config, event_pool):
        first = initialize_game(two_player_config, event_pool, seed=1234)
        second = initialize_game(two_player_config, event_pool, seed=1234)
        assert first == second

    def test_seed_generated_when_missing(self, two_player_config, event_pool):
        state = initialize_game(two_player_config, event_pool)
        assert state.random_seed is not None
        replay = initialize_game(two_player_config, event_pool, seed=state.random_seed)
        assert replay.timeline == state.timeline
        assert replay.players == state.players

    def test_player_names(self, event_pool):
        config = GameConfig(player_count=3, cards_per_player=2, player_names=("Ada", "  "))
        state = initialize_game(config, event_pool, seed=0)
        assert [p.name for p in state.players] == ["Ada", "Player 2", "Player 3"]

    def test_short_pool_deals_short_hands(self):
        pool = [make_event(f"e{i}", i) for i in range(5)]
        config = GameConfig(player_count=2, cards_per_player=3, starting_timeline_events=1)
        state = initialize_game(config, pool, seed=0)

        assert len(state.timeline) == 1
        assert [p.hand_size for p in state.players] == [3, 1]
        assert state.deck == ()

    def test_pool_only_fills_timeline(self):
        pool = [make_event("a", 100), make_event("b", 200)]
        config = GameConfig(player_count=2, cards_per_player=3, starting_timeline_events=2)
        state = initialize_game(config, pool, seed=0)

        assert [p.hand_size for p in state.players] == [0, 0]
        assert state.phase == GamePhase.GAME_OVER
        assert state.winners == ()


class TestPlacementRules:
    """Tests for neighbour checks."""

    def test_drop_positions_count(self, playing_state):
        positions = drop_positions(playing_state.timeline)
        assert [p.index for p in positions] == [0, 1, 2]
        assert positions[0].left_event is None
        assert positions[-1].right_event is None

    def test_empty_timeline_has_one_position(self):
        positions = drop_positions(())
        assert len(positions) == 1
        assert positions[0].left_event is None and positions[0].right_event is None

    @pytest.mark.parametrize("year,expected", [
        (1950, True),
        (1900, True),
        (2000, True),
        (1899, False),
        (2001, False),
    ])
    def test_between_neighbours(self, playing_state, year, expected):
        timeline = playing_state.timeline
        position = drop_position_at(timeline, 1)
        assert is_placement_correct(timeline, make_event("x", year), position) is expected

    def test_open_ends(self, playing_state):
        timeline = playing_state.timeline
        assert is_placement_correct(timeline, make_event("x", -3000), drop_position_at(timeline, 0))
        assert is_placement_correct(timeline, make_event("y", 3000), drop_position_at(timeline, 2))
        assert not is_placement_correct(timeline, make_event("z", 1950), drop_position_at(timeline, 0))


class TestPlaceCard:
    """Tests for resolving one turn."""

    def test_correct_placement(self, playing_state):
        card = playing_state.players[0].hand[0]  # 1950
        new_state, result = place_card(playing_state, card, drop_position_at(playing_state.timeline, 1))

        assert result.success
        assert [e.year for e in new_state.timeline] == [1900, 1950, 2000]
        assert [e.id for e in new_state.players[0].hand] == ["a-1800"]
        assert new_state.deck == playing_state.deck
        assert new_state.current_player_index == 1
        assert new_state.turn_number == 2
        assert new_state.round_number == 1
        assert new_state.last_placement_result == result

    def test_incorrect_placement_discards_and_draws(self, playing_state):
        card = playing_state.players[0].hand[1]  # 1800
        new_state, result = place_card(playing_state, card, drop_position_at(playing_state.timeline, 1))

        assert not result.success
        assert result.correct_position == 0
        assert new_state.timeline == playing_state.timeline
        assert [e.id for e in new_state.players[0].hand] == ["a-1950", "deck-1850"]
        assert new_state.deck == ()
        assert new_state.discard == (card,)
        assert new_state.current_player_index == 1

    def test_incorrect_placement_with_empty_deck(self, playing_state):
        state = playing_state._copy_with(deck=())
        card = state.players[0].hand[1]
        new_state, result = place_card(state, card, drop_position_at(state.timeline, 1))

        assert not result.success
        assert [e.id for e in new_state.players[0].hand] == ["a-1950"]
        assert new_state.card_count() == state.card_count()

    def test_last_card_misplaced_on_empty_deck_wins(self, playing_state):
        state = _with_hand(playing_state._copy_with(deck=()), 0, [make_event("only", 1800)])
        new_state, result = place_card(state, state.players[0].hand[0], drop_position_at(state.timeline, 2))

        assert not result.success
        assert new_state.players[0].has_won
        assert [w.name for w in new_state.winners] == ["Ada"]

    def test_round_advances_after_last_player(self, playing_state):
        state = _with_hand(playing_state, 1, [make_event("g1", 1600), make_event("g2", 1700)])
        state = state._copy_with(current_player_index=1, turn_number=2)
        card = state.players[1].hand[0]
        new_state, _ = place_card(state, card, drop_position_at(state.timeline, 0))

        assert new_state.current_player_index == 0
        assert new_state.round_number == 2
        assert new_state.turn_number == 3

    def test_original_state_untouched(self, playing_state):
        before = playing_state
        place_card(playing_state, playing_state.players[0].hand[0], drop_position_at(playing_state.timeline, 1))
        assert playing_state == before
        assert playing_state.players[0].hand_size == 2

    def test_stale_drop_position_uses_current_neighbours(self, playing_state):
        """Neighbours carried in by the caller are ignored; only the index counts."""
        card = playing_state.players[0].hand[0]  # 1950
        stale = DropPosition(index=0, left_event=None, right_event=None)
        new_state, result = place_card(playing_state, card, stale)

        assert not result.success
        assert result.correct_position == 1
        assert [e.year for e in new_state.timeline] == [1900, 2000]
        assert new_state.discard == (card,)

    def test_stale_interior_position_keeps_timeline_sorted(self, playing_state):
        card = playing_state.players[0].hand[1]  # 1800
        stale = DropPosition(index=1, left_event=None, right_event=None)
        new_state, result = place_card(playing_state, card, stale)

        assert not result.success
        years = [e.year for e in new_state.timeline]
        assert years == sorted(years) == [1900, 2000]

    @pytest.mark.parametrize("index", [-1, 3, 5])
    def test_index_outside_timeline_is_incorrect(self, playing_state, index):
        card = playing_state.players[0].hand[0]
        new_state, result = place_card(playing_state, card, DropPosition(index=index))

        assert not result.success
        assert new_state.timeline == playing_state.timeline
        assert [e.id for e in new_state.players[0].hand] == ["a-1800", "deck-1850"]
        assert new_state.current_player_index == 1


class TestWinning:
    """Tests for win detection and the end of the final round."""

    def test_first_player_win_waits_for_round(self, playing_state):
        state = _with_hand(playing_state, 0, [make_event("a-1950", 1950)])
        state = _with_hand(state, 1, [make_event("g1", 1600), make_event("g2", 1700)])

        state, _ = place_card(state, state.players[0].hand[0], drop_position_at(state.timeline, 1))
        assert state.players[0].has_won
        assert state.players[0].win_turn == 1
        assert state.phase == GamePhase.PLAYING
        assert not should_game_end(state)

        state, _ = place_card(state, state.players[1].hand[0], drop_position_at(state.timeline, 0))
        assert state.phase == GamePhase.GAME_OVER
        assert [w.name for w in state.winners] == ["Ada"]

    def test_two_winners_same_round(self, playing_state):
        state = _with_hand(playing_state, 0, [make_event("a-1950", 1950)])

        state, _ = place_card(state, state.players[0].hand[0], drop_position_at(state.timeline, 1))
        state, _ = place_card(state, state.players[1].hand[0], drop_position_at(state.timeline, 0))

        assert state.phase == GamePhase.GAME_OVER
        assert [(w.name, w.win_turn) for w in state.winners] == [("Ada", 1), ("Grace", 2)]

    def test_single_player_game(self):
        config = GameConfig(player_count=1, cards_per_player=1, starting_timeline_events=1)
        pool = [make_event("a", 100), make_event("b", 200)]
        state = initialize_game(config, pool, seed=0)

        card = state.players[0].hand[0]
        index = 0 if card.year < state.timeline[0].year else 1
        state, result = place_card(state, card, drop_position_at(state.timeline, index))

        assert result.success
        assert state.phase == GamePhase.GAME_OVER
        assert state.winners[0].win_turn == 1

    def test_winner_not_added_twice(self, playing_state):
        winner = Player(id=0, name="Ada", hand=(), has_won=True, win_turn=1)
        state = playing_state.with_player(winner)._copy_with(winners=(winner,), current_player_index=1)
        state = _with_hand(state, 1, [make_event("g1", 1600), make_event("g2", 1700)])

        state, _ = place_card(state, state.players[1].hand[0], drop_position_at(state.timeline, 0))
        assert len(state.winners) == 1


class TestEmptyHands:
    """Tests for turns of players a short pool dealt nothing."""

    def test_pass_turn(self, playing_state):
        state = pass_turn(playing_state)
        assert (state.current_player_index, state.turn_number, state.round_number) == (1, 2, 1)

        state = pass_turn(state)
        assert (state.current_player_index, state.turn_number, state.round_number) == (0, 3, 2)
        assert state.phase == GamePhase.PLAYING

    def test_pass_turn_closes_round_with_winner(self, playing_state):
        winner = Player(id=1, name="Grace", hand=(), has_won=True, win_turn=2)
        state = playing_state.with_player(winner)._copy_with(winners=(winner,), current_player_index=1)
        assert pass_turn(state).phase == GamePhase.GAME_OVER

    def test_skip_leaves_player_with_cards(self, playing_state):
        assert skip_empty_hands(playing_state) is playing_state

    def test_skip_passes_empty_hand(self, playing_state):
        state = _with_hand(playing_state, 1, [])._copy_with(current_player_index=1, turn_number=2)
        state = skip_empty_hands(state)

        assert state.current_player_index == 0
        assert state.turn_number == 3
        assert state.round_number == 2
        assert state.phase == GamePhase.PLAYING

    def test_skip_with_no_cards_anywhere(self, playing_state):
        state = _with_hand(_with_hand(playing_state, 0, []), 1, [])
        state = skip_empty_hands(state)

        assert state.phase == GamePhase.GAME_OVER
        assert state.winners == ()

    @pytest.mark.parametrize("index", [0, 1])
    def test_two_players_pool_of_two(self, index):
        """The second player is dealt nothing; the first player's turn still ends the game."""
        config = GameConfig(player_count=2, cards_per_player=1, starting_timeline_events=1)
        pool = [make_event("a", 100), make_event("b", 200)]
        state = initialize_game(config, pool, seed=0)
        assert [p.hand_size for p in state.players] == [1, 0]

        result = apply_action(state, Action.place(state.players[0].hand[0].id, index))
        state = result.new_state

        assert state.phase == GamePhase.GAME_OVER
        assert [w.id for w in state.winners] == [0]
        assert state.current_player_index == 0
        assert state.turn_number == 3
        assert result.state_changes[-1].startswith("Game over.")


class TestReorderHand:

    def test_reorder_moves_card(self, playing_state):
        new_state = reorder_hand(playing_state, 0, 1)
        assert [e.id for e in new_state.players[0].hand] == ["a-1800", "a-1950"]

    def test_reorder_is_free(self, playing_state):
        new_state = reorder_hand(playing_state, 1, 0)
        assert new_state.current_player_index == playing_state.current_player_index
        assert new_state.turn_number == playing_state.turn_number
        assert new_state.timeline == playing_state.timeline
        assert new_state.deck == playing_state.deck

    def test_reorder_out_of_range_unchanged(self, playing_state):
        assert reorder_hand(playing_state, 0, 9) is playing_state


class TestReducer:
    """Tests for request validation."""

    def test_place_action(self, playing_state):
        result = apply_action(playing_state, Action.place("a-1950", 1))

        assert result.success
        assert result.placement.success
        assert result.new_state.timeline[1].id == "a-1950"
        assert "placed" in result.state_changes[0]

    def test_place_card_not_in_hand(self, playing_state):
        result = apply_action(playing_state, Action.place("g-1600", 0))

        assert not result.success
        assert result.error_code == ErrorCode.CARD_NOT_IN_HAND

    @pytest.mark.parametrize("index", [-1, 3, 10])
    def test_place_invalid_index(self, playing_state, index):
        result = apply_action(playing_state, Action.place("a-1950", index))

        assert not result.success
        assert result.error_code == ErrorCode.INVALID_INDEX

    def test_place_when_game_over(self, playing_state):
        state = playing_state._copy_with(phase=GamePhase.GAME_OVER)
        result = apply_action(state, Action.place("a-1950", 1))

        assert not result.success
        assert result.error_code == ErrorCode.GAME_NOT_PLAYING

    def test_reorder_when_game_over(self, playing_state):
        state = playing_state._copy_with(phase=GamePhase.GAME_OVER)
        result = Reducer().apply(state, Action.reorder(0, 1))
        assert result.error_code == ErrorCode.GAME_NOT_PLAYING

    def test_reorder_invalid_index(self, playing_state):
        result = Reducer().apply(playing_state, Action.reorder(0, 2))
        assert not result.success
        assert result.error_code == ErrorCode.INVALID_INDEX

    def test_judged_against_current_timeline(self, playing_state):
        """A stale gesture is resolved with today's neighbours at its index."""
        # Timeline grows to 1900, 1950, 2000 before Grace's request arrives
        state = apply_action(playing_state, Action.place("a-1950", 1)).new_state
        state = _with_hand(state, 1, [make_event("g-1920", 1920)])

        result = apply_action(state, Action.place("g-1920", 1))
        assert result.success
        assert result.placement.success

        result = apply_action(state, Action.place("g-1920", 2))
        assert not result.placement.success

    def test_game_over_change_reported(self, playing_state):
        state = _with_hand(playing_state, 0, [make_event("a-1950", 1950)])
        state = apply_action(state, Action.place("a-1950", 1)).new_state
        result = apply_action(state, Action.place("g-1600", 0))

        assert result.new_state.phase == GamePhase.GAME_OVER
        assert result.state_changes[-1] == "Game over. Winner(s): Ada, Grace"


class TestScenario:
    """Whole games on known deals."""

    def test_single_player_deal_and_interior_placement(self, event_pool):
        config = GameConfig(player_count=1, cards_per_player=5, starting_timeline_events=2)

        for seed in range(100):
            state = initialize_game(config, event_pool, seed=seed)
            low, high = state.timeline
            between = [e for e in state.players[0].hand if low.year < e.year < high.year]
            if between:
                break
        else:
            pytest.fail("no deal with a card between the seed years")

        assert low.year < high.year
        assert state.players[0].hand_size == 5
        assert len(state.deck) == 3

        result = apply_action(state, Action.place(between[0].id, 1))
        assert result.placement.success
        assert result.new_state.players[0].hand_size == 4
        assert [e.year for e in result.new_state.timeline] == sorted([low.year, between[0].year, high.year])

    def test_play_to_the_end(self, two_player_config, event_pool):
        state = initialize_game(two_player_config, event_pool, seed=2024)
        total = state.card_count()
        reducer = Reducer()

        for _ in range(50):
            if state.phase == GamePhase.GAME_OVER:
                break
            card = state.current_player.hand[0]
            index = sum(1 for e in state.timeline if e.year < card.year)
            result = reducer.apply(state, Action.place(card.id, index))
            assert result.success
            assert result.placement.success
            state = result.new_state

            years = [e.year for e in state.timeline]
            assert years == sorted(years)
            assert state.card_count() == total

        assert state.phase == GamePhase.GAME_OVER
        # Both players hold three cards and always place correctly
        assert [w.name for w in state.winners] == ["Ada", "Grace"]
        assert state.turn_number == 7
