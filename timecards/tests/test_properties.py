"""
Property-based tests for the engine.

Tests cover:
- Shuffle is a permutation
- array_move round trips
- Random play keeps the timeline sorted and conserves cards
- Every game ends, with the round closed
"""

import random

from hypothesis import given, settings
from hypothesis import strategies as st

from ..engine_core.action import Action
from ..engine_core.config import GameConfig
from ..engine_core.deal import array_move, shuffle
from ..engine_core.reducer import Reducer, initialize_game
from ..engine_core.state import GamePhase
from .conftest import make_event


def _pool(years):
    return [make_event(f"e{i}", year) for i, year in enumerate(years)]


class TestShuffleProperties:

    @given(
        items=st.lists(st.integers(), max_size=40),
        seed=st.integers(min_value=0, max_value=2**32),
    )
    def test_shuffle_keeps_every_item(self, items, seed):
        assert sorted(shuffle(items, random.Random(seed))) == sorted(items)


class TestArrayMoveProperties:

    @given(data=st.data())
    def test_move_and_move_back(self, data):
        items = tuple(data.draw(st.lists(st.integers(), min_size=1, max_size=20)))
        old = data.draw(st.integers(min_value=0, max_value=len(items) - 1))
        new = data.draw(st.integers(min_value=0, max_value=len(items) - 1))

        moved = array_move(items, old, new)
        assert sorted(moved) == sorted(items)
        assert moved[new] == items[old]
        assert array_move(moved, new, old) == items


class TestGameProperties:

    @settings(max_examples=50, deadline=None)
    @given(
        years=st.lists(st.integers(min_value=-5000, max_value=2025), min_size=4, max_size=40),
        player_count=st.integers(min_value=1, max_value=4),
        cards_per_player=st.integers(min_value=1, max_value=5),
        starting=st.integers(min_value=1, max_value=3),
        seed=st.integers(min_value=0, max_value=10**6),
    )
    def test_random_play(self, years, player_count, cards_per_player, starting, seed):
        config = GameConfig(
            player_count=player_count,
            cards_per_player=cards_per_player,
            starting_timeline_events=starting,
        )
        state = initialize_game(config, _pool(years), seed=seed)
        total = state.card_count()
        moves = random.Random(seed)
        reducer = Reducer()

        # Hands plus deck shrink by one every turn, so play is bounded
        limit = sum(p.hand_size for p in state.players) + len(state.deck) + player_count

        for _ in range(limit):
            if state.phase == GamePhase.GAME_OVER:
                break
            player = state.current_player
            assert player.hand

            card = moves.choice(player.hand)
            index = moves.randint(0, len(state.timeline))
            result = reducer.apply(state, Action.place(card.id, index))
            assert result.success
            state = result.new_state

            years_now = [e.year for e in state.timeline]
            assert years_now == sorted(years_now)
            assert state.card_count() == total
            assert len(state.timeline) >= state.starting_timeline_size

        assert state.phase == GamePhase.GAME_OVER
        assert state.current_player_index == 0
        assert state.winners
        assert all(w.has_won and w.hand == () for w in state.winners)
        win_turns = [w.win_turn for w in state.winners]
        assert win_turns == sorted(win_turns)
