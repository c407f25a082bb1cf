"""
Pytest fixtures for Timecards tests.
"""

import pytest

from ..catalog import EventCatalog, load_default_catalog
from ..engine_core.config import GameConfig
from ..engine_core.state import Category, Difficulty, GamePhase, GameState, HistoricalEvent, Player


def make_event(event_id: str, year: int, category=Category.CONFLICT, difficulty=Difficulty.EASY):
    """Build a card whose display name is derived from its id."""
    return HistoricalEvent(
        id=event_id,
        display_name=event_id.replace("-", " ").title(),
        year=year,
        category=category,
        difficulty=difficulty,
        description=f"Something happened in {year}.",
    )


POOL_YEARS = [-500, 100, 1000, 1500, 1600, 1800, 1850, 1900, 1950, 2000]


@pytest.fixture
def event_pool() -> list[HistoricalEvent]:
    """Ten events with distinct years."""
    return [make_event(f"event-{i}", year) for i, year in enumerate(POOL_YEARS)]


@pytest.fixture
def two_player_config() -> GameConfig:
    return GameConfig(
        player_count=2,
        cards_per_player=3,
        starting_timeline_events=2,
        player_names=("Ada", "Grace"),
    )


@pytest.fixture
def playing_state() -> GameState:
    """
    Hand-built two player game.

    Timeline: 1900, 2000. Ada holds 1950 and 1800, Grace holds 1600.
    One card left in the deck.
    """
    timeline = (make_event("t-1900", 1900), make_event("t-2000", 2000))
    return GameState(
        phase=GamePhase.PLAYING,
        timeline=timeline,
        deck=(make_event("deck-1850", 1850),),
        players=(
            Player(id=0, name="Ada", hand=(make_event("a-1950", 1950), make_event("a-1800", 1800))),
            Player(id=1, name="Grace", hand=(make_event("g-1600", 1600),)),
        ),
        random_seed=7,
        starting_timeline_size=2,
    )


@pytest.fixture
def small_catalog(event_pool) -> EventCatalog:
    return EventCatalog(event_pool)


@pytest.fixture(scope="session")
def bundled_catalog() -> EventCatalog:
    """The sample events shipped with the package."""
    return load_default_catalog()
