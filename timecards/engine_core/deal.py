"""
Deal Primitives - Stateless operations over card sequences.

Every function returns a new tuple and leaves its input untouched.
Randomness comes from an explicit random.Random so a seeded game
always deals the same cards.
"""

from __future__ import annotations
import random
from typing import Iterable, Sequence, TypeVar

from .state import HistoricalEvent

T = TypeVar("T")


def shuffle(items: Iterable[T], rng: random.Random | None = None) -> tuple[T, ...]:
    """
    Return a uniformly random permutation of items (Fisher-Yates).

    Args:
        items: Cards (or anything) to shuffle
        rng: Random source; the module-level generator when omitted
    """
    source = rng or random
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = source.randrange(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return tuple(shuffled)


def sort_by_year(events: Iterable[HistoricalEvent]) -> tuple[HistoricalEvent, ...]:
    """Stable ascending sort by year; equal years keep their relative order."""
    return tuple(sorted(events, key=lambda e: e.year))


def draw(
    deck: Sequence[HistoricalEvent],
) -> tuple[HistoricalEvent | None, tuple[HistoricalEvent, ...]]:
    """Return (front card, remaining deck). An empty deck yields (None, ())."""
    if not deck:
        return None, ()
    return deck[0], tuple(deck[1:])


def remove_from_hand(
    hand: Sequence[HistoricalEvent], event_id: str
) -> tuple[HistoricalEvent, ...]:
    """Remove the first card matching event_id. No-op if absent."""
    for i, event in enumerate(hand):
        if event.id == event_id:
            return tuple(hand[:i]) + tuple(hand[i + 1:])
    return tuple(hand)


def add_to_hand(
    hand: Sequence[HistoricalEvent], event: HistoricalEvent
) -> tuple[HistoricalEvent, ...]:
    """New cards join the back of the hand."""
    return tuple(hand) + (event,)


def insert_into_timeline(
    timeline: Sequence[HistoricalEvent], event: HistoricalEvent, index: int
) -> tuple[HistoricalEvent, ...]:
    """Splice event into the timeline at index."""
    new_timeline = list(timeline)
    new_timeline.insert(index, event)
    return tuple(new_timeline)


def array_move(items: Sequence[T], old_index: int, new_index: int) -> tuple[T, ...]:
    """
    Move one element from old_index to new_index.

    The element is removed and reinserted; everything in between
    shifts by one. Indices outside the sequence leave it unchanged.
    """
    size = len(items)
    if not (0 <= old_index < size and 0 <= new_index < size):
        return tuple(items)
    moved = list(items)
    item = moved.pop(old_index)
    moved.insert(new_index, item)
    return tuple(moved)
