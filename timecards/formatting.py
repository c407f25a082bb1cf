"""
Display helpers shared by the CLI and the API.
"""

from __future__ import annotations
from typing import Iterable

from .engine_core.state import Category, Player

CATEGORY_NAMES = {
    Category.CONFLICT: "Conflict & Politics",
    Category.DISASTERS: "Disasters & Crises",
    Category.EXPLORATION: "Exploration & Discovery",
    Category.CULTURAL: "Cultural & Social",
    Category.INFRASTRUCTURE: "Infrastructure & Construction",
    Category.DIPLOMATIC: "Diplomatic & Institutional",
}


def format_year(year: int) -> str:
    """
    Human-readable year.

    Examples:
        >>> format_year(1969)
        '1969 CE'
        >>> format_year(-44)
        '44 BCE'
        >>> format_year(-12000)
        '12,000 BCE'
        >>> format_year(-66000000)
        '66 million BCE'
    """
    if year < 0:
        abs_year = abs(year)
        if abs_year >= 1_000_000_000:
            return f"{abs_year / 1_000_000_000:.1f} billion BCE"
        if abs_year >= 1_000_000:
            return f"{abs_year / 1_000_000:.0f} million BCE"
        if abs_year >= 1000:
            return f"{abs_year:,} BCE"
        return f"{abs_year} BCE"
    return f"{year} CE"


def category_display_name(category: Category) -> str:
    return CATEGORY_NAMES.get(category, category.value)


def rank_winners(winners: Iterable[Player]) -> list[Player]:
    """Winners ordered by the turn they emptied their hand (stable for ties)."""
    return sorted(winners, key=lambda p: p.win_turn or 0)
