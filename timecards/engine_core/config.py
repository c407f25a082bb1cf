"""
Game Config - Options chosen on the setup screen.

The engine only reads player_count, cards_per_player,
starting_timeline_events and player_names. The selected_* filters are
applied to the event pool by the catalog before a game is initialized;
they are carried here so a restart can rebuild the same pool.
"""

from __future__ import annotations
from dataclasses import dataclass

from .state import Category, Difficulty

# Setup screen ranges. The engine itself accepts any value >= 1.
MIN_PLAYERS = 1
MAX_PLAYERS = 6
MIN_CARDS_PER_PLAYER = 3
MAX_CARDS_PER_PLAYER = 10
MIN_STARTING_EVENTS = 1
MAX_STARTING_EVENTS = 10

DEFAULT_PLAYER_COUNT = 1
DEFAULT_CARDS_PER_PLAYER = 5
DEFAULT_STARTING_EVENTS = 3


class ConfigError(Exception):
    """Raised when a game configuration is invalid."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Invalid game config: {'; '.join(errors)}")


def default_player_name(index: int) -> str:
    return f"Player {index + 1}"


@dataclass(frozen=True)
class GameConfig:
    """Configuration for one game."""
    player_count: int = DEFAULT_PLAYER_COUNT
    cards_per_player: int = DEFAULT_CARDS_PER_PLAYER
    starting_timeline_events: int = DEFAULT_STARTING_EVENTS
    player_names: tuple[str, ...] = ()

    # Pool filters, applied by the catalog. Empty means "all".
    selected_difficulties: tuple[Difficulty, ...] = ()
    selected_categories: tuple[Category, ...] = ()
    selected_eras: tuple[str, ...] = ()

    def name_for(self, index: int) -> str:
        """Display name for player index; blank or missing names get 'Player N'."""
        if index < len(self.player_names):
            name = (self.player_names[index] or "").strip()
            if name:
                return name
        return default_player_name(index)

    def resolved_names(self) -> tuple[str, ...]:
        return tuple(self.name_for(i) for i in range(self.player_count))

    @property
    def cards_required(self) -> int:
        """Cards needed to seed the timeline and deal every hand in full."""
        return self.starting_timeline_events + self.player_count * self.cards_per_player

    def validate(self, strict: bool = False) -> list[str]:
        """
        Validate the configuration.

        Returns a list of error messages (empty when valid).
        With strict=True the setup screen ranges are enforced as well.
        """
        errors: list[str] = []

        if self.player_count < 1:
            errors.append("player_count must be >= 1")
        if self.cards_per_player < 1:
            errors.append("cards_per_player must be >= 1")
        if self.starting_timeline_events < 1:
            errors.append("starting_timeline_events must be >= 1")
        if len(self.player_names) > max(self.player_count, 0):
            errors.append("more player_names than players")

        if strict:
            if not MIN_PLAYERS <= self.player_count <= MAX_PLAYERS:
                errors.append(f"player_count must be between {MIN_PLAYERS} and {MAX_PLAYERS}")
            if not MIN_CARDS_PER_PLAYER <= self.cards_per_player <= MAX_CARDS_PER_PLAYER:
                errors.append(
                    f"cards_per_player must be between {MIN_CARDS_PER_PLAYER} "
                    f"and {MAX_CARDS_PER_PLAYER}"
                )
            if not MIN_STARTING_EVENTS <= self.starting_timeline_events <= MAX_STARTING_EVENTS:
                errors.append(
                    f"starting_timeline_events must be between {MIN_STARTING_EVENTS} "
                    f"and {MAX_STARTING_EVENTS}"
                )

        return errors

    @classmethod
    def create(
        cls,
        player_count: int = DEFAULT_PLAYER_COUNT,
        cards_per_player: int = DEFAULT_CARDS_PER_PLAYER,
        starting_timeline_events: int = DEFAULT_STARTING_EVENTS,
        player_names: list[str] | tuple[str, ...] | None = None,
        selected_difficulties: list[Difficulty] | tuple[Difficulty, ...] | None = None,
        selected_categories: list[Category] | tuple[Category, ...] | None = None,
        selected_eras: list[str] | tuple[str, ...] | None = None,
        strict: bool = False,
    ) -> GameConfig:
        """
        Build a validated config.

        Raises:
            ConfigError: if any option is out of range
        """
        config = cls(
            player_count=player_count,
            cards_per_player=cards_per_player,
            starting_timeline_events=starting_timeline_events,
            player_names=tuple(player_names or ()),
            selected_difficulties=tuple(selected_difficulties or ()),
            selected_categories=tuple(selected_categories or ()),
            selected_eras=tuple(selected_eras or ()),
        )
        errors = config.validate(strict=strict)
        if errors:
            raise ConfigError(errors)
        return config
