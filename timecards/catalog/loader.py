"""
Event Catalog - Loads, validates and filters historical events.

Directory layout:
    manifest.json          {"categories": [{"name": ..., "files": [...]}]}
    <category>.json        [ {event record}, ... ]

Loading is forgiving about individual files and records: an unreadable
file or an invalid record is skipped with a warning. Only a missing or
malformed manifest is an error. Events are deduplicated by id, first
occurrence wins.
"""

from __future__ import annotations
import json
import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from pydantic import ValidationError

from ..engine_core.config import GameConfig
from ..engine_core.state import Category, Difficulty, HistoricalEvent
from .eras import era_for_year, get_era
from .models import EventManifest, EventRecord

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path(__file__).parent / "data"
MANIFEST_NAME = "manifest.json"


class CatalogError(Exception):
    """Raised when the catalog directory cannot be read at all."""


@dataclass
class CatalogSummary:
    """Counts for the setup screen."""
    total: int
    by_category: dict[str, int] = field(default_factory=dict)
    by_difficulty: dict[str, int] = field(default_factory=dict)
    by_era: dict[str, int] = field(default_factory=dict)


def parse_records(raw: Any, source: str = "<memory>") -> list[HistoricalEvent]:
    """Validate raw records, skipping (and logging) the invalid ones."""
    if not isinstance(raw, list):
        logger.warning("Expected a list of events in %s, got %s", source, type(raw).__name__)
        return []

    events = []
    for position, item in enumerate(raw):
        try:
            events.append(EventRecord.model_validate(item).to_event())
        except ValidationError as e:
            logger.warning(
                "Skipping invalid event #%d in %s: %d error(s)",
                position, source, e.error_count(),
            )
    return events


def deduplicate(events: Iterable[HistoricalEvent]) -> list[HistoricalEvent]:
    """Keep the first event for each id."""
    seen: set[str] = set()
    unique = []
    for event in events:
        if event.id in seen:
            logger.warning("Duplicate event found: %s", event.id)
            continue
        seen.add(event.id)
        unique.append(event)
    return unique


class EventCatalog:
    """
    The full set of playable events.

    Usage:
        catalog = EventCatalog.from_directory("public/events")
        pool = catalog.pool_for(config)
        state = initialize_game(config, pool)
    """

    def __init__(self, events: Iterable[HistoricalEvent]):
        self._events = tuple(deduplicate(events))
        self._by_id = {e.id: e for e in self._events}

    @classmethod
    def from_directory(cls, directory: str | Path) -> EventCatalog:
        """
        Load every file listed in the directory's manifest.

        Raises:
            CatalogError: if manifest.json is missing or malformed
        """
        base = Path(directory)
        manifest = _read_manifest(base / MANIFEST_NAME)

        events: list[HistoricalEvent] = []
        for file_name in manifest.all_files():
            path = base / file_name
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as e:
                logger.warning("Failed to load %s: %s", path, e)
                continue
            events.extend(parse_records(raw, source=file_name))

        catalog = cls(events)
        logger.info(
            "Loaded %d unique events from %d categories",
            len(catalog), len(manifest.categories),
        )
        return catalog

    @property
    def events(self) -> tuple[HistoricalEvent, ...]:
        return self._events

    def __len__(self) -> int:
        return len(self._events)

    def get(self, event_id: str) -> HistoricalEvent | None:
        return self._by_id.get(event_id)

    def filter(
        self,
        difficulties: Iterable[Difficulty] = (),
        categories: Iterable[Category] = (),
        eras: Iterable[str] = (),
    ) -> tuple[HistoricalEvent, ...]:
        """
        Events matching every non-empty selection.

        An empty selection does not filter. Unknown era ids are ignored.
        """
        difficulty_set = set(difficulties)
        category_set = set(categories)

        era_defs = []
        for era_id in eras:
            era = get_era(era_id)
            if era is None:
                logger.warning("Ignoring unknown era: %s", era_id)
                continue
            era_defs.append(era)

        def matches(event: HistoricalEvent) -> bool:
            if difficulty_set and event.difficulty not in difficulty_set:
                return False
            if category_set and event.category not in category_set:
                return False
            if era_defs and not any(era.contains(event.year) for era in era_defs):
                return False
            return True

        return tuple(e for e in self._events if matches(e))

    def pool_for(self, config: GameConfig) -> tuple[HistoricalEvent, ...]:
        """The filtered pool a game with this config is dealt from."""
        pool = self.filter(
            difficulties=config.selected_difficulties,
            categories=config.selected_categories,
            eras=config.selected_eras,
        )
        if len(pool) < config.cards_required:
            logger.info(
                "Pool of %d events is smaller than the %d a full deal needs",
                len(pool), config.cards_required,
            )
        return pool

    def summary(self) -> CatalogSummary:
        return CatalogSummary(
            total=len(self._events),
            by_category=dict(Counter(e.category.value for e in self._events)),
            by_difficulty=dict(Counter(e.difficulty.value for e in self._events)),
            by_era=dict(Counter(era_for_year(e.year).id for e in self._events)),
        )


def _read_manifest(path: Path) -> EventManifest:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise CatalogError(f"Events manifest not found: {path}")
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"Failed to read events manifest {path}: {e}")

    try:
        return EventManifest.model_validate(raw)
    except ValidationError as e:
        raise CatalogError(f"Malformed events manifest {path}: {e.error_count()} error(s)")


def load_default_catalog() -> EventCatalog:
    """The sample events bundled with the package."""
    return EventCatalog.from_directory(DEFAULT_DATA_DIR)
