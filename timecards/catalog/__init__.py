"""
Catalog - The event pool supplier.

Loads event JSON files listed in a manifest, validates them with
pydantic, deduplicates by id, and filters by difficulty, category and
era before a game is dealt. The engine itself never filters.
"""

from .models import EventManifest, EventRecord
from .eras import ALL_ERAS, ERA_DEFINITIONS, EraDefinition, era_for_year, get_era
from .loader import (
    CatalogError,
    CatalogSummary,
    EventCatalog,
    deduplicate,
    load_default_catalog,
    parse_records,
)

__all__ = [
    "EventManifest",
    "EventRecord",
    "ALL_ERAS",
    "ERA_DEFINITIONS",
    "EraDefinition",
    "era_for_year",
    "get_era",
    "CatalogError",
    "CatalogSummary",
    "EventCatalog",
    "deduplicate",
    "load_default_catalog",
    "parse_records",
]
