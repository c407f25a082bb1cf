"""
Eras - Fixed year ranges used to filter the event pool.

Bounds are inclusive. Prehistory is open-ended to the past and
Modern to the future.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class EraDefinition:
    id: str
    name: str
    start_year: int | None
    end_year: int | None

    def contains(self, year: int) -> bool:
        if self.start_year is not None and year < self.start_year:
            return False
        if self.end_year is not None and year > self.end_year:
            return False
        return True


ERA_DEFINITIONS: tuple[EraDefinition, ...] = (
    EraDefinition("prehistory", "Prehistory", None, -3001),
    EraDefinition("ancient", "Ancient", -3000, 499),
    EraDefinition("medieval", "Medieval", 500, 1499),
    EraDefinition("earlyModern", "Renaissance", 1500, 1759),
    EraDefinition("industrial", "Industrial", 1760, 1913),
    EraDefinition("worldWars", "World Wars", 1914, 1945),
    EraDefinition("coldWar", "Cold War", 1946, 1991),
    EraDefinition("modern", "Modern", 1992, None),
)

ALL_ERAS: tuple[str, ...] = tuple(era.id for era in ERA_DEFINITIONS)

_BY_ID = {era.id: era for era in ERA_DEFINITIONS}


def get_era(era_id: str) -> EraDefinition | None:
    return _BY_ID.get(era_id)


def era_for_year(year: int) -> EraDefinition:
    """The era a year falls in. The eras cover every year."""
    for era in ERA_DEFINITIONS:
        if era.contains(year):
            return era
    # Unreachable with the definitions above
    return ERA_DEFINITIONS[-1]
