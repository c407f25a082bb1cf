"""
Catalog Models - Pydantic schemas for event data files.

The on-disk format keeps the field names of the event JSON files
(name / friendly_name / image_url). Records are validated here and
converted to engine HistoricalEvent values.
"""

from typing import Optional
from pydantic import BaseModel, Field

from ..engine_core.state import Category, Difficulty, HistoricalEvent


class EventRecord(BaseModel):
    """One event as stored in a category JSON file."""
    name: str = Field(min_length=1, description="Stable unique id, e.g. 'wwi-end'")
    friendly_name: str = Field(min_length=1, description="Display name")
    year: int = Field(description="Negative years are BCE")
    category: Category
    difficulty: Difficulty
    description: str
    image_url: Optional[str] = None

    model_config = {"extra": "ignore"}

    def to_event(self) -> HistoricalEvent:
        return HistoricalEvent(
            id=self.name,
            display_name=self.friendly_name,
            year=self.year,
            category=self.category,
            difficulty=self.difficulty,
            description=self.description,
            image_ref=self.image_url,
        )


class ManifestCategory(BaseModel):
    name: str
    files: list[str] = Field(default_factory=list)


class EventManifest(BaseModel):
    """manifest.json: which files make up each category."""
    categories: list[ManifestCategory] = Field(default_factory=list)

    def all_files(self) -> list[str]:
        return [f for category in self.categories for f in category.files]
