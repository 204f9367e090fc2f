from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from schemas.enrichment import EnrichmentOptions
from services.payload import Section
from services.ordering import SortOrder


class EntryCreateIn(BaseModel):
    word: str
    translation: str
    language_id: int | None = None
    notes: str | None = None
    color: str | None = None
    image_url: str | None = None
    ai_data: dict[str, Any] | None = None
    tags: list[str] = []


class EntryUpdateIn(BaseModel):
    word: str
    translation: str
    notes: str | None = None
    color: str | None = None
    image_url: str | None = None
    tags: list[str] | None = None


class EnrichedEntryCreateIn(BaseModel):
    word: str
    language_id: int | None = None
    language_name: str | None = None
    translation: str | None = None
    notes: str | None = None
    color: str | None = None
    image_url: str | None = None
    tags: list[str] = []
    options: EnrichmentOptions = Field(default_factory=EnrichmentOptions)


class EnrichIn(BaseModel):
    language_name: str | None = None
    options: EnrichmentOptions = Field(default_factory=EnrichmentOptions)


class TagsIn(BaseModel):
    tags: list[str]


class EntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    word: str
    translation: str
    language_id: int | None = None
    notes: str | None = None
    color: str | None = None
    image_url: str | None = None
    ai_data: dict[str, Any] | None = None
    tags: list[str] = []
    created_at: datetime


class EntryDetailOut(EntryOut):
    sections: list[Section] = []
    random_slug: str | None = None


class EntryListOut(BaseModel):
    sort: SortOrder
    entries: list[EntryOut]


class RandomSlugOut(BaseModel):
    slug: str | None = None
