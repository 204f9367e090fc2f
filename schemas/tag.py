from pydantic import BaseModel, ConfigDict

from schemas.entry import EntryOut


class TagSummaryOut(BaseModel):
    tag_name: str
    icon_name: str
    color_class: str | None = None
    has_metadata: bool
    word_count: int
    translation_count: int


class TagMetadataIn(BaseModel):
    icon_name: str | None = None
    color_class: str | None = None


class TagMetadataOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    tag_name: str
    icon_name: str
    color_class: str | None = None


class TagEntriesOut(BaseModel):
    tag_name: str
    words: list[EntryOut]
    translations: list[EntryOut]
