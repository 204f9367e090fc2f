from datetime import datetime

from pydantic import BaseModel, ConfigDict, constr, field_validator


class LanguageCreateIn(BaseModel):
    language_name: constr(strip_whitespace=True, min_length=1, max_length=50)
    iso_code: constr(strip_whitespace=True, to_lower=True, max_length=10) | None = None

    @field_validator("iso_code", mode="before")
    @classmethod
    def _empty_iso_to_none(cls, value: str | None):
        if isinstance(value, str):
            return value.strip() or None
        return value


class LanguageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    language_name: str
    iso_code: str | None = None
    created_at: datetime | None = None
