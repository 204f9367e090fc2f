from typing import Literal

from pydantic import BaseModel, ConfigDict, constr

from services.ordering import SortOrder

ThemeLiteral = Literal["light", "dark", "system"]


class UserSettingsIn(BaseModel):
    native_language: constr(strip_whitespace=True, min_length=1, max_length=50)
    theme: ThemeLiteral
    username: constr(strip_whitespace=True, min_length=3, max_length=50)
    word_sort_preference: SortOrder = SortOrder.DATE_DESC


class UserSettingsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    native_language: str
    theme: ThemeLiteral
    username: str
    word_sort_preference: SortOrder


class SortPreferenceIn(BaseModel):
    sort: str
