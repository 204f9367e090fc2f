from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

CefrLevel = Literal["A1", "A2", "B1", "B2", "C1", "C2"]


class EnrichmentOptions(BaseModel):
    grammar: bool = False
    examples: int = Field(default=0, ge=0, le=10)
    level: CefrLevel = "B1"
    difficulty: bool = False
    synonyms: bool = False
    mnemonic: bool = False
    phrases: bool = False
    etymology: bool = False
    translation: bool = True
    gender_verb_forms: bool = False
    detailed_grammar_tables: bool = False

    def explains(self) -> bool:
        return self.grammar or self.examples > 0 or self.phrases or self.mnemonic or self.etymology


class GenerateWordDetailsIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    word_text: str = Field(default="", alias="wordText")
    language_name: str = Field(default="", alias="languageName")
    options: EnrichmentOptions | None = None
    native_language: str | None = Field(default=None, alias="nativeLanguage")
    user_id: Any = Field(default=None, alias="userId")
    is_native_phrase: bool = Field(default=False, alias="isNativePhrase")


class GenerateWordDetailsOut(BaseModel):
    success: bool = True
    translation: str | None = None
    aiData: dict[str, Any]
