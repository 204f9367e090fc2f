from pydantic import BaseModel, constr


class CardOut(BaseModel):
    id: int
    word: str
    translation: str
    gender: str | None = None


class GameDeckOut(BaseModel):
    game: str
    total: int
    cards: list[CardOut]


class RecallCheckIn(BaseModel):
    expected: constr(min_length=1)
    answer: str


class RecallCheckOut(BaseModel):
    correct: bool
    expected: str
