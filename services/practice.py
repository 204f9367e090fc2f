import random
import re
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from core import errors
from models.entry import Word
from repositories.entry_repo import EntryRepository
from services.payload import entry_gender

GAME_LENGTH = 10
GAMES = ("memory-cards", "article-guesser", "quick-recall")


@dataclass
class Card:
    id: int
    word: str
    translation: str
    gender: str | None = None


@dataclass
class PracticeSession:
    """Fixed, shuffled subsample walked front to back; nothing is persisted."""

    cards: list[Card]
    index: int = 0
    correct: int = 0
    attempted: int = 0
    results: list[bool] = field(default_factory=list)

    @classmethod
    def start(cls, cards: list[Card], size: int = GAME_LENGTH, rng: random.Random | None = None) -> "PracticeSession":
        pool = list(cards)
        (rng or random).shuffle(pool)
        return cls(cards=pool[:size])

    @property
    def finished(self) -> bool:
        return self.index >= len(self.cards)

    @property
    def current(self) -> Card | None:
        return None if self.finished else self.cards[self.index]

    def answer(self, is_correct: bool) -> Card | None:
        if self.finished:
            raise errors.ValidationError("The game is already over.")
        self.attempted += 1
        if is_correct:
            self.correct += 1
        self.results.append(is_correct)
        self.index += 1
        return self.current

    def score(self) -> dict:
        return {"correct": self.correct, "attempted": self.attempted, "total": len(self.cards)}


def normalize_answer(text: str) -> str:
    return re.sub(r"[^\w]", "", (text or "").strip().lower())


def check_recall(expected: str, answer: str) -> bool:
    return bool(normalize_answer(answer)) and normalize_answer(expected) == normalize_answer(answer)


class PracticeService:
    def __init__(self, db: Session):
        self.repo = EntryRepository(db, Word)

    def _cards(self, user_id: int, language_id: int | None) -> list[Card]:
        return [
            Card(id=entry.id, word=entry.word, translation=entry.translation, gender=entry_gender(entry.ai_data))
            for entry in self.repo.list_entries(user_id, language_id=language_id)
        ]

    def deck(self, game: str, *, user_id: int, language_id: int | None = None, size: int = GAME_LENGTH) -> PracticeSession:
        if game not in GAMES:
            raise errors.NotFoundError(f'Unknown game "{game}"')
        cards = self._cards(user_id, language_id)
        if game == "article-guesser":
            cards = [card for card in cards if card.gender]
        return PracticeSession.start(cards, size=size)
