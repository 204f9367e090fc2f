from __future__ import annotations

import random

import pytest

from core import errors
from models.entry import Word
from repositories.entry_repo import EntryRepository
from services.practice import GAME_LENGTH, Card, PracticeService, PracticeSession, check_recall


def _cards(n):
    return [Card(id=i, word=f"w{i}", translation=f"t{i}") for i in range(n)]


def test_session_samples_at_most_game_length():
    session = PracticeSession.start(_cards(25), rng=random.Random(3))

    assert len(session.cards) == GAME_LENGTH
    assert len({card.id for card in session.cards}) == GAME_LENGTH


def test_session_walks_cards_and_scores():
    session = PracticeSession.start(_cards(3), rng=random.Random(1))
    first = session.current

    second = session.answer(True)
    assert second is not first
    session.answer(False)
    assert session.answer(True) is None

    assert session.finished
    assert session.score() == {"correct": 2, "attempted": 3, "total": 3}
    with pytest.raises(errors.ValidationError):
        session.answer(True)


def test_empty_session_is_finished():
    session = PracticeSession.start([])
    assert session.finished
    assert session.current is None


@pytest.mark.parametrize(
    "expected,answer,ok",
    [
        ("der Hund", "Der Hund", True),
        ("der Hund", " der  hund! ", True),
        ("Straße", "strasse", False),
        ("Hund", "", False),
    ],
)
def test_check_recall(expected, answer, ok):
    assert check_recall(expected, answer) is ok


def test_article_guesser_only_uses_gendered_words(db, german):
    user, language = german
    repo = EntryRepository(db, Word)
    repo.insert_entry(user_id=user.id, language_id=language.id, word="Hund", translation="dog", ai_data={"gender": "der"})
    repo.insert_entry(user_id=user.id, language_id=language.id, word="gehen", translation="to go", ai_data={"gender": None})
    repo.insert_entry(user_id=user.id, language_id=language.id, word="Katze", translation="cat")

    session = PracticeService(db).deck("article-guesser", user_id=user.id)
    assert [(card.word, card.gender) for card in session.cards] == [("Hund", "Masculine")]

    memory = PracticeService(db).deck("memory-cards", user_id=user.id, language_id=language.id)
    assert sorted(card.word for card in memory.cards) == ["Hund", "Katze", "gehen"]


def test_unknown_game(db, german):
    user, _ = german
    with pytest.raises(errors.NotFoundError):
        PracticeService(db).deck("crossword", user_id=user.id)
