from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.database import get_db
from routers.auth import UserSession, get_current_session
from schemas.practice import CardOut, GameDeckOut, RecallCheckIn, RecallCheckOut
from services.practice import GAME_LENGTH, PracticeService, check_recall

router = APIRouter(prefix="/games", tags=["games"])


@router.get("/{game}", response_model=GameDeckOut)
async def get_game_deck(
    game: str,
    language_id: int | None = Query(None),
    size: int = Query(GAME_LENGTH, ge=1, le=50),
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    practice = PracticeService(db).deck(game, user_id=session.user_id, language_id=language_id, size=size)
    return GameDeckOut(
        game=game,
        total=len(practice.cards),
        cards=[CardOut(**vars(card)) for card in practice.cards],
    )


@router.post("/quick-recall/check", response_model=RecallCheckOut)
async def check_quick_recall(
    data: RecallCheckIn,
    session: UserSession = Depends(get_current_session),
):
    return RecallCheckOut(correct=check_recall(data.expected, data.answer), expected=data.expected)
