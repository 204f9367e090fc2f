from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from core import errors
from core.database import get_db
from repositories.language_repo import LanguageRepository
from routers.auth import UserSession, get_current_session
from schemas.language import LanguageCreateIn, LanguageOut

router = APIRouter(prefix="/languages", tags=["languages"])


@router.get("", response_model=list[LanguageOut])
async def list_languages(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    languages = LanguageRepository(db).list_languages(session.user_id)
    return [LanguageOut.model_validate(lang, from_attributes=True) for lang in languages]


@router.post("", response_model=LanguageOut, status_code=201)
async def add_language(
    data: LanguageCreateIn,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    language = LanguageRepository(db).insert_language(
        user_id=session.user_id,
        language_name=data.language_name,
        iso_code=data.iso_code,
    )
    return LanguageOut.model_validate(language, from_attributes=True)


@router.get("/{iso_code}", response_model=LanguageOut)
async def get_language_by_slug(
    iso_code: str,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    language = LanguageRepository(db).get_by_iso(user_id=session.user_id, iso_code=iso_code)
    if language is None:
        raise errors.NotFoundError("Language not found")
    return LanguageOut.model_validate(language, from_attributes=True)


@router.delete("/{language_id}", status_code=204)
async def delete_language(
    language_id: int,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    LanguageRepository(db).delete_language(language_id, user_id=session.user_id)
    return Response(status_code=204)
