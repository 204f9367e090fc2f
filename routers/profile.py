from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.database import get_db
from routers.auth import UserSession, get_current_session
from schemas.profile import SortPreferenceIn, UserSettingsIn, UserSettingsOut
from services.profile_services import ProfileService

router = APIRouter(prefix="/user/settings", tags=["user"])


@router.get("", response_model=UserSettingsOut)
async def get_settings(session: UserSession = Depends(get_current_session)):
    return UserSettingsOut.model_validate(session.profile, from_attributes=True)


@router.put("", response_model=UserSettingsOut)
async def update_settings(
    data: UserSettingsIn,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    svc = ProfileService(db)
    profile = svc.update_settings(
        user_id=session.user_id,
        native_language=data.native_language,
        theme=data.theme,
        username=data.username,
        word_sort_preference=data.word_sort_preference.value,
    )
    return UserSettingsOut.model_validate(profile, from_attributes=True)


@router.put("/sort", response_model=UserSettingsOut)
async def update_sort_preference(
    data: SortPreferenceIn,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    svc = ProfileService(db)
    profile = svc.update_sort_preference(user_id=session.user_id, sort=data.sort)
    return UserSettingsOut.model_validate(profile, from_attributes=True)
