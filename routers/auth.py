from dataclasses import dataclass
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from authx import AuthX, AuthXConfig, TokenPayload
from core.config import settings
from core.database import get_db
from models.profile import Profile
from repositories.profile_repo import ProfileRepository
from schemas.auth import LoginIn, RegisterIn, UserOut
from services.auth_services import AuthService
router = APIRouter(prefix="/user", tags=["user"])

_cookie_samesite = settings.AUTH_COOKIE_SAMESITE.lower() if settings.AUTH_COOKIE_SAMESITE else None
_cookie_domain = settings.AUTH_COOKIE_DOMAIN or None

config = AuthXConfig(
    JWT_SECRET_KEY=settings.SECRET_KEY,
    JWT_ALGORITHM=settings.JWT_ALG,
    JWT_ACCESS_TOKEN_EXPIRES=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    JWT_TOKEN_LOCATION=settings.token_locations,
    JWT_ACCESS_COOKIE_NAME=settings.AUTH_COOKIE_NAME,
    JWT_COOKIE_SAMESITE=_cookie_samesite or "lax",
    JWT_COOKIE_SECURE=settings.AUTH_COOKIE_SECURE,
    JWT_COOKIE_DOMAIN=_cookie_domain,
    JWT_COOKIE_CSRF_PROTECT=settings.AUTH_COOKIE_CSRF_PROTECT,
)

security = AuthX(config=config)


@dataclass
class UserSession:
    """Identity resolved for one request; every owner-scoped call takes user_id from here."""

    user_id: int
    profile: Profile

    @property
    def native_language(self) -> str:
        return self.profile.native_language or "English"


def get_current_session(
    payload: TokenPayload = Depends(security.access_token_required),
    db: Session = Depends(get_db),
) -> UserSession:
    try:
        user_id = int(payload.sub)
    except (TypeError, ValueError) as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid subject in token") from exc

    profile = ProfileRepository(db).get_by_user(user_id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not authenticated")
    return UserSession(user_id=user_id, profile=profile)


@router.post("/register", response_model=UserOut, status_code=201)
async def post_reg(data: RegisterIn, db: Session = Depends(get_db)):
    svc = AuthService(db)
    user = svc.register(
        email=data.email,
        username=data.username,
        password=data.password,
        native_language=data.native_language,
    )
    return UserOut(id=user.id, email=user.email, username=data.username)


@router.post("/login")
async def post_login(response: Response, data: LoginIn, db: Session = Depends(get_db)):
    svc = AuthService(db)
    user = svc.login(email=data.email, password=data.password)

    access_token = security.create_access_token(uid=str(user.id))
    if "cookies" in settings.token_locations:
        security.set_access_cookies(access_token, response)

    return {"status": "ok", "access_token": access_token, "token_type": "bearer"}


@router.get("/me")
async def me(session: UserSession = Depends(get_current_session)):
    return {"user_id": session.user_id, "username": session.profile.username}


@router.post("/logout")
async def logout(response: Response):
    security.unset_cookies(response)
    response.delete_cookie(
        settings.AUTH_COOKIE_NAME,
        path="/",
        domain=_cookie_domain,
        httponly=True,
        samesite=_cookie_samesite or "lax",
        secure=settings.AUTH_COOKIE_SECURE,
    )
    return {"ok": True}
