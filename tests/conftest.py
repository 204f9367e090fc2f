from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Make the app importable when running tests from the repository root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ["SECRET_KEY"] = "test-secret-key-with-enough-length"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["TOKEN_LOCATIONS"] = "headers"
os.environ["AUTH_COOKIE_CSRF_PROTECT"] = "false"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["GEMINI_API_KEY"] = ""

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import models  # noqa: E402,F401
from core.database import Base, get_db, make_engine  # noqa: E402
from main import app  # noqa: E402
from repositories.language_repo import LanguageRepository  # noqa: E402
from repositories.profile_repo import ProfileRepository  # noqa: E402
from repositories.user_repo import UserRepository  # noqa: E402
from routers.auth import security  # noqa: E402
from services.enrichment import get_text_generator  # noqa: E402


class FakeGenerator:
    """Stands in for the hosted model; returns queued texts or raises queued errors."""

    def __init__(self):
        self.responses: list = []
        self.calls: list[dict] = []

    def queue(self, *responses) -> None:
        self.responses.extend(responses)

    async def generate(self, *, system: str, prompt: str) -> str:
        self.calls.append({"system": system, "prompt": prompt})
        response = self.responses.pop(0) if self.responses else "{}"
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def engine():
    test_engine = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def client(session_factory, generator):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_text_generator] = lambda: generator
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(username: str | None = None, native_language: str = "English"):
        counter["n"] += 1
        username = username or f"learner{counter['n']}"
        user = UserRepository(db).create(email=f"{username}@example.com", password_hash="x")
        ProfileRepository(db).create(user_id=user.id, username=username, native_language=native_language)
        return user

    return _make


@pytest.fixture
def auth_headers():
    def _headers(user) -> dict[str, str]:
        token = security.create_access_token(uid=str(user.id))
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def german(db, make_user):
    """A user with a German language; returns (user, language)."""
    user = make_user()
    language = LanguageRepository(db).insert_language(user_id=user.id, language_name="German", iso_code="de")
    return user, language
