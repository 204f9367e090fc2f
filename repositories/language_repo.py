import logging

from sqlalchemy import delete, select

from core import errors
from core.text import optional_text, require_text
from models.language import Language
from repositories.base import Repository

logger = logging.getLogger(__name__)


class LanguageRepository(Repository):
    def insert_language(self, *, user_id: int, language_name: str, iso_code: str | None = None) -> Language:
        language_name = require_text(language_name, "language name")
        iso_code = optional_text(iso_code)
        if iso_code is not None:
            iso_code = iso_code.lower()

        stmt = select(Language).where(
            Language.user_id == user_id,
            Language.language_name == language_name,
        )
        if self._execute(stmt).scalar_one_or_none():
            raise errors.ConflictError(f'You\'ve already added "{language_name}".')
        if iso_code is not None and self.get_by_iso(user_id=user_id, iso_code=iso_code):
            raise errors.ConflictError(f'A language with code "{iso_code}" already exists.')

        entity = Language(user_id=user_id, language_name=language_name, iso_code=iso_code)
        self.db.add(entity)
        self._commit(conflict_message="This language already exists.")
        self.db.refresh(entity)
        logger.info("Added language %s (%s) for user %s", language_name, iso_code, user_id)
        return entity

    def list_languages(self, user_id: int) -> list[Language]:
        stmt = (
            select(Language)
            .where(Language.user_id == user_id)
            .order_by(Language.language_name.asc())
        )
        return list(self._execute(stmt).scalars())

    def get_language(self, language_id: int, user_id: int) -> Language | None:
        stmt = select(Language).where(Language.id == language_id, Language.user_id == user_id)
        return self._execute(stmt).scalar_one_or_none()

    def get_by_iso(self, *, user_id: int, iso_code: str) -> Language | None:
        stmt = select(Language).where(
            Language.user_id == user_id,
            Language.iso_code == iso_code.strip().lower(),
        )
        return self._execute(stmt).scalar_one_or_none()

    def delete_language(self, language_id: int, *, user_id: int) -> None:
        stmt = delete(Language).where(Language.id == language_id, Language.user_id == user_id)
        result = self._execute(stmt)
        self._commit()
        if result.rowcount == 0:
            raise errors.StorageError("Language could not be deleted: it does not exist.", status_code=404)
