import logging

from sqlalchemy import delete, func, select

from core import errors
from core.text import normalize_tag, normalize_tags, optional_text, require_text
from models.entry import Word
from models.language import Language
from repositories.base import Repository
from services.ordering import DEFAULT_SORT, SortOrder, order_by_clauses

logger = logging.getLogger(__name__)

UNSET = object()


class EntryRepository(Repository):
    """Owner-scoped CRUD over user_words or user_translations."""

    def __init__(self, db, model=Word):
        super().__init__(db)
        self.model = model

    @property
    def has_language(self) -> bool:
        return hasattr(self.model, "language_id")

    def _scope(self, stmt, user_id: int, language_id: int | None = None):
        stmt = stmt.where(self.model.user_id == user_id)
        if self.has_language and language_id is not None:
            stmt = stmt.where(self.model.language_id == language_id)
        return stmt

    def conflict_message(self, word: str) -> str:
        if self.has_language:
            return f'You\'ve already added "{word}" for this language.'
        return f'You\'ve already added "{word}".'

    def _find_duplicate(self, *, user_id: int, word: str, language_id: int | None, exclude_id: int | None = None):
        stmt = self._scope(select(self.model.id), user_id, language_id).where(self.model.word == word)
        if exclude_id is not None:
            stmt = stmt.where(self.model.id != exclude_id)
        return self._execute(stmt.limit(1)).scalar_one_or_none()

    def _ensure_language(self, *, user_id: int, language_id: int | None) -> None:
        if language_id is None:
            raise errors.ValidationError("Language is required.", details={"field": "language_id"})
        stmt = select(Language.id).where(Language.id == language_id, Language.user_id == user_id)
        if self._execute(stmt).scalar_one_or_none() is None:
            raise errors.NotFoundError("Language not found")

    def get_entry(self, entry_id: int, user_id: int):
        stmt = select(self.model).where(self.model.id == entry_id, self.model.user_id == user_id)
        return self._execute(stmt).scalar_one_or_none()

    def require_entry(self, entry_id: int, user_id: int):
        entity = self.get_entry(entry_id, user_id)
        if entity is None:
            raise errors.NotFoundError("Entry not found")
        return entity

    def get_by_word(self, *, user_id: int, word: str, language_id: int | None = None):
        stmt = self._scope(select(self.model), user_id, language_id).where(self.model.word == word)
        return self._execute(stmt.limit(1)).scalar_one_or_none()

    def insert_entry(
        self,
        *,
        user_id: int,
        word: str,
        translation: str,
        language_id: int | None = None,
        notes: str | None = None,
        color: str | None = None,
        image_url: str | None = None,
        ai_data: dict | None = None,
        tags=None,
    ):
        word = require_text(word, "word")
        translation = require_text(translation, "translation")

        fields = dict(
            user_id=user_id,
            word=word,
            translation=translation,
            notes=optional_text(notes),
            color=optional_text(color),
            image_url=optional_text(image_url),
            ai_data=ai_data,
            tags=normalize_tags(tags),
        )
        if self.has_language:
            self._ensure_language(user_id=user_id, language_id=language_id)
            fields["language_id"] = language_id

        if self._find_duplicate(user_id=user_id, word=word, language_id=language_id):
            logger.warning("Duplicate %s entry %r for user %s", self.model.kind, word, user_id)
            raise errors.ConflictError(self.conflict_message(word))

        entity = self.model(**fields)
        self.db.add(entity)
        self._commit(conflict_message=self.conflict_message(word))
        self.db.refresh(entity)
        logger.info("Inserted %s entry %s for user %s", self.model.kind, entity.id, user_id)
        return entity

    def update_entry(
        self,
        entry_id: int,
        *,
        user_id: int,
        word: str,
        translation: str,
        notes: str | None = None,
        color: str | None = None,
        image_url: str | None = None,
        tags=UNSET,
    ):
        entity = self.require_entry(entry_id, user_id)
        word = require_text(word, "word")
        translation = require_text(translation, "translation")

        if entity.word != word:
            language_id = entity.language_id if self.has_language else None
            if self._find_duplicate(user_id=user_id, word=word, language_id=language_id, exclude_id=entry_id):
                raise errors.ConflictError(self.conflict_message(word))

        entity.word = word
        entity.translation = translation
        entity.notes = optional_text(notes)
        entity.color = optional_text(color)
        entity.image_url = optional_text(image_url)
        if tags is not UNSET:
            entity.tags = normalize_tags(tags)
        self._commit(conflict_message=self.conflict_message(word))
        self.db.refresh(entity)
        return entity

    def set_ai_data(self, entry_id: int, *, user_id: int, ai_data: dict | None):
        entity = self.require_entry(entry_id, user_id)
        entity.ai_data = ai_data
        self._commit()
        self.db.refresh(entity)
        return entity

    def set_tags(self, entry_id: int, *, user_id: int, tags):
        entity = self.require_entry(entry_id, user_id)
        entity.tags = normalize_tags(tags)
        self._commit()
        self.db.refresh(entity)
        return entity

    def delete_entry(self, entry_id: int, *, user_id: int) -> None:
        stmt = delete(self.model).where(self.model.id == entry_id, self.model.user_id == user_id)
        result = self._execute(stmt)
        self._commit()
        if result.rowcount == 0:
            logger.warning("Delete of %s entry %s for user %s affected no rows", self.model.kind, entry_id, user_id)
            raise errors.StorageError("Entry could not be deleted: it does not exist.", status_code=404)
        logger.info("Deleted %s entry %s for user %s", self.model.kind, entry_id, user_id)

    def list_entries(
        self,
        user_id: int,
        *,
        language_id: int | None = None,
        order: SortOrder = DEFAULT_SORT,
        tag: str | None = None,
    ) -> list:
        stmt = self._scope(select(self.model), user_id, language_id).order_by(*order_by_clauses(self.model, order))
        entries = list(self._execute(stmt).scalars())
        tag = normalize_tag(tag or "")
        if tag:
            entries = [entry for entry in entries if tag in (entry.tags or [])]
        return entries

    def count_entries(self, user_id: int, *, language_id: int | None = None) -> int:
        stmt = self._scope(select(func.count(self.model.id)), user_id, language_id)
        return self._execute(stmt).scalar_one()

    def slug_of(self, entity) -> str:
        return entity.word if self.has_language else str(entity.id)

    def fetch_random_slug_excluding(
        self,
        user_id: int,
        current_key: str | None,
        *,
        language_id: int | None = None,
    ) -> str | None:
        if self.count_entries(user_id, language_id=language_id) < 2:
            return None

        key_column = self.model.word if self.has_language else self.model.id
        stmt = self._scope(select(key_column), user_id, language_id)
        if current_key is not None:
            if self.has_language:
                stmt = stmt.where(key_column != current_key)
            else:
                try:
                    stmt = stmt.where(key_column != int(current_key))
                except ValueError:
                    pass
        key = self._execute(stmt.order_by(func.random()).limit(1)).scalar_one_or_none()
        return None if key is None else str(key)
