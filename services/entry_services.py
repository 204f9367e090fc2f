from sqlalchemy.orm import Session

from core import errors
from models.entry import ENTRY_MODELS
from repositories.entry_repo import UNSET, EntryRepository
from services.ordering import SortOrder


class EntryService:
    def __init__(self, db: Session, kind: str):
        model = ENTRY_MODELS.get(kind)
        if model is None:
            raise errors.NotFoundError(f'Unknown entry kind "{kind}"')
        self.repo = EntryRepository(db, model)

    def add(self, *, user_id: int, **fields):
        return self.repo.insert_entry(user_id=user_id, **fields)

    def get(self, *, user_id: int, entry_id: int):
        return self.repo.require_entry(entry_id, user_id)

    def replace(self, *, user_id: int, entry_id: int, word: str, translation: str, notes=None, color=None, image_url=None, tags=UNSET):
        return self.repo.update_entry(
            entry_id,
            user_id=user_id,
            word=word,
            translation=translation,
            notes=notes,
            color=color,
            image_url=image_url,
            tags=tags,
        )

    def set_tags(self, *, user_id: int, entry_id: int, tags: list[str]):
        return self.repo.set_tags(entry_id, user_id=user_id, tags=tags)

    def delete(self, *, user_id: int, entry_id: int) -> None:
        self.repo.delete_entry(entry_id, user_id=user_id)

    def list(self, *, user_id: int, order: SortOrder, language_id: int | None = None, tag: str | None = None):
        return self.repo.list_entries(user_id, language_id=language_id, order=order, tag=tag)

    def random_slug(self, *, user_id: int, current: str | None, language_id: int | None = None) -> str | None:
        return self.repo.fetch_random_slug_excluding(user_id, current, language_id=language_id)
