from sqlalchemy.orm import Session

from core import errors
from models.profile import Profile
from repositories.profile_repo import ProfileRepository
from services.ordering import SORT_VALUES


class ProfileService:
    def __init__(self, db: Session):
        self.repo = ProfileRepository(db)

    def get(self, user_id: int) -> Profile:
        profile = self.repo.get_by_user(user_id)
        if profile is None:
            raise errors.NotFoundError("Profile not found")
        return profile

    def update_settings(
        self,
        *,
        user_id: int,
        native_language: str,
        theme: str,
        username: str,
        word_sort_preference: str,
    ) -> Profile:
        return self.repo.update(
            user_id,
            native_language=native_language,
            theme=theme,
            username=username,
            word_sort_preference=word_sort_preference,
        )

    def update_sort_preference(self, *, user_id: int, sort: str) -> Profile:
        if sort not in SORT_VALUES:
            raise errors.ValidationError("Invalid sort preference value", details={"allowed": list(SORT_VALUES)})
        return self.repo.update(user_id, word_sort_preference=sort)
