from sqlalchemy import select

from core import errors
from models.profile import Profile
from repositories.base import Repository


class ProfileRepository(Repository):
    def get_by_user(self, user_id: int) -> Profile | None:
        return self._execute(select(Profile).where(Profile.user_id == user_id)).scalar_one_or_none()

    def get_by_username(self, username: str) -> Profile | None:
        return self._execute(select(Profile).where(Profile.username == username)).scalar_one_or_none()

    def create(self, *, user_id: int, username: str, native_language: str = "English") -> Profile:
        profile = Profile(user_id=user_id, username=username, native_language=native_language)
        self.db.add(profile)
        self._commit(conflict_message="Username already taken")
        self.db.refresh(profile)
        return profile

    def update(self, user_id: int, **fields) -> Profile:
        profile = self.get_by_user(user_id)
        if profile is None:
            raise errors.NotFoundError("Profile not found")
        if "username" in fields and fields["username"] != profile.username:
            other = self.get_by_username(fields["username"])
            if other is not None:
                raise errors.ConflictError("Username already taken")
        for key, value in fields.items():
            setattr(profile, key, value)
        self._commit(conflict_message="Username already taken")
        self.db.refresh(profile)
        return profile
