from sqlalchemy import select

from models.user import User
from repositories.base import Repository


class UserRepository(Repository):
    def get_by_email(self, email: str) -> User | None:
        return self._execute(select(User).where(User.email == email)).scalar_one_or_none()

    def get_by_id(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def create(self, *, email: str, password_hash: str) -> User:
        user = User(email=email, password_hash=password_hash)
        self.db.add(user)
        self._commit(conflict_message="Email already registered")
        self.db.refresh(user)
        return user
