"""
User Service — ユーザーリポジトリ

メールアドレスはユーザー間で一意。
"""

from services.common.errors import ConflictError
from services.common.store import InMemoryRepository

from .models import User


class UserRepository(InMemoryRepository[User]):
    entity_name = "user"

    def _check_unique(self, entity: User) -> None:
        if any(u.email == entity.email and u.id != entity.id for u in self._items.values()):
            raise ConflictError("user with this email already exists")
