"""In-memory user repository for local development and tests."""

import logging
import threading

from users_common.errors import EmailAlreadyInUseError, NotFoundError
from users_common.models.user import UserEntity
from users_common.repositories.user_repository import UserRepository, non_empty_fields

logger = logging.getLogger(__name__)


class InMemoryUserRepository(UserRepository):
    """Dictionary-backed user storage.

    Emails are unique across records, like the unique key on the Cosmos container.
    """

    def __init__(self) -> None:
        self._users: dict[str, UserEntity] = {}
        self._lock = threading.Lock()

    def _email_owner(self, email: str) -> str | None:
        for user in self._users.values():
            if user.email == email:
                return user.id
        return None

    def create(self, user: UserEntity) -> None:
        with self._lock:
            if self._email_owner(user.email) is not None:
                raise EmailAlreadyInUseError()
            self._users[user.id] = user.model_copy()
        logger.info("Created user %s", user.id)

    def get_by_id(self, user_id: str) -> UserEntity:
        with self._lock:
            user = self._users.get(user_id)
        if user is None:
            raise NotFoundError()
        return user.model_copy()

    def get_all(self) -> list[UserEntity]:
        with self._lock:
            return [user.model_copy() for user in self._users.values()]

    def check_email_in_use(self, email: str) -> bool:
        with self._lock:
            return self._email_owner(email) is not None

    def update_by_id(self, user_id: str, fields: dict[str, str]) -> UserEntity:
        updates = non_empty_fields({k: fields.get(k) for k in ("name", "email", "password")})
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                raise NotFoundError()
            if "email" in updates and self._email_owner(updates["email"]) not in (None, user_id):
                raise EmailAlreadyInUseError()
            updated = user.model_copy(update=updates)
            self._users[user_id] = updated
        if updates:
            logger.info("Updated fields %s of user %s", sorted(updates), user_id)
        return updated.model_copy()

    def delete_by_id(self, user_id: str) -> None:
        with self._lock:
            if self._users.pop(user_id, None) is None:
                raise NotFoundError()
        logger.info("Deleted user %s", user_id)
