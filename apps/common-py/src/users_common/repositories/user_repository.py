"""Storage interface for user records."""

from abc import ABC, abstractmethod

from users_common.models.user import UserEntity


class UserRepository(ABC):
    """Abstract interface for user storage.

    Implementations report failures with the error kinds from ``users_common.errors``:
    ``NotFoundError`` when no record matches, ``EmailAlreadyInUseError`` when the store
    rejects a duplicate email, and ``ServerError`` for any other storage fault.
    """

    @abstractmethod
    def create(self, user: UserEntity) -> None:
        """Insert a new user record."""

    @abstractmethod
    def get_by_id(self, user_id: str) -> UserEntity:
        """Get a user record by ID."""

    @abstractmethod
    def get_all(self) -> list[UserEntity]:
        """List every user record."""

    @abstractmethod
    def check_email_in_use(self, email: str) -> bool:
        """Check whether any record, the caller's own included, owns the email."""

    @abstractmethod
    def update_by_id(self, user_id: str, fields: dict[str, str]) -> UserEntity:
        """Set the supplied fields on a record and return the updated record.

        Args:
            user_id: User ID
            fields: Field name to new value. Empty values are not applied.
        """

    @abstractmethod
    def delete_by_id(self, user_id: str) -> None:
        """Delete a user record."""


def non_empty_fields(fields: dict[str, str | None]) -> dict[str, str]:
    """Drop fields whose value is None or an empty string."""
    return {k: v for k, v in fields.items() if v not in (None, "")}
