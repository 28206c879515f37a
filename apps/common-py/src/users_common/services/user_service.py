"""User service: business rules on top of a user repository."""

import logging
import uuid
from abc import ABC, abstractmethod

from users_common.errors import BadRequestError, EmailAlreadyInUseError, NotFoundError, ServerError
from users_common.models.user import CreateUserRequest, UpdateUserRequest, User, UserEntity
from users_common.passwords import DEFAULT_ROUNDS, hash_password
from users_common.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserService(ABC):
    """Abstract interface for user service."""

    @abstractmethod
    def create(self, request: CreateUserRequest) -> User:
        """Create a user."""

    @abstractmethod
    def get_by_id(self, user_id: str) -> User:
        """Get a user by ID."""

    @abstractmethod
    def get_all(self) -> list[User]:
        """List all users."""

    @abstractmethod
    def update_by_id(self, user_id: str, request: UpdateUserRequest) -> User:
        """Update the supplied fields of a user."""

    @abstractmethod
    def delete_by_id(self, user_id: str) -> None:
        """Delete a user."""


def parse_user_id(user_id: str) -> str:
    """Validate a user identifier and return its canonical form.

    Raises:
        BadRequestError: The identifier is not a UUID
    """
    try:
        return str(uuid.UUID(user_id))
    except (ValueError, TypeError, AttributeError) as e:
        logger.info("Rejected malformed user id %r: %s", user_id, e)
        raise BadRequestError() from e


class DefaultUserService(UserService):
    """UserService that enforces email uniqueness and stores bcrypt password hashes."""

    def __init__(self, repository: UserRepository, bcrypt_rounds: int = DEFAULT_ROUNDS) -> None:
        """Initialize the service.

        Args:
            repository: Storage for user records
            bcrypt_rounds: bcrypt cost factor used for new password hashes
        """
        self.repository = repository
        self.bcrypt_rounds = bcrypt_rounds

    def _hash(self, password: str) -> str:
        try:
            return hash_password(password, rounds=self.bcrypt_rounds)
        except (ValueError, TypeError) as e:
            logger.error("Failed to hash password: %s", e)
            raise ServerError() from e

    def _ensure_email_free(self, email: str) -> None:
        if self.repository.check_email_in_use(email):
            logger.info("Email %s is already in use", email)
            raise EmailAlreadyInUseError()

    def create(self, request: CreateUserRequest) -> User:
        email = str(request.email)
        self._ensure_email_free(email)

        entity = UserEntity(
            id=str(uuid.uuid4()),
            name=request.name,
            email=email,
            password=self._hash(request.password),
        )
        self.repository.create(entity)
        logger.info("Created user %s", entity.id)
        return User.from_entity(entity)

    def get_by_id(self, user_id: str) -> User:
        entity = self.repository.get_by_id(parse_user_id(user_id))
        return User.from_entity(entity)

    def get_all(self) -> list[User]:
        entities = self.repository.get_all()
        if not entities:
            raise NotFoundError("no users exist")
        return [User.from_entity(entity) for entity in entities]

    def update_by_id(self, user_id: str, request: UpdateUserRequest) -> User:
        canonical_id = parse_user_id(user_id)
        fields = request.supplied_fields()

        if "email" in fields:
            fields["email"] = str(fields["email"])
            self._ensure_email_free(fields["email"])

        if "password" in fields:
            fields["password"] = self._hash(fields["password"])

        entity = self.repository.update_by_id(canonical_id, fields)
        logger.info("Updated user %s (fields: %s)", canonical_id, ", ".join(sorted(fields)) or "none")
        return User.from_entity(entity)

    def delete_by_id(self, user_id: str) -> None:
        canonical_id = parse_user_id(user_id)
        self.repository.delete_by_id(canonical_id)
        logger.info("Deleted user %s", canonical_id)
