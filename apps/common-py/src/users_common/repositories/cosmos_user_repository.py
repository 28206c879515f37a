"""User repository backed by a Cosmos DB container."""

import logging

from azure.cosmos import ContainerProxy
from azure.cosmos.exceptions import CosmosResourceExistsError
from pydantic import ValidationError

from users_common.errors import EmailAlreadyInUseError, NotFoundError, ServerError
from users_common.infra.cosmos.cosmos_base import BaseCosmosClient, connect_container
from users_common.models.user import UserEntity
from users_common.repositories.user_repository import UserRepository, non_empty_fields

logger = logging.getLogger(__name__)

DEFAULT_PARTITION_KEY = "users"
UPDATABLE_FIELDS = ("name", "email", "password")


class CosmosUserRepository(BaseCosmosClient[UserEntity], UserRepository):
    """Cosmos DB implementation of UserRepository.

    Every user document lives under one partition key value so that the container's
    unique key on ``/email`` covers all users.
    """

    def __init__(self, container: ContainerProxy, partition_key: str = DEFAULT_PARTITION_KEY) -> None:
        super().__init__(container=container, partition_key=partition_key, partition_key_path="/pk")

    @classmethod
    def connect(
        cls,
        cosmos_endpoint: str,
        database_name: str,
        container_name: str,
        cosmos_key: str | None = None,
        partition_key: str = DEFAULT_PARTITION_KEY,
    ) -> "CosmosUserRepository":
        """Build a repository from connection settings.

        Args:
            cosmos_endpoint: Cosmos DB endpoint URL
            database_name: Database name
            container_name: Container name for users
            cosmos_key: Cosmos DB key. If None, managed identity is used.
            partition_key: Partition key value for user documents
        """
        container = connect_container(
            cosmos_endpoint=cosmos_endpoint,
            database_name=database_name,
            container_name=container_name,
            cosmos_key=cosmos_key,
        )
        return cls(container=container, partition_key=partition_key)

    @staticmethod
    def _to_entity(item: dict) -> UserEntity:
        try:
            return UserEntity.model_validate(item)
        except ValidationError as e:
            logger.error("Malformed user document %s: %s", item.get("id"), e)
            raise ServerError() from e

    def create(self, user: UserEntity) -> None:
        try:
            self.create_item(user)
        except CosmosResourceExistsError as e:
            raise EmailAlreadyInUseError() from e
        except Exception as e:
            raise ServerError() from e

    def get_by_id(self, user_id: str) -> UserEntity:
        try:
            item = self.read_item(user_id)
        except Exception as e:
            raise ServerError() from e
        if item is None:
            raise NotFoundError()
        return self._to_entity(item)

    def get_all(self) -> list[UserEntity]:
        try:
            items = self.query_items("SELECT * FROM c")
        except Exception as e:
            raise ServerError() from e
        return [self._to_entity(item) for item in items]

    def check_email_in_use(self, email: str) -> bool:
        query = "SELECT VALUE COUNT(1) FROM c WHERE c.email = @email"
        parameters = [{"name": "@email", "value": email}]
        try:
            result = self.query_items(query, parameters)
        except Exception as e:
            raise ServerError() from e
        return bool(result and result[0])

    def update_by_id(self, user_id: str, fields: dict[str, str]) -> UserEntity:
        updates = non_empty_fields({k: fields.get(k) for k in UPDATABLE_FIELDS})
        if not updates:
            return self.get_by_id(user_id)
        try:
            item = self.patch_item(user_id, updates)
        except CosmosResourceExistsError as e:
            raise EmailAlreadyInUseError() from e
        except Exception as e:
            raise ServerError() from e
        if item is None:
            raise NotFoundError()
        return self._to_entity(item)

    def delete_by_id(self, user_id: str) -> None:
        try:
            deleted = self.delete_item(user_id)
        except Exception as e:
            raise ServerError() from e
        if not deleted:
            raise NotFoundError()
