"""User storage adapters."""

from users_common.repositories.cosmos_user_repository import CosmosUserRepository
from users_common.repositories.memory_user_repository import InMemoryUserRepository
from users_common.repositories.user_repository import UserRepository

__all__ = ["CosmosUserRepository", "InMemoryUserRepository", "UserRepository"]
