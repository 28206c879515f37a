"""Pytest configuration and fixtures for users_common tests."""

from unittest.mock import MagicMock

import pytest

from users_common.models.user import UserEntity
from users_common.repositories import CosmosUserRepository, InMemoryUserRepository
from users_common.services import DefaultUserService

# Lowest bcrypt cost, keeps hashing fast in tests
TEST_BCRYPT_ROUNDS = 4


@pytest.fixture
def repository() -> InMemoryUserRepository:
    """Create an empty in-memory user repository."""
    return InMemoryUserRepository()


@pytest.fixture
def service(repository: InMemoryUserRepository) -> DefaultUserService:
    """Create a user service over the in-memory repository."""
    return DefaultUserService(repository, bcrypt_rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def container() -> MagicMock:
    """Create a stand-in for a Cosmos container client."""
    container = MagicMock()
    container.id = "User"
    return container


@pytest.fixture
def cosmos_repository(container: MagicMock) -> CosmosUserRepository:
    """Create a Cosmos user repository over the mocked container."""
    return CosmosUserRepository(container=container, partition_key="users")


@pytest.fixture
def entity() -> UserEntity:
    """A stored user record."""
    return UserEntity(
        id="0f8b5a9e-3c1d-4b7a-9a52-6f0c2d1e4b33",
        name="Batuhan",
        email="batuhan@site.com",
        password="$2b$04$hashhashhashhashhashhu",
    )
