"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from users_api.main import app
from users_api.services import get_user_service
from users_common.repositories import InMemoryUserRepository
from users_common.services import DefaultUserService, UserService


@pytest.fixture
def user_service() -> UserService:
    """User service over an empty in-memory store."""
    return DefaultUserService(InMemoryUserRepository(), bcrypt_rounds=4)


@pytest.fixture
def client(user_service: UserService) -> Iterator[TestClient]:
    """Create a FastAPI test client wired to the given user service."""
    app.dependency_overrides[get_user_service] = lambda: user_service
    yield TestClient(app)
    app.dependency_overrides.clear()
