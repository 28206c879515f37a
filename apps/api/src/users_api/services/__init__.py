"""Service initialization and dependency injection."""

import logging

from fastapi import Request

from users_api.config import Settings
from users_common.errors import ServerError
from users_common.repositories import CosmosUserRepository, InMemoryUserRepository, UserRepository
from users_common.services import DefaultUserService, UserService

logger = logging.getLogger(__name__)


def build_user_repository(settings: Settings) -> UserRepository:
    """Build the configured user storage backend.

    Args:
        settings: Application settings

    Returns:
        UserRepository instance
    """
    if settings.user_store_backend == "memory":
        logger.info("Using in-memory user store")
        return InMemoryUserRepository()

    if not settings.azure_cosmosdb_endpoint:
        raise ValueError("AZURE_COSMOSDB_ENDPOINT is required")

    repository = CosmosUserRepository.connect(
        cosmos_endpoint=settings.azure_cosmosdb_endpoint,
        database_name=settings.database_name,
        container_name=settings.cosmos_users_container,
        cosmos_key=settings.azure_cosmosdb_key,
        partition_key=settings.cosmos_users_partition,
    )
    logger.info(
        "Using Cosmos user store %s/%s",
        settings.database_name,
        settings.cosmos_users_container,
    )
    return repository


def build_user_service(settings: Settings) -> UserService:
    """Build the user service on top of the configured storage backend."""
    return DefaultUserService(build_user_repository(settings), bcrypt_rounds=settings.bcrypt_rounds)


def get_user_service(request: Request) -> UserService:
    """Get the user service built at application startup.

    Args:
        request: Incoming request

    Returns:
        UserService instance
    """
    service = getattr(request.app.state, "user_service", None)
    if service is None:
        logger.error("User service requested before application startup completed")
        raise ServerError()
    return service
