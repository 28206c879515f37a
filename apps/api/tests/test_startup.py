"""Tests for application wiring: storage selection, Cosmos initialization and CORS."""

import asyncio
from unittest.mock import patch

import pytest

from users_api.config import Settings
from users_api.middleware import get_allowed_origins, get_cors_headers
from users_api.services import build_user_repository, build_user_service
from users_api.services.cosmos_db_init import (
    USERS_UNIQUE_KEY_POLICY,
    CosmosDbInitializer,
    initialize_cosmos_db,
)
from users_common.repositories import CosmosUserRepository, InMemoryUserRepository

pytestmark = pytest.mark.unit

ENDPOINT = "https://users.documents.azure.com:443/"


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestBuildUserRepository:
    def test_memory_backend(self):
        repository = build_user_repository(_settings(user_store_backend="memory"))

        assert isinstance(repository, InMemoryUserRepository)

    def test_cosmos_backend_requires_endpoint(self):
        with pytest.raises(ValueError, match="AZURE_COSMOSDB_ENDPOINT"):
            build_user_repository(_settings(user_store_backend="cosmos", azure_cosmosdb_endpoint=None))

    def test_cosmos_backend_uses_configured_container(self):
        settings = _settings(
            azure_cosmosdb_endpoint=ENDPOINT,
            azure_cosmosdb_key="key",
            database_name="Company",
            cosmos_users_container="User",
            cosmos_users_partition="people",
        )

        with patch("users_common.infra.cosmos.cosmos_base.CosmosClient") as client_cls:
            repository = build_user_repository(settings)

        client_cls.assert_called_once_with(url=ENDPOINT, credential="key")
        client_cls.return_value.get_database_client.assert_called_once_with("Company")
        database = client_cls.return_value.get_database_client.return_value
        database.get_container_client.assert_called_once_with("User")
        assert isinstance(repository, CosmosUserRepository)
        assert repository.partition_key == "people"

    def test_cosmos_backend_without_key_uses_managed_identity(self):
        settings = _settings(azure_cosmosdb_endpoint=ENDPOINT, azure_cosmosdb_key=None)

        with (
            patch("users_common.infra.cosmos.cosmos_base.CosmosClient") as client_cls,
            patch("users_common.infra.cosmos.cosmos_base.DefaultAzureCredential") as credential_cls,
        ):
            build_user_repository(settings)

        client_cls.assert_called_once_with(url=ENDPOINT, credential=credential_cls.return_value)

    def test_service_uses_configured_bcrypt_cost(self):
        service = build_user_service(_settings(user_store_backend="memory", bcrypt_rounds=5))

        assert service.bcrypt_rounds == 5


class TestCosmosDbInitializer:
    def test_creates_users_container_with_unique_email(self):
        settings = _settings(azure_cosmosdb_endpoint=ENDPOINT, azure_cosmosdb_key="key")

        with patch("users_api.services.cosmos_db_init.CosmosClient") as client_cls:
            CosmosDbInitializer(settings).initialize()

        client = client_cls.return_value
        client.create_database_if_not_exists.assert_called_once_with(id="Company")
        database = client.create_database_if_not_exists.return_value
        kwargs = database.create_container_if_not_exists.call_args.kwargs
        assert kwargs["id"] == "User"
        assert kwargs["unique_key_policy"] == USERS_UNIQUE_KEY_POLICY
        assert "offer_throughput" not in kwargs

    def test_emulator_gets_provisioned_throughput(self):
        settings = _settings(azure_cosmosdb_endpoint="https://localhost:8081/", azure_cosmosdb_key="key")

        with patch("users_api.services.cosmos_db_init.CosmosClient") as client_cls:
            CosmosDbInitializer(settings).initialize()

        database = client_cls.return_value.create_database_if_not_exists.return_value
        assert database.create_container_if_not_exists.call_args.kwargs["offer_throughput"] == 400

    def test_skips_without_endpoint(self):
        with patch("users_api.services.cosmos_db_init.CosmosClient") as client_cls:
            CosmosDbInitializer(_settings(azure_cosmosdb_endpoint=None)).initialize()

        client_cls.assert_not_called()

    def test_failure_is_tolerated_in_development(self):
        settings = _settings(azure_cosmosdb_endpoint=ENDPOINT, azure_cosmosdb_key="key", environment="development")

        with patch("users_api.services.cosmos_db_init.CosmosClient", side_effect=RuntimeError("down")):
            asyncio.run(initialize_cosmos_db(settings))

    def test_failure_aborts_startup_in_production(self):
        settings = _settings(azure_cosmosdb_endpoint=ENDPOINT, azure_cosmosdb_key="key", environment="production")

        with patch("users_api.services.cosmos_db_init.CosmosClient", side_effect=RuntimeError("down")):
            with pytest.raises(RuntimeError):
                asyncio.run(initialize_cosmos_db(settings))


class TestCors:
    def test_ui_url_allowed_over_both_schemes(self):
        origins = get_allowed_origins("https://users.example.org/", environment="production")

        assert origins == ["https://users.example.org", "http://users.example.org"]

    def test_dev_origins_only_in_development(self):
        assert "http://localhost:3000" in get_allowed_origins(None, environment="development")
        assert get_allowed_origins(None, environment="production") == []

    def test_headers_only_for_allowed_origin(self):
        headers = get_cors_headers("http://localhost:5173", ui_url=None, environment="dev")

        assert headers["Access-Control-Allow-Origin"] == "http://localhost:5173"
        assert get_cors_headers("https://evil.example.org", ui_url=None, environment="dev") == {}
        assert get_cors_headers(None) == {}


def test_initializer_holds_no_client_until_connected():
    initializer = CosmosDbInitializer(_settings())

    assert initializer.client is None
    assert initializer.database is None
    assert isinstance(initializer.settings, Settings)
