"""Cosmos DB initialization service."""

import logging

from azure.cosmos import CosmosClient, PartitionKey, exceptions
from azure.identity import DefaultAzureCredential

from users_api.config import Settings

logger = logging.getLogger(__name__)

USERS_PARTITION_KEY_PATH = "/pk"
USERS_UNIQUE_KEY_POLICY = {"uniqueKeys": [{"paths": ["/email"]}]}


class CosmosDbInitializer:
    """Create the database and users container if they don't exist."""

    def __init__(self, settings: Settings):
        """Initialize the Cosmos DB client.

        Args:
            settings: Application settings with Cosmos DB configuration
        """
        self.settings = settings
        self.client: CosmosClient | None = None
        self.database = None

    def connect(self) -> None:
        """Create connection to Cosmos DB."""
        if not self.settings.azure_cosmosdb_endpoint:
            logger.warning("Cosmos DB endpoint not configured. Skipping initialization.")
            return

        credential = self.settings.azure_cosmosdb_key or DefaultAzureCredential()
        try:
            self.client = CosmosClient(url=self.settings.azure_cosmosdb_endpoint, credential=credential)
            logger.info("Connected to Cosmos DB at %s", self.settings.azure_cosmosdb_endpoint)
        except Exception as e:
            logger.error("Failed to connect to Cosmos DB: %s", e)
            raise

    def initialize_database(self) -> None:
        """Create database if it doesn't exist."""
        if not self.client:
            return

        try:
            self.database = self.client.create_database_if_not_exists(id=self.settings.database_name)
            logger.info("Database '%s' initialized", self.settings.database_name)
        except Exception as e:
            logger.error("Failed to initialize database: %s", e)
            raise

    def initialize_users_container(self) -> None:
        """Create the users container with a unique key on email if it doesn't exist.

        Unique keys are scoped to a logical partition, so user documents share a single
        partition key value and the policy spans every user.
        """
        if not self.database:
            return

        container_name = self.settings.cosmos_users_container
        options = {
            "id": container_name,
            "partition_key": PartitionKey(path=USERS_PARTITION_KEY_PATH),
            "unique_key_policy": USERS_UNIQUE_KEY_POLICY,
        }
        # The emulator requires provisioned throughput
        if "localhost" in (self.settings.azure_cosmosdb_endpoint or "").lower():
            options["offer_throughput"] = 400

        try:
            self.database.create_container_if_not_exists(**options)
            logger.info(
                "Container '%s' initialized with partition key '%s' and unique key '/email'",
                container_name,
                USERS_PARTITION_KEY_PATH,
            )
        except exceptions.CosmosResourceExistsError:
            logger.info("Container '%s' already exists", container_name)
        except Exception as e:
            logger.error("Failed to create container '%s': %s", container_name, e)
            raise

    def initialize(self) -> None:
        """Run full initialization: connect, create database and container."""
        self.connect()
        self.initialize_database()
        self.initialize_users_container()
        logger.info("Cosmos DB initialization completed successfully")


async def initialize_cosmos_db(settings: Settings) -> None:
    """Initialize Cosmos DB during application startup.

    Args:
        settings: Application settings
    """
    initializer = CosmosDbInitializer(settings)
    try:
        initializer.initialize()
    except Exception as e:
        logger.error("Failed to initialize Cosmos DB: %s", e)
        if settings.environment == "production":
            raise
        logger.warning("Continuing without Cosmos DB initialization (development mode)")
