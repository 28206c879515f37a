"""Generic base class for Cosmos DB container operations."""

import logging
from typing import Any

from azure.cosmos import ContainerProxy, CosmosClient
from azure.cosmos.exceptions import CosmosResourceExistsError, CosmosResourceNotFoundError
from azure.identity import DefaultAzureCredential
from pydantic import BaseModel

logger = logging.getLogger(__name__)

COSMOS_SYSTEM_FIELDS = frozenset({"_rid", "_self", "_etag", "_attachments", "_ts"})


def connect_container(
    cosmos_endpoint: str,
    database_name: str,
    container_name: str,
    cosmos_key: str | None = None,
) -> ContainerProxy:
    """Open a client for a single container.

    Args:
        cosmos_endpoint: Cosmos DB endpoint URL
        database_name: Database name
        container_name: Container name
        cosmos_key: Cosmos DB key. If None, managed identity is used.

    Returns:
        Container client
    """
    if not cosmos_endpoint:
        raise ValueError("AZURE_COSMOSDB_ENDPOINT is required")

    if cosmos_key:
        client = CosmosClient(url=cosmos_endpoint, credential=cosmos_key)
    else:
        client = CosmosClient(url=cosmos_endpoint, credential=DefaultAzureCredential())

    database = client.get_database_client(database_name)
    return database.get_container_client(container_name)


class BaseCosmosClient[T: BaseModel]:
    """Infrastructure layer: item operations scoped to one logical partition of a container."""

    def __init__(self, container: ContainerProxy, partition_key: str, partition_key_path: str = "/pk") -> None:
        """Initialize the client.

        Args:
            container: Container client
            partition_key: Partition key value every item of this client lives under
            partition_key_path: Partition key path of the container (default: "/pk")
        """
        self.container = container
        self.partition_key = partition_key
        self.partition_key_path = partition_key_path

    @property
    def container_name(self) -> str:
        return getattr(self.container, "id", "<container>")

    @staticmethod
    def _strip_system_fields(item: dict[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in item.items() if k not in COSMOS_SYSTEM_FIELDS}

    def create_item(self, item: T) -> dict[str, Any]:
        """Create an item.

        Args:
            item: Pydantic model instance to create

        Returns:
            Created item as dictionary (with Cosmos system fields removed)

        Raises:
            CosmosResourceExistsError: The id or a unique key is already taken
        """
        body = item.model_dump(mode="json")
        body[self.partition_key_path.lstrip("/")] = self.partition_key
        try:
            created = self.container.create_item(body=body)
        except CosmosResourceExistsError:
            logger.warning("Conflict creating item %s in container %s", body.get("id"), self.container_name)
            raise
        except Exception as e:
            logger.error("Failed to create item in %s: %s", self.container_name, e)
            raise
        logger.info("Created item %s in container %s", created["id"], self.container_name)
        return self._strip_system_fields(created)

    def read_item(self, item_id: str) -> dict[str, Any] | None:
        """Read an item by id.

        Returns:
            Item as dictionary, or None if not found
        """
        try:
            item = self.container.read_item(item=item_id, partition_key=self.partition_key)
        except CosmosResourceNotFoundError:
            logger.debug("Item %s not found in container %s", item_id, self.container_name)
            return None
        except Exception as e:
            logger.error("Failed to read item %s from %s: %s", item_id, self.container_name, e)
            raise
        return self._strip_system_fields(item)

    def query_items(self, query: str, parameters: list[dict[str, Any]] | None = None) -> list[Any]:
        """Run a SQL query inside the client's partition.

        Args:
            query: SQL query string
            parameters: Query parameters as ``{"name": "@x", "value": ...}`` dicts

        Returns:
            Query results, with Cosmos system fields removed from documents
        """
        try:
            results = list(
                self.container.query_items(
                    query=query,
                    parameters=parameters or [],
                    partition_key=self.partition_key,
                )
            )
        except Exception as e:
            logger.error("Failed to query items from %s: %s", self.container_name, e)
            raise
        logger.debug("Queried %d results from container %s", len(results), self.container_name)
        return [self._strip_system_fields(r) if isinstance(r, dict) else r for r in results]

    def patch_item(self, item_id: str, updates: dict[str, Any]) -> dict[str, Any] | None:
        """Set the given top-level fields on an item, leaving the rest untouched.

        Args:
            item_id: Item ID
            updates: Field name to new value

        Returns:
            Updated item as dictionary, or None if not found

        Raises:
            CosmosResourceExistsError: The update would violate a unique key
        """
        operations = [{"op": "set", "path": f"/{field}", "value": value} for field, value in updates.items()]
        try:
            patched = self.container.patch_item(
                item=item_id,
                partition_key=self.partition_key,
                patch_operations=operations,
            )
        except CosmosResourceNotFoundError:
            logger.debug("Item %s not found for patch in %s", item_id, self.container_name)
            return None
        except CosmosResourceExistsError:
            logger.warning("Conflict patching item %s in container %s", item_id, self.container_name)
            raise
        except Exception as e:
            logger.error("Failed to patch item %s in %s: %s", item_id, self.container_name, e)
            raise
        logger.info("Patched fields %s of item %s in container %s", sorted(updates), item_id, self.container_name)
        return self._strip_system_fields(patched)

    def delete_item(self, item_id: str) -> bool:
        """Delete an item.

        Returns:
            True if the item was deleted, False if it did not exist
        """
        try:
            self.container.delete_item(item=item_id, partition_key=self.partition_key)
        except CosmosResourceNotFoundError:
            logger.debug("Item %s not found for deletion in %s", item_id, self.container_name)
            return False
        except Exception as e:
            logger.error("Failed to delete item %s from %s: %s", item_id, self.container_name, e)
            raise
        logger.info("Deleted item %s from container %s", item_id, self.container_name)
        return True
