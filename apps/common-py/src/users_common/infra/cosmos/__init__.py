"""Cosmos DB infrastructure."""

from users_common.infra.cosmos.cosmos_base import BaseCosmosClient, connect_container

__all__ = ["BaseCosmosClient", "connect_container"]
