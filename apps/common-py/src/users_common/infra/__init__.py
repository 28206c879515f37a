"""Infrastructure layer for external communication."""

from users_common.infra.cosmos import BaseCosmosClient, connect_container

__all__ = ["BaseCosmosClient", "connect_container"]
