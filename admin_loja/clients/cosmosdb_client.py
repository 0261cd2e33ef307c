"""Azure Cosmos DB client for the catalog collections."""

import logging
import uuid
from typing import Any, Iterable, Optional

from azure.core.exceptions import AzureError
from azure.cosmos.aio import CosmosClient
from azure.cosmos.aio._container import ContainerProxy
from azure.cosmos.aio._database import DatabaseProxy
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from admin_loja.clients.errors import PersistenceError

logger = logging.getLogger(__name__)

CATALOG_COLLECTIONS = ("produtos", "categorias", "banners")

# Cosmos adds these to every stored item
SYSTEM_FIELDS = ("_rid", "_self", "_etag", "_attachments", "_ts")


def _strip_system_fields(item: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in item.items() if key not in SYSTEM_FIELDS}


class CosmosDBClient:
    """Async Cosmos DB client with connection management.

    Uses the NoSQL API with one container per collection, partitioned by id.
    Supports async context manager pattern for proper resource cleanup.
    """

    def __init__(
        self,
        endpoint: str,
        key: str,
        database_name: str,
        collections: Iterable[str] = CATALOG_COLLECTIONS,
        partition_key_path: str = "/id",
    ):
        """Initialize the Cosmos DB client.

        Args:
            endpoint: Cosmos DB account endpoint URL
            key: Cosmos DB account key
            database_name: Name of the database to use
            collections: Container names, one per entity collection
            partition_key_path: Path to the partition key field (default: /id)
        """
        self._endpoint = endpoint
        self._key = key
        self._database_name = database_name
        self._collections = tuple(collections)
        self._partition_key_path = partition_key_path

        self._client: Optional[CosmosClient] = None
        self._database: Optional[DatabaseProxy] = None
        self._containers: dict[str, ContainerProxy] = {}

    async def connect(self) -> None:
        """Establish connection and ensure database/containers exist."""
        self._client = CosmosClient(url=self._endpoint, credential=self._key)
        await self._client.__aenter__()

        # Get or create database
        try:
            self._database = self._client.get_database_client(self._database_name)
            # Verify database exists by reading it
            await self._database.read()
        except CosmosResourceNotFoundError:
            self._database = await self._client.create_database(self._database_name)

        for collection in self._collections:
            try:
                container = self._database.get_container_client(collection)
                await container.read()
            except CosmosResourceNotFoundError:
                container = await self._database.create_container(
                    id=collection,
                    partition_key={"paths": [self._partition_key_path], "kind": "Hash"},
                )
            self._containers[collection] = container

        logger.info(
            f"Connected to Cosmos DB database '{self._database_name}' "
            f"({', '.join(self._collections)})"
        )

    async def close(self) -> None:
        """Close the Cosmos DB connection."""
        if self._client:
            await self._client.close()
            self._client = None
            self._database = None
            self._containers = {}

    async def __aenter__(self) -> "CosmosDBClient":
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        """Async context manager exit with cleanup."""
        await self.close()
        return False

    def _container(self, collection: str) -> ContainerProxy:
        if self._client is None:
            raise RuntimeError("CosmosDB client not connected. Call connect() first.")
        try:
            return self._containers[collection]
        except KeyError:
            raise PersistenceError(f"Unknown collection: {collection}") from None

    async def list_items(
        self,
        collection: str,
        order_by: str,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        """List every item of a collection ordered by one field.

        Args:
            collection: Container name
            order_by: Document field to order by
            descending: Sort direction

        Returns:
            List of items without Cosmos system fields.

        Raises:
            PersistenceError: If the query fails.
        """
        container = self._container(collection)
        direction = "DESC" if descending else "ASC"
        query = f"SELECT * FROM c ORDER BY c.{order_by} {direction}"

        try:
            return [_strip_system_fields(item) async for item in container.query_items(query=query)]
        except AzureError as e:
            raise PersistenceError(f"Failed to list {collection}: {e}") from e

    async def read_item(self, collection: str, item_id: str) -> Optional[dict[str, Any]]:
        """Read a single item by id.

        Returns:
            The item data, or None if it does not exist.

        Raises:
            PersistenceError: If the read fails for another reason.
        """
        container = self._container(collection)
        try:
            result = await container.read_item(item=item_id, partition_key=item_id)
        except CosmosResourceNotFoundError:
            return None
        except AzureError as e:
            raise PersistenceError(f"Failed to read {collection}/{item_id}: {e}") from e
        return _strip_system_fields(dict(result))

    async def create_item(self, collection: str, body: dict[str, Any]) -> str:
        """Create an item with a generated id.

        Args:
            collection: Container name
            body: Item fields (any 'id' is replaced)

        Returns:
            The generated id.

        Raises:
            PersistenceError: If the create fails.
        """
        container = self._container(collection)
        item_id = str(uuid.uuid4())

        try:
            await container.create_item(body={**body, "id": item_id})
        except AzureError as e:
            raise PersistenceError(f"Failed to create item in {collection}: {e}") from e

        logger.debug(f"Created {collection}/{item_id}")
        return item_id

    async def patch_item(self, collection: str, item_id: str, fields: dict[str, Any]) -> None:
        """Replace the given top-level fields of an existing item.

        Raises:
            PersistenceError: If the item does not exist or the patch fails.
        """
        if not fields:
            return

        container = self._container(collection)
        operations = [
            {"op": "set", "path": f"/{name}", "value": value}
            for name, value in fields.items()
        ]

        try:
            await container.patch_item(
                item=item_id,
                partition_key=item_id,
                patch_operations=operations,
            )
        except AzureError as e:
            raise PersistenceError(f"Failed to update {collection}/{item_id}: {e}") from e

    async def delete_item(self, collection: str, item_id: str) -> None:
        """Delete an item by id. Deleting a missing item is a no-op.

        Raises:
            PersistenceError: If the delete fails.
        """
        container = self._container(collection)
        try:
            await container.delete_item(item=item_id, partition_key=item_id)
        except CosmosResourceNotFoundError:
            logger.debug(f"Delete of missing item {collection}/{item_id} ignored")
        except AzureError as e:
            raise PersistenceError(f"Failed to delete {collection}/{item_id}: {e}") from e
