"""Persistence gateway: per-collection CRUD plus asset upload/delete.

Only marshals parameters between entity dataclasses and the injected
document/asset store clients. Client failures surface as
``PersistenceError`` / ``AssetStoreError``.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Generic, List, Mapping, Optional, Protocol, Type, TypeVar

from admin_loja.models import Banner, Category, Product
from admin_loja.models.base import DocumentModel

logger = logging.getLogger(__name__)

PRODUCTS_COLLECTION = "produtos"
CATEGORIES_COLLECTION = "categorias"
BANNERS_COLLECTION = "banners"

T = TypeVar("T", bound=DocumentModel)


class DocumentStore(Protocol):
    """Document database operations used by the gateway."""

    async def list_items(self, collection: str, order_by: str, descending: bool = False) -> list[dict[str, Any]]: ...

    async def read_item(self, collection: str, item_id: str) -> Optional[dict[str, Any]]: ...

    async def create_item(self, collection: str, body: dict[str, Any]) -> str: ...

    async def patch_item(self, collection: str, item_id: str, fields: dict[str, Any]) -> None: ...

    async def delete_item(self, collection: str, item_id: str) -> None: ...


class AssetStore(Protocol):
    """Blob operations used by the gateway."""

    async def upload(self, path: str, data: bytes, content_type: str) -> str: ...

    async def delete(self, path: str) -> None: ...


class EntityRepository(Generic[T]):
    """CRUD for one collection, translating documents to entities."""

    def __init__(
        self,
        store: DocumentStore,
        collection: str,
        model: Type[T],
        order_by: str,
        descending: bool = False,
    ):
        self._store = store
        self.collection = collection
        self._model = model
        self._order_by = order_by
        self._descending = descending

    async def list(self) -> List[T]:
        documents = await self._store.list_items(
            self.collection, order_by=self._order_by, descending=self._descending
        )
        return [self._model.from_document(document) for document in documents]

    async def get(self, item_id: str) -> Optional[T]:
        document = await self._store.read_item(self.collection, item_id)
        if document is None:
            return None
        return self._model.from_document(document)

    async def create(self, entity: T) -> str:
        """Create the entity and return the generated id."""
        item_id = await self._store.create_item(self.collection, entity.to_document())
        logger.info(f"Created {self.collection}/{item_id}")
        return item_id

    async def update(self, item_id: str, changes: Mapping[str, Any]) -> None:
        """Partially update an entity. ``changes`` is keyed by attribute name."""
        fields = self._model.document_fields(changes)
        await self._store.patch_item(self.collection, item_id, fields)
        logger.info(f"Updated {self.collection}/{item_id} ({', '.join(sorted(changes))})")

    async def delete(self, item_id: str) -> None:
        await self._store.delete_item(self.collection, item_id)
        logger.info(f"Deleted {self.collection}/{item_id}")


class ProductRepository(EntityRepository[Product]):
    """Products are listed newest first and stamped with their creation time."""

    def __init__(self, store: DocumentStore):
        super().__init__(store, PRODUCTS_COLLECTION, Product, order_by="createdAt", descending=True)

    async def create(self, entity: Product) -> str:
        if entity.created_at is None:
            entity.created_at = datetime.now(timezone.utc)
        return await super().create(entity)


class PersistenceGateway:
    """Façade over the document store and the asset store."""

    def __init__(self, store: DocumentStore, assets: AssetStore):
        self._store = store
        self._assets = assets

        self.products = ProductRepository(store)
        self.categories: EntityRepository[Category] = EntityRepository(
            store, CATEGORIES_COLLECTION, Category, order_by="ordem"
        )
        self.banners: EntityRepository[Banner] = EntityRepository(
            store, BANNERS_COLLECTION, Banner, order_by="ordem"
        )

    async def upload_asset(self, path: str, data: bytes, content_type: str) -> str:
        """Upload bytes and return the durable URL."""
        return await self._assets.upload(path, data, content_type)

    async def delete_asset(self, path: str) -> None:
        await self._assets.delete(path)
