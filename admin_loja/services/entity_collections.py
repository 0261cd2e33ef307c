"""Per-entity collection loaders backing the list screens.

Each loader fetches its collection on first use, exposes the items together
with loading/error state, and offers ``refresh`` and ``remove``.
"""

import logging
from dataclasses import dataclass, replace
from typing import Generic, Optional, Tuple, TypeVar

from admin_loja.clients.errors import PersistenceError
from admin_loja.models import Banner, Category, Product
from admin_loja.services.persistence_gateway import EntityRepository, PersistenceGateway

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CollectionState(Generic[T]):
    """Snapshot of a loaded collection."""

    items: Tuple[T, ...] = ()
    loading: bool = True
    error: Optional[str] = None


class EntityCollection(Generic[T]):
    """Loads one collection and keeps its latest state."""

    def __init__(
        self,
        repository: EntityRepository,
        load_error: str,
        delete_error: str,
    ):
        self._repository = repository
        self._load_error = load_error
        self._delete_error = delete_error
        self._state: CollectionState[T] = CollectionState()
        self._loaded = False

    @property
    def state(self) -> CollectionState[T]:
        return self._state

    async def ensure_loaded(self) -> CollectionState[T]:
        """Load once; later calls return the current state."""
        if not self._loaded:
            await self.refresh()
        return self._state

    async def refresh(self) -> CollectionState[T]:
        """Reload the collection. On failure the previous items are kept."""
        self._state = replace(self._state, loading=True)
        try:
            items = await self._repository.list()
        except PersistenceError:
            logger.exception(f"Failed to load {self._repository.collection}")
            self._state = replace(self._state, loading=False, error=self._load_error)
        else:
            self._state = CollectionState(items=tuple(items), loading=False, error=None)
        finally:
            self._loaded = True
        return self._state

    async def remove(self, item_id: str) -> bool:
        """Delete an item and reload. Returns False if the delete failed."""
        try:
            await self._repository.delete(item_id)
        except PersistenceError:
            logger.exception(f"Failed to delete {self._repository.collection}/{item_id}")
            self._state = replace(self._state, error=self._delete_error)
            return False

        await self.refresh()
        return True


def products_collection(gateway: PersistenceGateway) -> EntityCollection[Product]:
    return EntityCollection(
        gateway.products,
        load_error="Não foi possível carregar os produtos. Tente novamente.",
        delete_error="Erro ao deletar produto.",
    )


def categories_collection(gateway: PersistenceGateway) -> EntityCollection[Category]:
    return EntityCollection(
        gateway.categories,
        load_error="Não foi possível carregar as categorias.",
        delete_error="Erro ao deletar categoria.",
    )


def banners_collection(gateway: PersistenceGateway) -> EntityCollection[Banner]:
    return EntityCollection(
        gateway.banners,
        load_error="Não foi possível carregar os banners.",
        delete_error="Erro ao deletar banner.",
    )
