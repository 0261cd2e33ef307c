"""Services module."""

from admin_loja.services.auth_service import TOKEN_COOKIE, AuthService
from admin_loja.services.description_service import (
    DescriptionGenerator,
    DescriptionResult,
    fallback_description,
)
from admin_loja.services.entity_collections import (
    CollectionState,
    EntityCollection,
    banners_collection,
    categories_collection,
    products_collection,
)
from admin_loja.services.persistence_gateway import EntityRepository, PersistenceGateway

__all__ = [
    "AuthService",
    "TOKEN_COOKIE",
    "DescriptionGenerator",
    "DescriptionResult",
    "fallback_description",
    "CollectionState",
    "EntityCollection",
    "banners_collection",
    "categories_collection",
    "products_collection",
    "EntityRepository",
    "PersistenceGateway",
]
