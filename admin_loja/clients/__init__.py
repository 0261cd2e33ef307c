"""Client modules for external services."""

from admin_loja.clients.errors import AssetStoreError, PersistenceError
from admin_loja.clients.sqlite_client import SqliteClient
from admin_loja.clients.sqlite_document_store import SqliteDocumentStore
from admin_loja.clients.cosmosdb_client import CosmosDBClient
from admin_loja.clients.local_asset_store import LocalAssetStore
from admin_loja.clients.blob_storage_client import BlobStorageClient

__all__ = [
    "AssetStoreError",
    "PersistenceError",
    "SqliteClient",
    "SqliteDocumentStore",
    "CosmosDBClient",
    "LocalAssetStore",
    "BlobStorageClient",
]
