"""Azure Blob Storage client for product and banner images."""

import logging
from typing import Optional

from azure.core.exceptions import AzureError, ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import ContentSettings
from azure.storage.blob.aio import BlobServiceClient, ContainerClient

from admin_loja.clients.errors import AssetStoreError

logger = logging.getLogger(__name__)


class BlobStorageClient:
    """Async Blob Storage client with connection management.

    Assets are stored under their logical path (e.g. ``banners/<id>``) in a
    single container with public blob read access, so the returned blob URL
    is directly retrievable by the storefront.
    """

    def __init__(self, connection_string: str, container_name: str):
        """Initialize the Blob Storage client.

        Args:
            connection_string: Storage account connection string
            container_name: Container holding the assets
        """
        self._connection_string = connection_string
        self._container_name = container_name

        self._service: Optional[BlobServiceClient] = None
        self._container: Optional[ContainerClient] = None

    async def connect(self) -> None:
        """Open the service client and ensure the container exists."""
        self._service = BlobServiceClient.from_connection_string(self._connection_string)
        self._container = self._service.get_container_client(self._container_name)

        try:
            await self._container.create_container(public_access="blob")
            logger.info(f"Created blob container '{self._container_name}'")
        except ResourceExistsError:
            pass

    async def close(self) -> None:
        """Close the Blob Storage connection."""
        if self._service:
            await self._service.close()
            self._service = None
            self._container = None

    async def __aenter__(self) -> "BlobStorageClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        await self.close()
        return False

    def _get_container(self) -> ContainerClient:
        if self._container is None:
            raise RuntimeError("Blob Storage client not connected. Call connect() first.")
        return self._container

    async def upload(self, path: str, data: bytes, content_type: str) -> str:
        """Upload bytes to a path, overwriting any existing blob.

        Args:
            path: Blob name, e.g. ``produtos/1700000000000_camiseta.png``
            data: File content
            content_type: MIME type stored with the blob

        Returns:
            The durable URL of the uploaded blob.

        Raises:
            AssetStoreError: If the upload fails.
        """
        blob_client = self._get_container().get_blob_client(path)
        try:
            await blob_client.upload_blob(
                data,
                overwrite=True,
                content_settings=ContentSettings(content_type=content_type),
            )
        except AzureError as e:
            raise AssetStoreError(f"Failed to upload {path}: {e}") from e

        logger.info(f"Uploaded {len(data)} bytes to {path}")
        return blob_client.url

    async def delete(self, path: str) -> None:
        """Delete the blob at a path. Missing blobs are ignored.

        Raises:
            AssetStoreError: If the delete fails.
        """
        blob_client = self._get_container().get_blob_client(path)
        try:
            await blob_client.delete_blob()
        except ResourceNotFoundError:
            logger.debug(f"Delete of missing blob {path} ignored")
        except AzureError as e:
            raise AssetStoreError(f"Failed to delete {path}: {e}") from e
