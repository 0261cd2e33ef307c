"""Filesystem asset store for local development."""

import logging
from pathlib import Path

from admin_loja.clients.errors import AssetStoreError

logger = logging.getLogger(__name__)


class LocalAssetStore:
    """Stores assets as files under a root folder and serves them from a base URL."""

    def __init__(self, root: str, base_url: str):
        self._root = Path(root).resolve()
        self._base_url = base_url.rstrip("/")

    async def connect(self) -> None:
        self._root.mkdir(parents=True, exist_ok=True)

    async def close(self) -> None:
        """Nothing to release."""

    def _resolve(self, path: str) -> Path:
        target = (self._root / path).resolve()
        if self._root not in target.parents:
            raise AssetStoreError(f"Asset path escapes the storage root: {path}")
        return target

    async def upload(self, path: str, data: bytes, content_type: str) -> str:
        target = self._resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            raise AssetStoreError(f"Failed to upload {path}: {e}") from e

        logger.info(f"Stored {len(data)} bytes ({content_type}) at {target}")
        return f"{self._base_url}/{path}"

    async def delete(self, path: str) -> None:
        target = self._resolve(path)
        try:
            target.unlink(missing_ok=True)
        except OSError as e:
            raise AssetStoreError(f"Failed to delete {path}: {e}") from e
