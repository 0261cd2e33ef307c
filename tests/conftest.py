"""Shared fixtures and fakes for the test suite."""

import os
import tempfile
from typing import Any, Iterable, Optional

import pytest

from admin_loja.clients import AssetStoreError, PersistenceError, SqliteDocumentStore
from admin_loja.services import PersistenceGateway
from admin_loja.workflows import IncomingFile

# Smallest valid PNG header plus padding; content is never decoded
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class FakeAssetStore:
    """In-memory asset store that can fail on chosen upload calls (1-based)."""

    def __init__(self, fail_uploads: Iterable[int] = (), fail_deletes: bool = False):
        self.fail_uploads = set(fail_uploads)
        self.fail_deletes = fail_deletes
        self.upload_calls = 0
        self.files: dict[str, bytes] = {}
        self.uploaded_paths: list[str] = []
        self.deleted_paths: list[str] = []

    async def connect(self) -> None:
        pass

    async def close(self) -> None:
        pass

    async def upload(self, path: str, data: bytes, content_type: str) -> str:
        self.upload_calls += 1
        if self.upload_calls in self.fail_uploads:
            raise AssetStoreError(f"Simulated upload failure for {path}")
        self.files[path] = data
        self.uploaded_paths.append(path)
        return f"https://assets.test/{path}"

    async def delete(self, path: str) -> None:
        if self.fail_deletes:
            raise AssetStoreError(f"Simulated delete failure for {path}")
        self.files.pop(path, None)
        self.deleted_paths.append(path)


class FlakyDocumentStore:
    """Wraps a document store and fails the operations named in ``fail_on``."""

    def __init__(self, store: Any, fail_on: Iterable[str] = ()):
        self._store = store
        self.fail_on = set(fail_on)
        self.calls: list[str] = []

    def _check(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise PersistenceError(f"Simulated {operation} failure")

    async def connect(self) -> None:
        await self._store.connect()

    async def close(self) -> None:
        await self._store.close()

    async def list_items(self, collection: str, order_by: str, descending: bool = False):
        self._check("list_items")
        return await self._store.list_items(collection, order_by, descending)

    async def read_item(self, collection: str, item_id: str) -> Optional[dict]:
        self._check("read_item")
        return await self._store.read_item(collection, item_id)

    async def create_item(self, collection: str, body: dict) -> str:
        self._check("create_item")
        return await self._store.create_item(collection, body)

    async def patch_item(self, collection: str, item_id: str, fields: dict) -> None:
        self._check("patch_item")
        await self._store.patch_item(collection, item_id, fields)

    async def delete_item(self, collection: str, item_id: str) -> None:
        self._check("delete_item")
        await self._store.delete_item(collection, item_id)


@pytest.fixture
def temp_db_path():
    """Create a temporary database file for testing."""
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    yield path
    # Cleanup
    if os.path.exists(path):
        os.remove(path)


@pytest.fixture
def document_store(temp_db_path):
    store = SqliteDocumentStore(temp_db_path)
    yield store
    store._sqlite_client.close()


@pytest.fixture
def flaky_store(document_store):
    return FlakyDocumentStore(document_store)


@pytest.fixture
def asset_store():
    return FakeAssetStore()


@pytest.fixture
def gateway(flaky_store, asset_store):
    return PersistenceGateway(flaky_store, asset_store)


@pytest.fixture
def make_file():
    """Factory for picked files."""

    def _make(filename: str = "foto.png", content_type: str = "image/png", data: bytes = PNG_BYTES):
        return IncomingFile(filename=filename, content_type=content_type, data=data)

    return _make


@pytest.fixture
def product_data():
    """Valid product form values."""
    return {
        "nome": "Camiseta Básica",
        "preco": 99.90,
        "categoria": "Roupas",
        "descricao": "Camiseta de algodão confortável para o dia a dia",
        "emPromocao": False,
    }


@pytest.fixture
def asset_store_factory():
    """Build asset stores with injected failures."""
    return FakeAssetStore
