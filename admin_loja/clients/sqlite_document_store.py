"""SQLite-backed document store for local development.

Mirrors the Cosmos DB client's collection API so the app can run without
Azure: every document is stored as a JSON body keyed by (collection, id).
"""

import json
import logging
import re
import sqlite3
import uuid
from typing import Any, Optional

from admin_loja.clients.errors import PersistenceError
from admin_loja.clients.sqlite_client import SqliteClient

logger = logging.getLogger(__name__)

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS documents (
    seq INTEGER PRIMARY KEY AUTOINCREMENT,
    collection TEXT NOT NULL,
    id TEXT NOT NULL,
    body TEXT NOT NULL,
    UNIQUE (collection, id)
)
"""

CREATE_INDEX_SQL = """
CREATE INDEX IF NOT EXISTS idx_documents_collection ON documents(collection)
"""

_FIELD_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class SqliteDocumentStore:
    """Document store keeping each collection as JSON rows in one SQLite table."""

    def __init__(self, db_path: str = "admin_loja.db"):
        """Initialize the store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self._db_path = db_path
        self._sqlite_client = SqliteClient(db_path)
        self._ensure_table_exists()

    def _ensure_table_exists(self) -> None:
        """Create the documents table if it doesn't exist."""
        self._sqlite_client.execute_query(CREATE_TABLE_SQL)
        self._sqlite_client.execute_query(CREATE_INDEX_SQL)
        logger.debug(f"Document store initialized at {self._db_path}")

    async def connect(self) -> None:
        """Nothing to do: the connection is opened in the constructor."""

    async def close(self) -> None:
        self._sqlite_client.close()

    async def list_items(
        self,
        collection: str,
        order_by: str,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        """List a collection ordered by one document field, ties in insertion order."""
        if not _FIELD_NAME.match(order_by):
            raise PersistenceError(f"Invalid order field: {order_by}")

        direction = "DESC" if descending else "ASC"
        try:
            rows = self._sqlite_client.execute_query(
                f"SELECT body FROM documents WHERE collection = ? "
                f"ORDER BY json_extract(body, '$.{order_by}') {direction}, seq ASC",
                (collection,),
            )
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to list {collection}: {e}") from e

        return [json.loads(body) for (body,) in rows]

    async def read_item(self, collection: str, item_id: str) -> Optional[dict[str, Any]]:
        try:
            rows = self._sqlite_client.execute_query(
                "SELECT body FROM documents WHERE collection = ? AND id = ?",
                (collection, item_id),
            )
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to read {collection}/{item_id}: {e}") from e

        if not rows:
            return None
        return json.loads(rows[0][0])

    async def create_item(self, collection: str, body: dict[str, Any]) -> str:
        item_id = str(uuid.uuid4())
        document = {**body, "id": item_id}

        try:
            self._sqlite_client.execute_write(
                "INSERT INTO documents (collection, id, body) VALUES (?, ?, ?)",
                (collection, item_id, json.dumps(document)),
            )
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to create item in {collection}: {e}") from e

        logger.debug(f"Created {collection}/{item_id}")
        return item_id

    async def patch_item(self, collection: str, item_id: str, fields: dict[str, Any]) -> None:
        """Replace the given top-level fields of an existing document."""
        current = await self.read_item(collection, item_id)
        if current is None:
            raise PersistenceError(f"Document not found: {collection}/{item_id}")

        current.update(fields)
        current["id"] = item_id

        try:
            self._sqlite_client.execute_write(
                "UPDATE documents SET body = ? WHERE collection = ? AND id = ?",
                (json.dumps(current), collection, item_id),
            )
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to update {collection}/{item_id}: {e}") from e

    async def delete_item(self, collection: str, item_id: str) -> None:
        try:
            deleted = self._sqlite_client.execute_write(
                "DELETE FROM documents WHERE collection = ? AND id = ?",
                (collection, item_id),
            )
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to delete {collection}/{item_id}: {e}") from e

        if not deleted:
            logger.debug(f"Delete of missing item {collection}/{item_id} ignored")
