import sqlite3
from sqlite3 import Connection

WRITE_STATEMENTS = ("INSERT", "UPDATE", "DELETE", "REPLACE")


class SqliteClient:
    """SQLite database client with connection management.

    The connection is shared across threads: the web server may run request
    handlers on a different thread than the one that opened it.
    """

    def __init__(self, connection_string: str):
        self.connection_string = connection_string
        self._connection = sqlite3.connect(self.connection_string, check_same_thread=False)

    @property
    def connection(self) -> Connection:
        """Get the database connection."""
        return self._connection

    def execute_query(self, query: str, params=None) -> list[tuple]:
        """Execute a query and return all results."""
        cursor = self._connection.cursor()
        try:
            if params:
                cursor.execute(query, params)
            else:
                cursor.execute(query)

            # Commit for write operations
            if query.strip().upper().startswith(WRITE_STATEMENTS):
                self._connection.commit()

            return cursor.fetchall()
        finally:
            cursor.close()

    def execute_write(self, query: str, params=None) -> int:
        """Execute a write statement and return the number of affected rows."""
        cursor = self._connection.cursor()
        try:
            cursor.execute(query, params or ())
            self._connection.commit()
            return cursor.rowcount
        finally:
            cursor.close()

    def close(self):
        """Close the database connection."""
        self._connection.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit with cleanup."""
        self.close()
        return False
