"""Database module for URL Shortener Service.

This module handles SQLite operations against the url mapping table.
Uniqueness of long and short urls is checked by the service before
inserting; the table itself does not enforce it.
"""

import re
import sqlite3
import logging
import threading
from typing import Optional, Union

from .config import settings
from ..models.url import UrlMapping

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class Database:
    """Database class for managing the shared SQLite connection and queries."""

    def __init__(
        self, db_path: Optional[str] = None, collection_name: Optional[str] = None
    ):
        """Initialize database settings.

        Args:
            db_path: Path to SQLite database file. Use ":memory:" for in-memory database.
            collection_name: Name of the table holding url mappings.

        Raises:
            ValueError: If the collection name is not a plain identifier.
        """
        self.db_path = db_path or settings.db_path
        self.collection_name = collection_name or settings.url_collection_name
        if not _IDENTIFIER.match(self.collection_name):
            raise ValueError(f"Invalid collection name: {self.collection_name!r}")
        self._connection: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()

    def _get_connection(self) -> sqlite3.Connection:
        """Create or return the database connection.

        The connection is shared by every request thread; statements are
        serialised through ``self._lock``.

        Returns:
            SQLite connection.
        """
        if self._connection is None:
            self._connection = sqlite3.connect(self.db_path, check_same_thread=False)
            self._connection.row_factory = sqlite3.Row
        return self._connection

    def close(self) -> None:
        """Close database connection."""
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None

    def init_db(self) -> None:
        """Initialize the url mapping table and its lookup indexes."""
        table = self.collection_name
        create_table_sql = f"""
        CREATE TABLE IF NOT EXISTS {table} (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            long_url TEXT NOT NULL,
            short_url TEXT NOT NULL
        )
        """
        create_index_sql = f"""
        CREATE INDEX IF NOT EXISTS idx_{table}_short_url ON {table}(short_url);
        CREATE INDEX IF NOT EXISTS idx_{table}_long_url ON {table}(long_url);
        """
        with self._lock:
            conn = self._get_connection()
            try:
                cursor = conn.cursor()
                cursor.execute(create_table_sql)
                cursor.executescript(create_index_sql)
                conn.commit()
                logger.info(f"Database initialized successfully ({self.db_path})")
            except sqlite3.Error as e:
                logger.error(f"Database initialization failed: {e}")
                raise

    def execute(
        self, query: str, params: tuple = (), fetch: bool = False
    ) -> Union[list[dict], Optional[int]]:
        """Execute a SQL query.

        Args:
            query: SQL query string.
            params: Query parameters.
            fetch: Whether to fetch results.

        Returns:
            Query results if fetch=True, otherwise the id of the last
            inserted row after committing.
        """
        with self._lock:
            conn = self._get_connection()
            try:
                cursor = conn.cursor()
                cursor.execute(query, params)
                if fetch:
                    return [dict(row) for row in cursor.fetchall()]
                conn.commit()
                return cursor.lastrowid
            except sqlite3.Error as e:
                logger.error(f"Query execution failed: {e}")
                raise

    def find_all(self) -> list[UrlMapping]:
        """Get every stored mapping in insertion order.

        Returns:
            List of url mappings.
        """
        query = f"SELECT id, long_url, short_url FROM {self.collection_name} ORDER BY id"
        rows = self.execute(query, fetch=True) or []
        return [UrlMapping(**row) for row in rows]

    def find_one(
        self, short_url: Optional[str] = None, long_url: Optional[str] = None
    ) -> Optional[UrlMapping]:
        """Get the first mapping matching every given field.

        Args:
            short_url: Short url to match, or None to ignore it.
            long_url: Long url to match, or None to ignore it.

        Returns:
            The matching mapping or None if not found.

        Raises:
            ValueError: If neither field is given.
        """
        clauses = []
        params = []
        if short_url is not None:
            clauses.append("short_url = ?")
            params.append(short_url)
        if long_url is not None:
            clauses.append("long_url = ?")
            params.append(long_url)
        if not clauses:
            raise ValueError("find_one requires short_url or long_url")

        query = (
            f"SELECT id, long_url, short_url FROM {self.collection_name} "
            f"WHERE {' AND '.join(clauses)} ORDER BY id LIMIT 1"
        )
        results = self.execute(query, tuple(params), fetch=True)
        return UrlMapping(**results[0]) if results else None

    def insert(self, mapping: UrlMapping) -> UrlMapping:
        """Append a mapping.

        Args:
            mapping: The mapping to store. Its id is ignored.

        Returns:
            The stored mapping carrying its assigned id.
        """
        query = f"INSERT INTO {self.collection_name} (long_url, short_url) VALUES (?, ?)"
        row_id = self.execute(query, (mapping.long_url, mapping.short_url))
        logger.info(f"Stored short url {mapping.short_url} for {mapping.long_url}")
        return mapping.model_copy(update={"id": row_id})
