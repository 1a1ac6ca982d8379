"""SQLite cache for provider search responses."""

import json
import sqlite3
import threading
import time
from pathlib import Path
from typing import Dict, Optional

from loguru import logger

from autoorganize.config.settings import CACHE_EXPIRATION_SECONDS, DATABASE_FILENAME


class CacheDB:
    """
    SQLite-based cache for TMDB search responses.

    Cache failures are never fatal: a broken cache only means more
    network requests.

    Attributes:
        db_path: Path to the SQLite database file.
        conn: Active database connection, or None if closed.
    """

    def __init__(self, db_path: Path = Path(DATABASE_FILENAME)) -> None:
        """
        Initialize the cache database.

        Args:
            db_path: Path to the SQLite database file. Created if not exists.
        """
        self.db_path = db_path
        self.conn: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()
        self._connect()

    def _connect(self) -> None:
        """Establish database connection and create tables."""
        try:
            self.conn = sqlite3.connect(str(self.db_path), timeout=10.0, check_same_thread=False)
            self.create_tables()
        except sqlite3.Error as e:
            logger.error(f"Database connection error: {e}")

    def create_tables(self) -> None:
        """Create cache tables if they don't exist."""
        if not self.conn:
            return

        try:
            self.conn.executescript("""
                CREATE TABLE IF NOT EXISTS tmdb_cache (
                    query TEXT PRIMARY KEY,
                    result TEXT,
                    timestamp INTEGER
                );
            """)
            self.conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Error creating tables: {e}")

    def get_tmdb(self, query: str, expiration: int = CACHE_EXPIRATION_SECONDS) -> Dict:
        """
        Retrieve cached TMDB response.

        Args:
            query: The search key.
            expiration: Cache expiration time in seconds (default 24 hours).

        Returns:
            Cached response dict, or empty dict if not found/expired.
        """
        if not self.conn:
            return {}

        try:
            with self._lock:
                row = self.conn.execute(
                    "SELECT result, timestamp FROM tmdb_cache WHERE query = ?",
                    (query,)
                ).fetchone()
            if row and (time.time() - row[1] < expiration):
                return json.loads(row[0])
        except (sqlite3.Error, json.JSONDecodeError) as e:
            logger.warning(f"Error retrieving TMDB cache: {e}")
        return {}

    def set_tmdb(self, query: str, result: Dict) -> None:
        """
        Store TMDB response in cache.

        Args:
            query: The search key.
            result: The API response to cache.
        """
        if not self.conn:
            return

        try:
            with self._lock:
                self.conn.execute(
                    "INSERT OR REPLACE INTO tmdb_cache (query, result, timestamp) VALUES (?, ?, ?)",
                    (query, json.dumps(result), int(time.time()))
                )
                self.conn.commit()
        except sqlite3.Error as e:
            logger.warning(f"Error saving TMDB cache: {e}")

    def close(self) -> None:
        """Close the database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None

    def __enter__(self) -> "CacheDB":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
