"""SQLite store of organization results."""

import sqlite3
import threading
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Tuple

from loguru import logger

from autoorganize.config.settings import DATABASE_FILENAME, RESULTS_TABLE
from autoorganize.exceptions import ConfigurationError
from autoorganize.models.query import QueryResult, ResultQuery
from autoorganize.models.result import (
    FileSortingStatus,
    OrganizationResult,
    OrganizerType,
)
from autoorganize.utils.hash import result_id_for_path

if TYPE_CHECKING:
    from autoorganize.pipeline.guard import InProgressGuard

_COLUMNS = (
    "id", "original_path", "target_path", "type", "status", "status_message",
    "extracted_name", "extracted_year", "extracted_season", "extracted_episode",
    "extracted_ending_episode", "file_size", "date", "duplicate_of",
)


class ResultStore:
    """
    Durable table of OrganizationResult records.

    Records are keyed by the MD5 of their original path, so saving a result
    for a path that was already processed replaces the previous record.
    Every write is committed before the call returns. Reads overlay
    ``is_in_progress`` from the injected guard; the flag is never stored.

    Attributes:
        db_path: Path to the SQLite database file.
        conn: Active database connection, or None if closed.
    """

    def __init__(
        self,
        db_path: Path = Path(DATABASE_FILENAME),
        guard: Optional["InProgressGuard"] = None,
    ) -> None:
        """
        Open the store and create its table.

        Args:
            db_path: Path to the SQLite database file. Created if not exists.
            guard: In-progress guard consulted when reading records.
        """
        self.db_path = db_path
        self.guard = guard
        self._lock = threading.RLock()
        self.conn: Optional[sqlite3.Connection] = sqlite3.connect(
            str(db_path), timeout=10.0, check_same_thread=False
        )
        self.create_tables()

    def create_tables(self) -> None:
        """Create the results table if it doesn't exist."""
        with self._lock:
            self._connection().executescript(f"""
                CREATE TABLE IF NOT EXISTS {RESULTS_TABLE} (
                    id TEXT PRIMARY KEY,
                    original_path TEXT NOT NULL,
                    target_path TEXT,
                    type TEXT NOT NULL,
                    status TEXT NOT NULL,
                    status_message TEXT,
                    extracted_name TEXT,
                    extracted_year INTEGER,
                    extracted_season INTEGER,
                    extracted_episode INTEGER,
                    extracted_ending_episode INTEGER,
                    file_size INTEGER,
                    date REAL NOT NULL,
                    duplicate_of TEXT
                );

                CREATE INDEX IF NOT EXISTS idx_{RESULTS_TABLE}_date
                    ON {RESULTS_TABLE} (date DESC);
            """)
            self.conn.commit()

    def _connection(self) -> sqlite3.Connection:
        if self.conn is None:
            raise sqlite3.ProgrammingError("ResultStore is closed")
        return self.conn

    def save(self, result: OrganizationResult) -> OrganizationResult:
        """
        Insert or replace a result.

        Args:
            result: Result to persist. Its id is derived from the original
                path when empty.

        Returns:
            The saved result.

        Raises:
            ConfigurationError: If the result has no original path, or a
                non-success result has no status message.
        """
        if not result.original_path:
            raise ConfigurationError("Cannot save a result without original path")
        if result.status != FileSortingStatus.SUCCESS and not result.status_message:
            raise ConfigurationError(f"A {result.status.value} result requires a status message")

        result.id = result_id_for_path(result.original_path)
        row = (
            result.id, result.original_path, result.target_path, result.type.value,
            result.status.value, result.status_message, result.extracted_name,
            result.extracted_year, result.extracted_season, result.extracted_episode,
            result.extracted_ending_episode, result.file_size, result.date,
            result.duplicate_of,
        )
        placeholders = ", ".join("?" for _ in _COLUMNS)

        with self._lock:
            conn = self._connection()
            try:
                conn.execute(
                    f"INSERT OR REPLACE INTO {RESULTS_TABLE} ({', '.join(_COLUMNS)}) "
                    f"VALUES ({placeholders})",
                    row,
                )
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                logger.error(f"Error saving result for {result.original_path}: {e}")
                raise

        logger.debug(f"Result saved: {result.original_file_name} -> {result.status.value}")
        return result

    def get(self, result_id: str) -> Optional[OrganizationResult]:
        """
        Retrieve a result by id.

        Returns:
            The result with ``is_in_progress`` filled in, or None if not found.
        """
        with self._lock:
            cursor = self._connection().execute(
                f"SELECT {', '.join(_COLUMNS)} FROM {RESULTS_TABLE} WHERE id = ?",
                (result_id,)
            )
            row = cursor.fetchone()
        return self._overlay(self._row_to_result(row)) if row else None

    def get_by_original_path(self, path: str) -> Optional[OrganizationResult]:
        """Retrieve the result of a source path (looked up by its derived id)."""
        if not path:
            raise ConfigurationError("path is required")
        return self.get(result_id_for_path(path))

    def query(self, query: Optional[ResultQuery] = None) -> QueryResult[OrganizationResult]:
        """
        Return a page of results, most recent first.

        Args:
            query: Status/type/path filters and pagination.

        Returns:
            QueryResult with the page items and the total count of matches.
        """
        query = query or ResultQuery()
        where, params = self._build_where(query)
        limit = query.limit if query.limit is not None else -1

        with self._lock:
            conn = self._connection()
            total = conn.execute(
                f"SELECT COUNT(*) FROM {RESULTS_TABLE}{where}", params
            ).fetchone()[0]
            rows = conn.execute(
                f"SELECT {', '.join(_COLUMNS)} FROM {RESULTS_TABLE}{where} "
                f"ORDER BY date DESC, id ASC LIMIT ? OFFSET ?",
                params + [limit, max(query.start_index, 0)]
            ).fetchall()

        items = [self._overlay(self._row_to_result(row)) for row in rows]
        return QueryResult(items=items, total_record_count=total)

    @staticmethod
    def _build_where(query: ResultQuery) -> Tuple[str, list]:
        clauses: List[str] = []
        params: list = []

        if query.statuses:
            clauses.append(f"status IN ({', '.join('?' for _ in query.statuses)})")
            params.extend(status.value for status in query.statuses)
        if query.type is not None:
            clauses.append("type = ?")
            params.append(query.type.value)
        if query.path_contains:
            clauses.append("instr(original_path, ?) > 0")
            params.append(query.path_contains)

        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        return where, params

    def delete(self, result_id: str) -> bool:
        """
        Delete one result.

        Returns:
            True if a record was removed.
        """
        return self._execute_delete(f"DELETE FROM {RESULTS_TABLE} WHERE id = ?", (result_id,)) > 0

    def delete_all(self) -> int:
        """Delete every result. Returns the number of removed records."""
        return self._execute_delete(f"DELETE FROM {RESULTS_TABLE}", ())

    def delete_completed(self) -> int:
        """
        Delete Success and SkippedExisting results.

        Failure and NeedsCorrection results are kept since they still
        call for user action.

        Returns:
            The number of removed records.
        """
        completed = [s.value for s in FileSortingStatus if s.is_completed]
        return self._execute_delete(
            f"DELETE FROM {RESULTS_TABLE} WHERE status IN ({', '.join('?' for _ in completed)})",
            tuple(completed)
        )

    def _execute_delete(self, sql: str, params: tuple) -> int:
        with self._lock:
            conn = self._connection()
            try:
                cursor = conn.execute(sql, params)
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                logger.error(f"Error deleting results: {e}")
                raise
            return cursor.rowcount

    def _overlay(self, result: OrganizationResult) -> OrganizationResult:
        result.is_in_progress = self.guard is not None and self.guard.is_in_progress(result.id)
        return result

    @staticmethod
    def _row_to_result(row: tuple) -> OrganizationResult:
        values = dict(zip(_COLUMNS, row))
        values["type"] = OrganizerType(values["type"])
        values["status"] = FileSortingStatus(values["status"])
        values["status_message"] = values["status_message"] or ''
        values["file_size"] = values["file_size"] or 0
        return OrganizationResult(**values)

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            if self.conn:
                self.conn.close()
                self.conn = None

    def __enter__(self) -> "ResultStore":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
