"""SQLite store of learned smart-match corrections."""

import sqlite3
import threading
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from loguru import logger

from autoorganize.classification.text_processing import normalize_match_string
from autoorganize.config.settings import DATABASE_FILENAME, SMART_MATCH_TABLE
from autoorganize.exceptions import ConfigurationError
from autoorganize.models.query import QueryResult, SmartMatchQuery
from autoorganize.models.result import OrganizerType
from autoorganize.models.smart_match import SmartMatch


class SmartMatchStore:
    """
    Durable table of learned corrections.

    One row per (target, match string). A match string resolves to at most
    one target per organizer type: saving it under a new target moves it
    there (last write wins). Rows keep their insertion sequence, which is
    the tie-break when several targets match the same set of tokens.
    """

    def __init__(self, db_path: Path = Path(DATABASE_FILENAME)) -> None:
        """
        Open the store and create its table.

        Args:
            db_path: Path to the SQLite database file. Created if not exists.
        """
        self.db_path = db_path
        self._lock = threading.RLock()
        self.conn: Optional[sqlite3.Connection] = sqlite3.connect(
            str(db_path), timeout=10.0, check_same_thread=False
        )
        self.create_tables()

    def create_tables(self) -> None:
        """Create the smart match table if it doesn't exist."""
        with self._lock:
            self._connection().executescript(f"""
                CREATE TABLE IF NOT EXISTS {SMART_MATCH_TABLE} (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    target_id TEXT NOT NULL,
                    organizer_type TEXT NOT NULL,
                    display_name TEXT,
                    year INTEGER,
                    match_string TEXT NOT NULL,
                    UNIQUE (organizer_type, target_id, match_string)
                );

                CREATE INDEX IF NOT EXISTS idx_{SMART_MATCH_TABLE}_match
                    ON {SMART_MATCH_TABLE} (match_string);
            """)
            self.conn.commit()

    def _connection(self) -> sqlite3.Connection:
        if self.conn is None:
            raise sqlite3.ProgrammingError("SmartMatchStore is closed")
        return self.conn

    def save(self, match: SmartMatch) -> SmartMatch:
        """
        Create or extend the record of a target.

        Match strings are normalized and merged with the ones already stored
        for the target. Strings held by another target of the same type are
        moved to this one.

        Args:
            match: Target identity and tokens to learn.

        Returns:
            The full record stored for the target after the merge.
        """
        if not match.id:
            raise ConfigurationError("A smart match requires a target id")

        strings = sorted({normalize_match_string(s) for s in match.match_strings} - {''})
        kind = match.organizer_type.value

        with self._lock:
            conn = self._connection()
            try:
                conn.execute(
                    f"UPDATE {SMART_MATCH_TABLE} SET display_name = ?, year = ? "
                    f"WHERE organizer_type = ? AND target_id = ?",
                    (match.display_name, match.year, kind, match.id)
                )
                for string in strings:
                    moved = conn.execute(
                        f"DELETE FROM {SMART_MATCH_TABLE} "
                        f"WHERE organizer_type = ? AND match_string = ? AND target_id != ?",
                        (kind, string, match.id)
                    ).rowcount
                    if moved:
                        logger.info(f"Smart match '{string}' reassigned to {match.display_name}")
                    conn.execute(
                        f"INSERT OR IGNORE INTO {SMART_MATCH_TABLE} "
                        f"(target_id, organizer_type, display_name, year, match_string) "
                        f"VALUES (?, ?, ?, ?, ?)",
                        (match.id, kind, match.display_name, match.year, string)
                    )
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                logger.error(f"Error saving smart match for {match.id}: {e}")
                raise

        logger.info(f"Smart match learned: {strings} -> {match.display_name} ({match.id})")
        return self.get(match.id, match.organizer_type)

    def get(
        self,
        target_id: str,
        organizer_type: Optional[OrganizerType] = None
    ) -> Optional[SmartMatch]:
        """
        Retrieve the record of a target.

        Returns:
            SmartMatch with all its match strings, or None if not found.
        """
        sql = (
            f"SELECT target_id, organizer_type, display_name, year, match_string "
            f"FROM {SMART_MATCH_TABLE} WHERE target_id = ?"
        )
        params: list = [target_id]
        if organizer_type is not None:
            sql += " AND organizer_type = ?"
            params.append(organizer_type.value)

        with self._lock:
            rows = self._connection().execute(sql + " ORDER BY seq", params).fetchall()

        matches = self._group(rows)
        return matches[0] if matches else None

    def get_all(self, query: Optional[SmartMatchQuery] = None) -> QueryResult[SmartMatch]:
        """
        Return a page of records, ordered by display name.

        Args:
            query: Organizer type filter and pagination.
        """
        query = query or SmartMatchQuery()
        sql = (
            f"SELECT target_id, organizer_type, display_name, year, match_string "
            f"FROM {SMART_MATCH_TABLE}"
        )
        params: list = []
        if query.organizer_type is not None:
            sql += " WHERE organizer_type = ?"
            params.append(query.organizer_type.value)
        sql += " ORDER BY display_name COLLATE NOCASE, target_id, seq"

        with self._lock:
            rows = self._connection().execute(sql, params).fetchall()

        matches = self._group(rows)
        start = max(query.start_index, 0)
        end = start + query.limit if query.limit is not None else None
        return QueryResult(items=matches[start:end], total_record_count=len(matches))

    def delete_entry(
        self,
        target_id: str,
        match_string: str,
        organizer_type: Optional[OrganizerType] = None
    ) -> bool:
        """
        Remove one match string from a target.

        The record disappears with its last match string.

        Returns:
            True if an entry was removed.
        """
        if not target_id:
            raise ConfigurationError("target_id is required")
        if not match_string:
            raise ConfigurationError("match_string is required")

        sql = f"DELETE FROM {SMART_MATCH_TABLE} WHERE target_id = ? AND match_string = ?"
        params: list = [target_id, normalize_match_string(match_string)]
        if organizer_type is not None:
            sql += " AND organizer_type = ?"
            params.append(organizer_type.value)

        with self._lock:
            conn = self._connection()
            try:
                removed = conn.execute(sql, params).rowcount
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                logger.error(f"Error deleting smart match entry {target_id}: {e}")
                raise
        return removed > 0

    def find_target_for_tokens(
        self,
        tokens: Iterable[str],
        organizer_type: Optional[OrganizerType] = None
    ) -> Optional[SmartMatch]:
        """
        Find the target learned for any of the given name tokens.

        When several targets match, the one whose matching entry was
        written first wins.

        Args:
            tokens: Raw name tokens from a filename.
            organizer_type: Restrict the lookup to one organizer type.

        Returns:
            The matching SmartMatch, or None.
        """
        strings = sorted({normalize_match_string(t) for t in tokens if t} - {''})
        if not strings:
            return None

        sql = (
            f"SELECT target_id, organizer_type FROM {SMART_MATCH_TABLE} "
            f"WHERE match_string IN ({', '.join('?' for _ in strings)})"
        )
        params: list = list(strings)
        if organizer_type is not None:
            sql += " AND organizer_type = ?"
            params.append(organizer_type.value)

        with self._lock:
            row = self._connection().execute(
                sql + " ORDER BY seq ASC, target_id ASC LIMIT 1", params
            ).fetchone()

        if not row:
            return None
        return self.get(row[0], OrganizerType(row[1]))

    @staticmethod
    def _group(rows: List[Tuple]) -> List[SmartMatch]:
        """Fold (target, string) rows into one SmartMatch per target, keeping row order."""
        grouped: Dict[Tuple[str, str], SmartMatch] = {}
        for target_id, kind, display_name, year, match_string in rows:
            key = (kind, target_id)
            if key not in grouped:
                grouped[key] = SmartMatch(
                    id=target_id,
                    organizer_type=OrganizerType(kind),
                    display_name=display_name or '',
                    year=year,
                )
            grouped[key].match_strings.add(match_string)
        return list(grouped.values())

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            if self.conn:
                self.conn.close()
                self.conn = None

    def __enter__(self) -> "SmartMatchStore":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
