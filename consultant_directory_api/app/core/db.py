"""
SQLite storage client and simple migration system.

The ``Database`` class owns a single SQLite connection for the lifetime
of the process.  It is constructed explicitly, opened at application
startup and closed on shutdown; services receive it as a constructor
argument instead of reaching for a global handle.

All access goes through ``cursor()`` (reads) or ``transaction()``
(check‑then‑write sections).  Both hold the client's re‑entrant lock,
so a duplicate check and the insert that follows it cannot interleave
with another request.  ``transaction()`` also issues ``BEGIN
IMMEDIATE`` so other processes touching the same file are kept out
while the section runs.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, List, Optional, Tuple

from .errors import StorageError


logger = logging.getLogger(__name__)

# Largest value an SQLite INTEGER (and so a row id) can hold.
MAX_ROW_ID = 2**63 - 1


MIGRATIONS: List[Tuple[int, str]] = [
    # Migration 1: consultants table
    (
        1,
        """
        -- ``regions`` holds a JSON array of region names.  ``is_custom`` is
        -- 1 for consultants created through the API and 0 for built-in
        -- records loaded from the seed file.
        CREATE TABLE IF NOT EXISTS consultants (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            firm TEXT NOT NULL,
            contact TEXT NOT NULL,
            email TEXT NOT NULL,
            phone TEXT,
            service TEXT NOT NULL,
            regions TEXT NOT NULL,
            is_custom INTEGER NOT NULL DEFAULT 1,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """,
    ),
    # Migration 2: email uniqueness and lookup indices
    (
        2,
        """
        -- Older databases may hold several rows per email (seed loads were
        -- not idempotent before this index).  The lowest id per email is kept.
        DELETE FROM consultants
        WHERE id NOT IN (SELECT MIN(id) FROM consultants GROUP BY email);
        -- The unique index makes seed loading idempotent (INSERT OR IGNORE)
        -- and backs the duplicate check done by the service layer.
        CREATE UNIQUE INDEX IF NOT EXISTS idx_consultants_email ON consultants(email);
        CREATE INDEX IF NOT EXISTS idx_consultants_service ON consultants(service);
        CREATE INDEX IF NOT EXISTS idx_consultants_firm ON consultants(firm);
        """,
    ),
]


def utc_timestamp() -> str:
    """Current UTC time as ISO‑8601 with milliseconds, e.g. ``2025-01-31T08:15:00.123Z``."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Database:
    """Explicitly managed SQLite connection shared by all services."""

    def __init__(self, path: str) -> None:
        self.path = path
        self._connection: Optional[sqlite3.Connection] = None
        self._lock = threading.RLock()

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    def open(self) -> None:
        """Connect to the database file and apply pending migrations."""
        if self._connection is not None:
            return
        try:
            # ``isolation_level=None`` leaves transaction control to
            # ``transaction()``; single statements autocommit.
            conn = sqlite3.connect(self.path, check_same_thread=False, isolation_level=None)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys = ON")
        except sqlite3.Error as exc:
            logger.exception("Could not open database %s", self.path)
            raise StorageError(f"Could not open database {self.path}: {exc}") from exc
        self._connection = conn
        logger.info("Opened database %s", self.path)
        try:
            self.migrate()
        except BaseException:
            # Leave the client closed so a later open() retries the migrations.
            self.close()
            raise

    def close(self) -> None:
        with self._lock:
            if self._connection is None:
                return
            self._connection.close()
            self._connection = None
        logger.info("Database closed.")

    def ping(self) -> bool:
        """Return ``True`` if the connection answers a trivial query."""
        if self._connection is None:
            return False
        try:
            with self.cursor() as cursor:
                cursor.execute("SELECT 1")
            return True
        except StorageError:
            return False

    def _require_connection(self) -> sqlite3.Connection:
        if self._connection is None:
            raise StorageError("Database is not open")
        return self._connection

    @contextmanager
    def cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor for reads or single autocommitted statements."""
        with self._lock:
            cursor = self._require_connection().cursor()
            try:
                yield cursor
            except sqlite3.Error as exc:
                logger.exception("Database error")
                raise StorageError(str(exc)) from exc
            finally:
                cursor.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor inside ``BEGIN IMMEDIATE`` … ``COMMIT``.

        Any exception rolls the transaction back.  ``sqlite3.Error`` is
        re‑raised as ``StorageError``; service errors (conflicts, missing
        records) propagate unchanged.
        """
        with self._lock:
            conn = self._require_connection()
            cursor = conn.cursor()
            try:
                cursor.execute("BEGIN IMMEDIATE")
                yield cursor
                cursor.execute("COMMIT")
            except sqlite3.Error as exc:
                self._rollback(conn)
                logger.exception("Database error, transaction rolled back")
                raise StorageError(str(exc)) from exc
            except BaseException:
                self._rollback(conn)
                raise
            finally:
                cursor.close()

    @staticmethod
    def _rollback(conn: sqlite3.Connection) -> None:
        if conn.in_transaction:
            conn.rollback()

    def migrate(self) -> int:
        """Apply pending migrations and return the resulting schema version."""
        with self.transaction() as cursor:
            cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
            cursor.execute("SELECT MAX(version) AS version FROM migrations")
            row = cursor.fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, sql in MIGRATIONS:
                if version > current_version:
                    # ``executescript`` would commit the open transaction,
                    # so statements are run one by one.
                    for statement in _split_statements(sql):
                        cursor.execute(statement)
                    cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                    logger.info("Applied migration %s", version)
                    current_version = version
        return current_version


def _split_statements(script: str) -> List[str]:
    lines = [line for line in script.splitlines() if not line.strip().startswith("--")]
    return [statement.strip() for statement in "\n".join(lines).split(";") if statement.strip()]
