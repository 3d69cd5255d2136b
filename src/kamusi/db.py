"""SQLite word store: path resolution, pooled engine and schema management."""

from __future__ import annotations

import sqlite3
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import QueuePool

from kamusi.config import Settings, get_settings
from kamusi.errors import (
    CloseError,
    ConnectionFailedError,
    SchemaCreationError,
    StoreError,
)
from kamusi.logging import get_logger

log = get_logger(__name__)

DB_FILENAME = "kamusi.db"
DATA_DIRNAME = "data"
HOME_DIRNAME = ".kamusi"

SCHEMA = """
CREATE TABLE IF NOT EXISTS words (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    word TEXT NOT NULL COLLATE NOCASE,
    meaning TEXT NOT NULL,
    synonyms TEXT,
    conjugation TEXT,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_words_word ON words(word COLLATE NOCASE);

CREATE TABLE IF NOT EXISTS missing_words (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    word TEXT NOT NULL COLLATE NOCASE UNIQUE,
    search_count INTEGER DEFAULT 1,
    first_searched_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    last_searched_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_missing_words_word ON missing_words(word COLLATE NOCASE);
"""

TABLES = ("words", "missing_words")


def resolve_database_path(
    settings: Settings | None = None,
    *,
    cwd: Path | None = None,
    executable: Path | None = None,
    home: Path | None = None,
) -> Path:
    """
    Determine the database file path.

    Order:
        1. KAMUSI_DB_PATH (settings.db_path)
        2. ./data/kamusi.db, if it exists
        3. <executable dir>/data/kamusi.db, if it exists
        4. ~/.kamusi/kamusi.db, creating ~/.kamusi when missing

    Raises:
        ConnectionFailedError: home directory unknown or not writable
    """
    settings = settings or get_settings()

    if settings.db_path is not None:
        return settings.db_path

    local_path = (cwd or Path.cwd()) / DATA_DIRNAME / DB_FILENAME
    if local_path.exists():
        return local_path

    if executable is None and sys.argv and sys.argv[0]:
        executable = Path(sys.argv[0])
    if executable is not None:
        exe_path = executable.resolve().parent / DATA_DIRNAME / DB_FILENAME
        if exe_path.exists():
            return exe_path

    try:
        home_dir = home or Path.home()
    except RuntimeError as e:
        raise ConnectionFailedError("could not determine home directory", cause=e) from e

    kamusi_dir = home_dir / HOME_DIRNAME
    try:
        kamusi_dir.mkdir(mode=0o755, parents=True, exist_ok=True)
    except OSError as e:
        raise ConnectionFailedError(
            f"could not create kamusi directory {kamusi_dir}", cause=e
        ) from e

    return kamusi_dir / DB_FILENAME


def create_store_engine(path: Path, settings: Settings) -> Engine:
    """
    Create the pooled SQLAlchemy engine for a store file.

    ``max_idle_connections`` maps to the ``QueuePool`` size and the rest of
    ``max_open_connections`` to its overflow, so at most ``max_open`` connections
    exist and at most ``max_idle`` are kept when returned. Connections older than
    ``connection_max_lifetime`` are recycled on checkout.
    """
    pool_size = min(settings.max_idle_connections, settings.max_open_connections)

    engine = create_engine(
        URL.create("sqlite", database=str(path)),
        poolclass=QueuePool,
        pool_size=pool_size,
        max_overflow=settings.max_open_connections - pool_size,
        pool_recycle=settings.connection_max_lifetime,
        pool_timeout=settings.acquire_timeout,
        connect_args={"check_same_thread": False},
    )
    busy_timeout_ms = int(settings.busy_timeout * 1000)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection: Any, _rec: Any) -> None:
        # autocommit, every statement is its own transaction
        dbapi_connection.isolation_level = None
        dbapi_connection.row_factory = sqlite3.Row
        cursor = dbapi_connection.cursor()
        cursor.execute(f"PRAGMA busy_timeout={busy_timeout_ms}")
        # WAL lets readers proceed while a writer holds the lock
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine


def _driver_error(e: Exception) -> Exception:
    """The sqlite3 error behind a SQLAlchemy wrapper, or ``e`` itself."""
    return getattr(e, "orig", None) or e


class Store:
    """
    Shared handle to the word store.

    Constructed once per process and passed to the services that need it.
    ``open()`` resolves the location and builds the engine on first use only:
    a failed first attempt is remembered and re-raised to every later caller
    rather than retried against another path.

    Example:
        store = Store()
        store.init_schema()
        with store.connection() as conn:
            conn.execute("SELECT COUNT(*) FROM words")
        store.close()
    """

    def __init__(self, settings: Settings | None = None, path: Path | None = None) -> None:
        self._settings = settings or get_settings()
        self._path_override = path
        self._lock = threading.Lock()
        self._engine: Engine | None = None
        self._open_error: ConnectionFailedError | None = None
        self._path: Path | None = None
        self._closed = False

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def path(self) -> Path | None:
        """Resolved database path, None until the first open."""
        return self._path

    @property
    def closed(self) -> bool:
        return self._closed

    def open(self) -> Engine:
        """Open the store once and return the shared engine."""
        with self._lock:
            if self._closed:
                raise ConnectionFailedError(f"store {self._path} is closed")
            if self._engine is not None:
                return self._engine
            if self._open_error is not None:
                raise self._open_error

            try:
                self._engine = self._create_engine()
            except ConnectionFailedError as e:
                self._open_error = e
                raise
            return self._engine

    def _create_engine(self) -> Engine:
        path = self._path_override or resolve_database_path(self._settings)
        self._path = path

        engine = create_store_engine(path, self._settings)
        try:
            conn = engine.raw_connection()
            try:
                conn.driver_connection.execute("SELECT 1").fetchone()
            finally:
                conn.close()
        except (sqlite3.Error, SQLAlchemyError) as e:
            engine.dispose()
            cause = _driver_error(e)
            raise ConnectionFailedError(f"cannot open store {path}", cause=cause) from cause

        log.debug("store_opened", path=str(path), max_open=self._settings.max_open_connections)
        return engine

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Borrow a pooled connection, opening the store if needed."""
        engine = self.open()
        try:
            conn = engine.raw_connection()
        except (sqlite3.Error, SQLAlchemyError) as e:
            cause = _driver_error(e)
            raise ConnectionFailedError(
                f"no connection available for {self._path}: {e}", cause=cause
            ) from cause

        try:
            yield conn.driver_connection
        finally:
            conn.close()

    def init_schema(self) -> None:
        """Create tables and indexes if absent. Safe to call on every start."""
        try:
            with self.connection() as conn:
                conn.executescript(SCHEMA)
        except sqlite3.Error as e:
            raise SchemaCreationError(f"failed to create schema: {e}", cause=e) from e

        log.debug("schema_initialized", path=str(self._path))

    def table_counts(self) -> dict[str, int]:
        """Row count per table."""
        counts = {}
        try:
            with self.connection() as conn:
                for table in TABLES:
                    row = conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()
                    counts[table] = row[0]
        except sqlite3.Error as e:
            raise StoreError(f"failed to count rows: {e}", cause=e) from e
        return counts

    def stats(self) -> dict[str, int]:
        """Current pool occupancy; all zero before the first open and after close."""
        with self._lock:
            engine = None if self._closed else self._engine

        if engine is None:
            return {"open": 0, "idle": 0, "in_use": 0}

        idle = engine.pool.checkedin()
        in_use = engine.pool.checkedout()
        return {"open": idle + in_use, "idle": idle, "in_use": in_use}

    def close(self) -> None:
        """Dispose of the engine's pool. No-op if the store was never opened."""
        with self._lock:
            engine = self._engine
            if engine is None or self._closed:
                return
            self._closed = True

        try:
            engine.dispose()
        except (sqlite3.Error, SQLAlchemyError) as e:
            cause = _driver_error(e)
            raise CloseError(f"failed to close store {self._path}: {e}", cause=cause) from cause

        log.debug("store_closed", path=str(self._path))
