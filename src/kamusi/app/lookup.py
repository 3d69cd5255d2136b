"""
Word lookup service.

Exact, fuzzy and batch lookups against the ``words`` table, plus the
missing-word report. Every call re-reads the store; nothing is cached.

A miss on ``search`` is recorded by the tracker before ``WordNotFoundError``
is raised. Tracking is best effort: its failures are logged through the
injected logger and never replace the not-found outcome.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from kamusi.app.models import DictionaryEntry, MissingWord
from kamusi.app.tracker import MissingWordTracker
from kamusi.db import Store
from kamusi.errors import KamusiError, StoreError, WordNotFoundError
from kamusi.logging import get_logger

log = get_logger(__name__)

ENTRY_COLUMNS = "id, word, meaning, synonyms, conjugation, created_at, updated_at"

SELECT_WORD = f"""
    SELECT {ENTRY_COLUMNS}
    FROM words
    WHERE word = ? COLLATE NOCASE
    LIMIT 1
"""

SELECT_FUZZY = f"""
    SELECT {ENTRY_COLUMNS}
    FROM words
    WHERE word LIKE ? ESCAPE '\\'
    LIMIT ?
"""

SELECT_MISSING = """
    SELECT word, search_count, first_searched_at, last_searched_at
    FROM missing_words
    ORDER BY search_count DESC
    LIMIT ?
"""


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class LookupService:
    """
    Dictionary lookups over a shared store.

    Safe to call from many threads at once; the store's pool hands each
    call its own connection.

    Example:
        service = LookupService(store)
        entry = service.search("Kitabu")
        print(entry.meaning)
    """

    def __init__(
        self,
        store: Store,
        tracker: MissingWordTracker | None = None,
        *,
        logger: Any = None,
        max_workers: int | None = None,
    ) -> None:
        self._store = store
        self._tracker = tracker or MissingWordTracker(store)
        self._log = logger or log
        self._max_workers = max_workers or store.settings.search_workers

    @property
    def store(self) -> Store:
        return self._store

    def search(self, word: str) -> DictionaryEntry:
        """
        Case-insensitive exact lookup.

        Raises:
            WordNotFoundError: no entry matches (the miss has been recorded)
            StoreError: the query failed or the stored row is malformed
        """
        try:
            with self._store.connection() as conn:
                row = conn.execute(SELECT_WORD, (word,)).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"database error: {e}", cause=e) from e

        if row is None:
            self._record_miss(word)
            raise WordNotFoundError(word)

        return DictionaryEntry.from_row(row)

    def _record_miss(self, word: str) -> None:
        try:
            self._tracker.record_miss(word)
        except KamusiError as e:
            self._log.warning("missing_word_tracking_failed", word=word, **e.to_dict())

    def search_multiple(self, words: Iterable[str]) -> dict[str, DictionaryEntry | None]:
        """
        Look up several words concurrently.

        Returns a mapping keyed by the input strings as given. Words that are
        missing, or whose lookup failed, map to None.
        """
        unique = list(dict.fromkeys(words))
        if not unique:
            return {}

        workers = min(self._max_workers, len(unique))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="kamusi-lookup") as pool:
            entries = pool.map(self._search_or_none, unique)
            return dict(zip(unique, entries))

    def _search_or_none(self, word: str) -> DictionaryEntry | None:
        try:
            return self.search(word)
        except WordNotFoundError:
            return None
        except KamusiError as e:
            self._log.debug("batch_lookup_failed", word=word, error=str(e))
            return None

    def fuzzy_search(self, term: str, limit: int = 10) -> list[DictionaryEntry]:
        """Entries whose word contains ``term``, ignoring case. Order is storage order."""
        if limit <= 0:
            return []

        try:
            with self._store.connection() as conn:
                rows = conn.execute(SELECT_FUZZY, (_like_pattern(term), limit)).fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"database error: {e}", cause=e) from e

        return [DictionaryEntry.from_row(row) for row in rows]

    def get_missing_words(self, limit: int = 10) -> list[MissingWord]:
        """Most frequently missed words first."""
        if limit <= 0:
            return []

        try:
            with self._store.connection() as conn:
                rows = conn.execute(SELECT_MISSING, (limit,)).fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"database error: {e}", cause=e) from e

        return [MissingWord.from_row(row) for row in rows]
