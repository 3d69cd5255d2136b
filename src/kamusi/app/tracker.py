"""Missing-word tracking: count and timestamp every lookup that misses."""

from __future__ import annotations

import sqlite3
from collections.abc import Callable
from datetime import UTC, datetime

from kamusi.app.models import MissingWord
from kamusi.db import Store
from kamusi.errors import StoreError, TrackingError

# Single statement: concurrent misses on the same word cannot lose an increment.
UPSERT_MISSING_WORD = """
    INSERT INTO missing_words (word, search_count, first_searched_at, last_searched_at)
    VALUES (?, 1, ?, ?)
    ON CONFLICT(word) DO UPDATE SET
        search_count = search_count + 1,
        last_searched_at = excluded.last_searched_at
"""

SELECT_MISSING_WORD = """
    SELECT word, search_count, first_searched_at, last_searched_at
    FROM missing_words
    WHERE word = ? COLLATE NOCASE
"""


def utc_now() -> datetime:
    return datetime.now(UTC)


class MissingWordTracker:
    """
    Records misses in the ``missing_words`` table.

    Example:
        tracker = MissingWordTracker(store)
        tracker.record_miss("kitabuu")
        tracker.get("KITABUU").search_count  # 1
    """

    def __init__(self, store: Store, *, clock: Callable[[], datetime] | None = None) -> None:
        self._store = store
        self._clock = clock or utc_now

    def record_miss(self, word: str) -> None:
        """
        Insert a record for ``word`` or bump its count.

        Raises:
            TrackingError: the upsert could not be executed
        """
        now = self._clock().isoformat()
        try:
            with self._store.connection() as conn:
                conn.execute(UPSERT_MISSING_WORD, (word, now, now))
        except (sqlite3.Error, StoreError) as e:
            raise TrackingError(f"failed to track missing word '{word}': {e}", cause=e) from e

    def get(self, word: str) -> MissingWord | None:
        """Look up the tracking record for ``word``, ignoring case."""
        try:
            with self._store.connection() as conn:
                row = conn.execute(SELECT_MISSING_WORD, (word,)).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"failed to read missing word '{word}': {e}", cause=e) from e
        return MissingWord.from_row(row) if row is not None else None
