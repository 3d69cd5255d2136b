"""
Dictionary data models.

These are what the lookup service hands to the CLI. Rows are converted once,
at the store boundary; nothing above it sees ``sqlite3.Row``.

Optional text fields are ``str | None``: ``None`` means the column is NULL,
``""`` means the value is present but empty.
"""

import sqlite3
from dataclasses import dataclass
from datetime import UTC, datetime

from kamusi.errors import StoreError


def parse_timestamp(value: str | int | float | datetime | None) -> datetime | None:
    """
    Parse a stored timestamp into an aware UTC datetime.

    Accepts ISO-8601 strings written by the tracker, SQLite's
    ``CURRENT_TIMESTAMP`` format (``YYYY-MM-DD HH:MM:SS``, implicitly UTC)
    and Unix seconds, which SQLite keeps as numbers in ``TIMESTAMP`` columns.

    Raises:
        StoreError: the stored value is not a timestamp
    """
    if value is None:
        return None
    try:
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, (int, float)):
            parsed = datetime.fromtimestamp(value, UTC)
        else:
            parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError, OverflowError, OSError) as e:
        raise StoreError(f"malformed timestamp {value!r}: {e}", cause=e) from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


@dataclass(frozen=True)
class DictionaryEntry:
    """A single dictionary record."""

    id: int
    word: str
    meaning: str
    synonyms: str | None = None
    conjugation: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "DictionaryEntry":
        return cls(
            id=row["id"],
            word=row["word"],
            meaning=row["meaning"],
            synonyms=row["synonyms"],
            conjugation=row["conjugation"],
            created_at=parse_timestamp(row["created_at"]),
            updated_at=parse_timestamp(row["updated_at"]),
        )


@dataclass(frozen=True)
class MissingWord:
    """A word that was searched for but not found."""

    word: str
    search_count: int
    first_searched_at: datetime | None
    last_searched_at: datetime | None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "MissingWord":
        return cls(
            word=row["word"],
            search_count=row["search_count"],
            first_searched_at=parse_timestamp(row["first_searched_at"]),
            last_searched_at=parse_timestamp(row["last_searched_at"]),
        )
