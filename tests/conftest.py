"""
Shared pytest fixtures for kamusi tests.

This module provides:
- Settings isolation (no KAMUSI_* variables leak in from the environment)
- A temporary on-disk store with the schema applied
- Helpers for seeding dictionary entries and missing-word rows
- A deterministic clock for tracker timestamps
"""

import sys
from collections.abc import Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

# Ensure kamusi package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from kamusi.app.lookup import LookupService
from kamusi.app.tracker import MissingWordTracker
from kamusi.config import Settings, reset_settings
from kamusi.db import Store

SAMPLE_WORDS = [
    ("kitabu", "book", "buku", None),
    ("jua", "sun; to know", None, "kujua, najua, unajua"),
    ("juu", "up, above", "", None),
    ("paa", "roof; gazelle", None, None),
    ("Habari", "news; how are you", "taarifa", None),
]


# =============================================================================
# Settings Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop KAMUSI_* variables and the cached settings around every test."""
    for name in (
        "KAMUSI_DB_PATH",
        "KAMUSI_LOG_LEVEL",
        "KAMUSI_LOG_FORMAT",
        "KAMUSI_SEARCH_WORKERS",
        "KAMUSI_MAX_OPEN_CONNECTIONS",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


# =============================================================================
# Store Fixtures
# =============================================================================


def seed_words(store: Store, rows: list[tuple[str, str, str | None, str | None]]) -> None:
    """Insert (word, meaning, synonyms, conjugation) rows into ``words``."""
    with store.connection() as conn:
        conn.executemany(
            "INSERT INTO words (word, meaning, synonyms, conjugation) VALUES (?, ?, ?, ?)",
            rows,
        )


def seed_missing(store: Store, counts: dict[str, int]) -> None:
    """Insert missing-word rows with fixed search counts."""
    now = datetime(2024, 1, 1, tzinfo=UTC).isoformat()
    with store.connection() as conn:
        conn.executemany(
            """
            INSERT INTO missing_words (word, search_count, first_searched_at, last_searched_at)
            VALUES (?, ?, ?, ?)
            """,
            [(word, count, now, now) for word, count in counts.items()],
        )


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "kamusi.db"


@pytest.fixture
def settings(db_path: Path) -> Settings:
    return Settings(db_path=db_path)


@pytest.fixture
def store(settings: Settings) -> Iterator[Store]:
    """Opened store with the schema applied and no rows."""
    store = Store(settings)
    store.init_schema()
    yield store
    store.close()


@pytest.fixture
def seeded_store(store: Store) -> Store:
    seed_words(store, SAMPLE_WORDS)
    return store


@pytest.fixture
def service(seeded_store: Store) -> LookupService:
    return LookupService(seeded_store, max_workers=4)


# =============================================================================
# Clock
# =============================================================================


class StepClock:
    """Returns a new timestamp, one minute apart, on every call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.start = start or datetime(2024, 6, 1, 12, 0, tzinfo=UTC)
        self.calls: list[datetime] = []

    def __call__(self) -> datetime:
        now = self.start + timedelta(minutes=len(self.calls))
        self.calls.append(now)
        return now


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def tracker(seeded_store: Store, clock: StepClock) -> MissingWordTracker:
    return MissingWordTracker(seeded_store, clock=clock)
