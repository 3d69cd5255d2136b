"""
Typed errors for the dictionary core.

The core raises, the CLI formats. Every error carries a category and an
optional chained cause so that logs can show what actually failed:

    KamusiError
    ├── StoreError              (DATABASE)
    │   ├── ConnectionFailedError
    │   ├── SchemaCreationError
    │   ├── CloseError
    │   └── TrackingError
    └── WordNotFoundError       (NOT_FOUND)

``WordNotFoundError`` is not a ``StoreError``: callers can always tell a
missing word from a failing store.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories used for classification in logs and the CLI."""

    DATABASE = "DATABASE"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL = "INTERNAL"


class KamusiError(Exception):
    """Base class for all dictionary errors."""

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# STORE ERRORS
# =============================================================================


class StoreError(KamusiError):
    """Generic query or scan failure against the word store."""

    default_category = ErrorCategory.DATABASE


class ConnectionFailedError(StoreError):
    """Store could not be opened, or no connection is available."""


class SchemaCreationError(StoreError):
    """Creating the schema failed."""


class CloseError(StoreError):
    """Releasing the store failed."""


class TrackingError(StoreError):
    """Recording a missing word failed."""


# =============================================================================
# LOOKUP ERRORS
# =============================================================================


class WordNotFoundError(KamusiError):
    """The word has no entry in the dictionary."""

    default_category = ErrorCategory.NOT_FOUND

    def __init__(self, word: str):
        super().__init__(f"word '{word}' not found")
        self.word = word

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["word"] = self.word
        return result
