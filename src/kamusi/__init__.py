"""
Kamusi - Swahili dictionary lookup.

A thin CLI over a SQLite word store:
- kamusi.db: store lifecycle and connection pool
- kamusi.app: lookup service and missing-word tracking
- kamusi.cli: the ``km`` command
"""

__version__ = "0.1.0"

from kamusi.app.lookup import LookupService
from kamusi.app.models import DictionaryEntry, MissingWord
from kamusi.app.tracker import MissingWordTracker
from kamusi.db import Store
from kamusi.errors import KamusiError, StoreError, WordNotFoundError

__all__ = [
    "DictionaryEntry",
    "KamusiError",
    "LookupService",
    "MissingWord",
    "MissingWordTracker",
    "Store",
    "StoreError",
    "WordNotFoundError",
    "__version__",
]
