"""Per-invocation CLI state: one store and one lookup service, opened lazily."""

from kamusi.app.lookup import LookupService
from kamusi.db import Store


class CliState:
    """
    Holds the store for the lifetime of a single ``km`` invocation.

    Nothing touches the database until a command asks for it, so
    ``--help`` and ``--version`` work without a store.
    """

    def __init__(self) -> None:
        self._store: Store | None = None
        self._service: LookupService | None = None

    @property
    def store(self) -> Store:
        if self._store is None:
            self._store = Store()
        return self._store

    @property
    def service(self) -> LookupService:
        """Lookup service over an initialized schema."""
        if self._service is None:
            self.store.init_schema()
            self._service = LookupService(self.store)
        return self._service

    def close(self) -> None:
        if self._store is not None:
            self._store.close()
