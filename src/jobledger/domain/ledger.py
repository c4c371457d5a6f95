"""Ledger state holder.

The ledger owns the current AppData snapshot. Services never mutate a
snapshot; they build a new one and commit it. Each commit is saved through
the repository and then handed to subscribers, which re-read what they are
given instead of tracking individual changes.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, TYPE_CHECKING

from jobledger.domain.entities import AppData

if TYPE_CHECKING:
    # Storage imports domain entities; import only for annotations
    from jobledger.storage.repository import LedgerRepository

logger = logging.getLogger(__name__)

Listener = Callable[[AppData], None]


class Ledger:
    """Current state of jobs and companies."""

    def __init__(
        self,
        repository: Optional[LedgerRepository] = None,
        data: Optional[AppData] = None,
    ):
        """Initialize ledger.

        Args:
            repository: Persistence adapter. Without one the ledger is
                memory-only.
            data: Initial snapshot. Defaults to whatever the repository
                loads, or an empty aggregate.
        """
        self.repository = repository
        if data is None:
            data = repository.load() if repository is not None else AppData()
        self._data = data
        self._listeners: list[Listener] = []

    @property
    def data(self) -> AppData:
        """Latest snapshot."""
        return self._data

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback for new snapshots.

        Returns:
            Function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def commit(self, data: AppData) -> None:
        """Replace the snapshot, persist it and notify subscribers.

        Persistence is best effort: a failed save is logged by the
        repository and the new snapshot stays authoritative for the session.
        """
        self._data = data
        if self.repository is not None:
            self.repository.save(data)
        logger.debug("Committed %d jobs, %d companies", len(data.jobs), len(data.companies))
        for listener in list(self._listeners):
            listener(data)

    def reload(self) -> AppData:
        """Discard in-memory state and re-read it from the repository."""
        if self.repository is not None:
            self._data = self.repository.load()
        return self._data
