"""Application lifecycle: load, store, debounced write-back."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from pymileage.config import MileageConfig
from pymileage.exceptions import MileageError
from pymileage.persistence import DebouncedSaver, StorageSlot, load_state, slot_from_config
from pymileage.state.store import StateStore

_logger = logging.getLogger(__name__)


class MileageBook:
    """Owns the store for the lifetime of the application.

    Usage::

        async with MileageBook(MileageConfig.from_env()) as book:
            person = book.store.add_person(...)
            report = book.store.generate_monthly_report(person.id, 2, 2024)

    On exit any pending save is written immediately.
    """

    def __init__(self, config: MileageConfig | None = None, *, slot: StorageSlot | None = None) -> None:
        self._config = config or MileageConfig()
        self._slot = slot
        self._saver: DebouncedSaver | None = None
        self._store: StateStore | None = None

    async def __aenter__(self) -> MileageBook:
        slot = self._slot if self._slot is not None else slot_from_config(self._config)
        self._slot = slot
        self._saver = DebouncedSaver(slot, delay=self._config.save_delay, loop=asyncio.get_running_loop())
        self._store = StateStore(load_state(slot), on_change=self._saver.schedule)
        _logger.debug("Opened mileage book (key=%s)", self._config.storage_key)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.close()

    def close(self) -> None:
        """Flush the pending save and release the store."""
        if self._saver is not None:
            self._saver.flush()
        self._saver = None
        self._store = None

    @property
    def store(self) -> StateStore:
        if self._store is None:
            raise MileageError("Book not opened. Use 'async with MileageBook(...) as book:'")
        return self._store

    @property
    def saver(self) -> DebouncedSaver:
        if self._saver is None:
            raise MileageError("Book not opened. Use 'async with MileageBook(...) as book:'")
        return self._saver
