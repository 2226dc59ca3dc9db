"""Durable save/restore of the whole snapshot to one key-value slot.

The slot holds a single JSON document ``{people, vehicles, trips,
savedRoutes}``; it is always read and written whole. Writes are debounced
by :class:`DebouncedSaver` so bursts of edits produce one write.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Protocol

from pydantic import ValidationError

from pymileage._constants import SAVE_DELAY_SECONDS, STORAGE_KEY
from pymileage._ids import new_id
from pymileage.config import MileageConfig
from pymileage.exceptions import MileageStorageError
from pymileage.models.route import RouteDistance, SavedRoute
from pymileage.models.snapshot import AppState
from pymileage.state.migration import migrate_saved_routes
from pymileage.state.seed import seed_state

_logger = logging.getLogger(__name__)

_ROUTES_KEY = "savedRoutes"
_ROUTE_TEXT_FIELDS = ("name", "origin", "destination")


class StorageSlot(Protocol):
    """Structural interface of a persistence slot.

    ``read`` returns ``None`` when nothing has been stored yet.
    """

    def read(self) -> str | None: ...

    def write(self, data: str) -> None: ...


class MemorySlot:
    """Slot kept in process memory."""

    def __init__(self, data: str | None = None) -> None:
        self.data = data

    def read(self) -> str | None:
        return self.data

    def write(self, data: str) -> None:
        self.data = data


class FileSlot:
    """Slot stored as ``<directory>/<key>.json``.

    Writes go to a temporary file that replaces the target, so a reader
    never sees a half-written document.
    """

    def __init__(self, directory: Path | str, key: str = STORAGE_KEY) -> None:
        self.key = key
        self.path = Path(directory) / f"{key}.json"

    def read(self) -> str | None:
        try:
            # Undecodable bytes become replacement chars and fail JSON parsing.
            return self.path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise MileageStorageError(f"Cannot read {self.path}: {exc}", key=self.key) from exc

    def write(self, data: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(data)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


def slot_from_config(config: MileageConfig) -> StorageSlot:
    """File slot under ``config.storage_dir``, or a memory slot when unset."""
    if config.storage_dir is None:
        return MemorySlot()
    return FileSlot(config.storage_dir, config.storage_key)


def dump_state(state: AppState) -> str:
    """Serialize a snapshot to the persisted JSON document."""
    return json.dumps(state.to_document(), ensure_ascii=False, separators=(",", ":"))


def _fresh_id(used: set[str], id_factory: Callable[[], str]) -> str:
    entity_id = id_factory()
    while entity_id in used:
        entity_id = id_factory()
    return entity_id


def _record_id(value: Any) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str) and value:
        return value
    return None


def _parse_route_distances(route_id: str, items: Any, id_factory: Callable[[], str]) -> tuple[RouteDistance, ...]:
    options: list[RouteDistance] = []
    used: set[str] = set()
    for item in items if isinstance(items, (list, tuple)) else ():
        fields = dict(item) if isinstance(item, Mapping) else item
        if isinstance(fields, dict):
            option_id = _record_id(fields.get("id"))
            if option_id is None or option_id in used:
                option_id = _fresh_id(used, id_factory)
            fields["id"] = option_id
        try:
            option = RouteDistance.model_validate(fields)
        except ValidationError as exc:
            _logger.warning(
                "Dropping invalid distance option of saved route %s (%d errors)", route_id, exc.error_count()
            )
            continue
        used.add(option.id)
        options.append(option)
    return tuple(options)


def parse_saved_routes(records: Any, *, id_factory: Callable[[], str] = new_id) -> tuple[SavedRoute, ...]:
    """Validate migrated saved-route records one at a time.

    A record missing ``name``, ``origin`` or ``destination`` is kept with an
    empty string so it can be repaired by hand, and invalid distance options
    are dropped from it. Missing or repeated ids are replaced. Only entries
    that are not objects at all are skipped.
    """
    routes: list[SavedRoute] = []
    used: set[str] = set()
    for record in records if isinstance(records, (list, tuple)) else ():
        if not isinstance(record, Mapping):
            _logger.warning("Skipping saved route that is not an object (%s)", type(record).__name__)
            continue
        fields = dict(record)
        route_id = _record_id(fields.get("id"))
        if route_id is None or route_id in used:
            route_id = _fresh_id(used, id_factory)
        fields["id"] = route_id
        for key in _ROUTE_TEXT_FIELDS:
            if not isinstance(fields.get(key), str):
                fields[key] = ""
        fields["distances"] = _parse_route_distances(route_id, fields.get("distances"), id_factory)
        used.add(route_id)
        routes.append(SavedRoute.model_validate(fields))
    return tuple(routes)


def parse_state(document: Any, *, id_factory: Callable[[], str] = new_id) -> AppState:
    """Validate a decoded document, migrating legacy saved routes first.

    Saved routes are repaired record by record (see :func:`parse_saved_routes`)
    and never cause the rest of the document to be discarded. Falls back to
    the seed snapshot when the document is not an object or its people,
    vehicles or trips are invalid.
    """
    if not isinstance(document, dict):
        _logger.warning("Persisted state is not an object (%s), using sample data", type(document).__name__)
        return seed_state(id_factory=id_factory)

    working = dict(document)
    raw_routes = working.pop(_ROUTES_KEY, None)
    snake_routes = working.pop("saved_routes", None)
    if raw_routes is None:
        raw_routes = snake_routes
    try:
        state = AppState.model_validate(working)
    except ValidationError as exc:
        _logger.warning("Persisted state is invalid (%d errors), using sample data", exc.error_count())
        _logger.debug("Validation errors: %s", exc)
        return seed_state(id_factory=id_factory)

    migrated = migrate_saved_routes(raw_routes, id_factory=id_factory)
    return state.model_copy(update={"saved_routes": parse_saved_routes(migrated, id_factory=id_factory)})


def load_state(slot: StorageSlot, *, id_factory: Callable[[], str] = new_id) -> AppState:
    """Read the initial snapshot from *slot*.

    An empty slot yields the seed snapshot. A corrupt document is logged and
    also replaced by the seed snapshot; it is overwritten by the next save.
    """
    raw = slot.read()
    if raw is None:
        _logger.debug("No persisted state, using sample data")
        return seed_state(id_factory=id_factory)
    try:
        document = json.loads(raw)
    except ValueError as exc:
        _logger.warning("Error parsing saved state: %s", exc)
        return seed_state(id_factory=id_factory)
    return parse_state(document, id_factory=id_factory)


class DebouncedSaver:
    """Write the latest snapshot once changes have been quiet for *delay* seconds.

    Each :meth:`schedule` call cancels the pending timer and arms a new one,
    so only the last snapshot of a burst is written. The timer is an
    ``asyncio`` ``call_later`` handle on the event loop; no threads are used.
    """

    def __init__(
        self,
        slot: StorageSlot,
        *,
        delay: float = SAVE_DELAY_SECONDS,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._slot = slot
        self._delay = delay
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._pending: AppState | None = None
        self.writes = 0

    @property
    def pending(self) -> bool:
        """Whether a save is armed and not yet written."""
        return self._handle is not None

    def schedule(self, state: AppState) -> None:
        """Arm (or re-arm) the quiet-window timer for *state*.

        Must be called with an event loop running, or after passing ``loop``.
        """
        loop = self._loop or asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()
        self._pending = state
        self._handle = loop.call_later(self._delay, self._fire)

    def flush(self) -> None:
        """Write the pending snapshot immediately, if any."""
        if self._handle is None:
            return
        self._handle.cancel()
        self._fire()

    def cancel(self) -> None:
        """Drop the pending snapshot without writing it."""
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._pending = None

    def _fire(self) -> None:
        self._handle = None
        state, self._pending = self._pending, None
        if state is None:
            return
        self._slot.write(dump_state(state))
        self.writes += 1
        _logger.debug("Persisted state (%d trips, write #%d)", len(state.trips), self.writes)
