"""Saved-route schema migration.

Older documents stored a single ``distance`` number per saved route; the
current shape is a ``distances`` list of labelled options. Rules, first
match wins:

1. ``distances`` is a list → unchanged.
2. ``distance`` is a non-negative number → one ``"Standard Route"`` option
   with a fresh id.
3. anything else → empty ``distances``; the record is kept so it can be
   repaired by hand.

The migration never raises and never drops a record. Running it again on
its own output is a no-op (rule 1).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping
from typing import Any

from pymileage._constants import STANDARD_ROUTE_LABEL
from pymileage._ids import new_id

_logger = logging.getLogger(__name__)


def _legacy_distance(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


def migrate_saved_route(record: Any, *, id_factory: Callable[[], str] = new_id) -> Any:
    """Normalize one persisted saved-route record to the current shape.

    Non-mapping records are returned as-is; model validation decides what to
    do with them.
    """
    if not isinstance(record, Mapping):
        return record

    if isinstance(record.get("distances"), (list, tuple)):
        return record

    migrated = dict(record)
    legacy = _legacy_distance(record.get("distance"))
    if legacy is not None:
        migrated["distances"] = [{"id": id_factory(), "label": STANDARD_ROUTE_LABEL, "distance": legacy}]
        _logger.debug("Migrated legacy single-distance route %s", record.get("id"))
    else:
        migrated["distances"] = []
        _logger.debug("Saved route %s has no distance information, keeping it empty", record.get("id"))
    return migrated


def migrate_saved_routes(records: Any, *, id_factory: Callable[[], str] = new_id) -> list[Any]:
    """Apply :func:`migrate_saved_route` to every record of a persisted list."""
    if not isinstance(records, (list, tuple)):
        return []
    return [migrate_saved_route(record, id_factory=id_factory) for record in records]
