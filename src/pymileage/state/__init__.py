"""State/store layer.

This package is the single source of truth for people, vehicles, trips and
saved routes. Persisted documents are normalized by :mod:`.migration` before
they reach the :class:`~pymileage.state.store.StateStore`.
"""

from pymileage.state.migration import migrate_saved_route, migrate_saved_routes
from pymileage.state.seed import seed_state
from pymileage.state.store import StateStore

__all__ = [
    "StateStore",
    "migrate_saved_route",
    "migrate_saved_routes",
    "seed_state",
]
