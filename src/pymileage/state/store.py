"""In-memory application state store.

This is the only component allowed to change the snapshot. Every change
builds a new :class:`~pymileage.models.snapshot.AppState` and publishes it;
a snapshot that has been handed out is never modified.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Protocol, TypeVar

from pymileage._ids import new_id
from pymileage.exceptions import UnknownReferenceError
from pymileage.models.person import Person
from pymileage.models.report import DashboardStats, MonthlyReport
from pymileage.models.route import RouteDistance, SavedRoute
from pymileage.models.snapshot import AppState
from pymileage.models.trip import Trip
from pymileage.models.vehicle import Vehicle
from pymileage.report import compute_stats, generate_monthly_report

_logger = logging.getLogger(__name__)


class _Identified(Protocol):
    @property
    def id(self) -> str: ...


E = TypeVar("E", bound=_Identified)


def _find(items: Iterable[E], entity_id: str) -> E | None:
    for item in items:
        if item.id == entity_id:
            return item
    return None


def _replace(items: tuple[E, ...], entity: E) -> tuple[E, ...] | None:
    """Return *items* with the member sharing *entity*'s id swapped, or ``None`` on a miss."""
    if _find(items, entity.id) is None:
        return None
    return tuple(entity if item.id == entity.id else item for item in items)


class StateStore:
    """Single source of truth for people, vehicles, trips and saved routes.

    Lookups and updates that target an unknown id are no-ops that return
    ``None`` (or an empty tuple); they never raise.

    Parameters
    ----------
    initial : AppState or None
        Starting snapshot. Defaults to an empty one.
    on_change : callable or None
        Called with every newly published snapshot (used to schedule
        persistence).
    id_factory : callable
        Produces identifiers for new entities.
    """

    def __init__(
        self,
        initial: AppState | None = None,
        *,
        on_change: Callable[[AppState], None] | None = None,
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        self._state = initial if initial is not None else AppState()
        self._on_change = on_change
        self._id_factory = id_factory

    @property
    def snapshot(self) -> AppState:
        """The current snapshot."""
        return self._state

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _publish(self, state: AppState) -> None:
        self._state = state
        if self._on_change is not None:
            self._on_change(state)

    def _update(self, **collections: Any) -> None:
        self._publish(self._state.model_copy(update=collections))

    def _fresh_id(self, items: Iterable[_Identified]) -> str:
        used = {item.id for item in items}
        entity_id = self._id_factory()
        while entity_id in used:
            entity_id = self._id_factory()
        return entity_id

    def _require_person(self, person_id: str, entity: str) -> None:
        if self.get_person(person_id) is None:
            raise UnknownReferenceError(
                f"{entity} references unknown person {person_id!r}",
                entity=entity,
                reference_id=person_id,
            )

    def _route_distance(
        self,
        item: RouteDistance | Mapping[str, Any],
        siblings: Iterable[RouteDistance],
    ) -> RouteDistance:
        """Validate one option; a missing id or one taken by a sibling is replaced."""
        siblings = tuple(siblings)
        used = {sibling.id for sibling in siblings}
        if isinstance(item, RouteDistance):
            if item.id in used:
                return item.model_copy(update={"id": self._fresh_id(siblings)})
            return item
        fields = dict(item)
        if not fields.get("id") or fields["id"] in used:
            fields["id"] = self._fresh_id(siblings)
        return RouteDistance.model_validate(fields)

    def _unique_distances(self, items: Iterable[RouteDistance | Mapping[str, Any]]) -> tuple[RouteDistance, ...]:
        distances: list[RouteDistance] = []
        for item in items:
            distances.append(self._route_distance(item, distances))
        return tuple(distances)

    # ------------------------------------------------------------------
    # People
    # ------------------------------------------------------------------

    def add_person(self, **fields: Any) -> Person:
        person = Person.model_validate({**fields, "id": self._fresh_id(self._state.people)})
        self._update(people=(*self._state.people, person))
        _logger.debug("Added person %s", person.id)
        return person

    def update_person(self, person: Person) -> None:
        people = _replace(self._state.people, person)
        if people is None:
            _logger.debug("update_person: no person with id %s", person.id)
            return
        self._update(people=people)

    def delete_person(self, person_id: str) -> None:
        """Remove a person with their vehicles and every trip tied to either."""
        state = self._state
        removed_vehicles = {v.id for v in state.vehicles if v.person_id == person_id}
        people = tuple(p for p in state.people if p.id != person_id)
        vehicles = tuple(v for v in state.vehicles if v.person_id != person_id)
        trips = tuple(t for t in state.trips if t.person_id != person_id and t.vehicle_id not in removed_vehicles)
        if len(people) == len(state.people) and len(vehicles) == len(state.vehicles) and len(trips) == len(state.trips):
            _logger.debug("delete_person: no person with id %s", person_id)
            return
        self._update(people=people, vehicles=vehicles, trips=trips)
        _logger.debug(
            "Deleted person %s (%d vehicles, %d trips cascaded)",
            person_id,
            len(state.vehicles) - len(vehicles),
            len(state.trips) - len(trips),
        )

    def get_person(self, person_id: str) -> Person | None:
        return _find(self._state.people, person_id)

    # ------------------------------------------------------------------
    # Vehicles
    # ------------------------------------------------------------------

    def add_vehicle(self, **fields: Any) -> Vehicle:
        vehicle = Vehicle.model_validate({**fields, "id": self._fresh_id(self._state.vehicles)})
        self._require_person(vehicle.person_id, "vehicle")
        self._update(vehicles=(*self._state.vehicles, vehicle))
        _logger.debug("Added vehicle %s for person %s", vehicle.id, vehicle.person_id)
        return vehicle

    def update_vehicle(self, vehicle: Vehicle) -> None:
        vehicles = _replace(self._state.vehicles, vehicle)
        if vehicles is None:
            _logger.debug("update_vehicle: no vehicle with id %s", vehicle.id)
            return
        self._require_person(vehicle.person_id, "vehicle")
        self._update(vehicles=vehicles)

    def delete_vehicle(self, vehicle_id: str) -> None:
        """Remove a vehicle and every trip made with it."""
        state = self._state
        vehicles = tuple(v for v in state.vehicles if v.id != vehicle_id)
        trips = tuple(t for t in state.trips if t.vehicle_id != vehicle_id)
        if len(vehicles) == len(state.vehicles) and len(trips) == len(state.trips):
            _logger.debug("delete_vehicle: no vehicle with id %s", vehicle_id)
            return
        self._update(vehicles=vehicles, trips=trips)
        _logger.debug("Deleted vehicle %s (%d trips cascaded)", vehicle_id, len(state.trips) - len(trips))

    def get_vehicle(self, vehicle_id: str) -> Vehicle | None:
        return _find(self._state.vehicles, vehicle_id)

    def get_vehicles_for_person(self, person_id: str) -> tuple[Vehicle, ...]:
        return tuple(v for v in self._state.vehicles if v.person_id == person_id)

    # ------------------------------------------------------------------
    # Trips
    # ------------------------------------------------------------------

    def add_trip(self, **fields: Any) -> Trip:
        trip = Trip.model_validate({**fields, "id": self._fresh_id(self._state.trips)})
        self._require_person(trip.person_id, "trip")
        self._update(trips=(*self._state.trips, trip))
        _logger.debug("Added trip %s for person %s on %s", trip.id, trip.person_id, trip.date)
        return trip

    def update_trip(self, trip: Trip) -> None:
        trips = _replace(self._state.trips, trip)
        if trips is None:
            _logger.debug("update_trip: no trip with id %s", trip.id)
            return
        self._require_person(trip.person_id, "trip")
        self._update(trips=trips)

    def delete_trip(self, trip_id: str) -> None:
        trips = tuple(t for t in self._state.trips if t.id != trip_id)
        if len(trips) == len(self._state.trips):
            _logger.debug("delete_trip: no trip with id %s", trip_id)
            return
        self._update(trips=trips)

    # ------------------------------------------------------------------
    # Saved routes
    # ------------------------------------------------------------------

    def add_saved_route(self, **fields: Any) -> SavedRoute:
        """Add a saved route.

        ``distances`` items may be :class:`RouteDistance` instances or
        mappings with ``label`` and ``distance``. Options without an ``id``,
        or repeating the id of an earlier option, are given a fresh one.
        """
        distances = self._unique_distances(fields.pop("distances", ()))
        route = SavedRoute.model_validate(
            {**fields, "distances": distances, "id": self._fresh_id(self._state.saved_routes)}
        )
        self._update(saved_routes=(*self._state.saved_routes, route))
        _logger.debug("Added saved route %s with %d distance options", route.id, len(route.distances))
        return route

    def update_saved_route(self, route: SavedRoute) -> None:
        distances = self._unique_distances(route.distances)
        if distances != route.distances:
            route = route.model_copy(update={"distances": distances})
        routes = _replace(self._state.saved_routes, route)
        if routes is None:
            _logger.debug("update_saved_route: no route with id %s", route.id)
            return
        self._update(saved_routes=routes)

    def delete_saved_route(self, route_id: str) -> None:
        """Remove a saved route together with its distance options."""
        routes = tuple(r for r in self._state.saved_routes if r.id != route_id)
        if len(routes) == len(self._state.saved_routes):
            _logger.debug("delete_saved_route: no route with id %s", route_id)
            return
        self._update(saved_routes=routes)

    def get_saved_route(self, route_id: str) -> SavedRoute | None:
        return _find(self._state.saved_routes, route_id)

    # ------------------------------------------------------------------
    # Route distances (scoped to one saved route)
    # ------------------------------------------------------------------

    def add_route_distance(self, route_id: str, **fields: Any) -> RouteDistance | None:
        route = self.get_saved_route(route_id)
        if route is None:
            _logger.debug("add_route_distance: no route with id %s", route_id)
            return None
        option = RouteDistance.model_validate({**fields, "id": self._fresh_id(route.distances)})
        self.update_saved_route(route.model_copy(update={"distances": (*route.distances, option)}))
        return option

    def update_route_distance(self, route_id: str, distance: RouteDistance) -> None:
        route = self.get_saved_route(route_id)
        if route is None:
            _logger.debug("update_route_distance: no route with id %s", route_id)
            return
        distances = _replace(route.distances, distance)
        if distances is None:
            _logger.debug("update_route_distance: route %s has no option %s", route_id, distance.id)
            return
        self.update_saved_route(route.model_copy(update={"distances": distances}))

    def delete_route_distance(self, route_id: str, distance_id: str) -> None:
        route = self.get_saved_route(route_id)
        if route is None:
            _logger.debug("delete_route_distance: no route with id %s", route_id)
            return
        distances = tuple(d for d in route.distances if d.id != distance_id)
        if len(distances) == len(route.distances):
            return
        self.update_saved_route(route.model_copy(update={"distances": distances}))

    def get_route_distance(self, route_id: str, distance_id: str) -> RouteDistance | None:
        route = self.get_saved_route(route_id)
        if route is None:
            return None
        return route.get_distance(distance_id)

    # ------------------------------------------------------------------
    # Read-side queries
    # ------------------------------------------------------------------

    def generate_monthly_report(self, person_id: str, month: int, year: int) -> MonthlyReport | None:
        """See :func:`pymileage.report.generate_monthly_report`."""
        return generate_monthly_report(self._state, person_id, month, year)

    def stats(self, today: dt.date | None = None) -> DashboardStats:
        return compute_stats(self._state, today or dt.date.today())
