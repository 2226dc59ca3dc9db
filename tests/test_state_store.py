from __future__ import annotations

from datetime import date

import pytest

from pymileage.exceptions import UnknownReferenceError
from pymileage.models import AppState, PersonRole, RouteDistance
from pymileage.state.store import StateStore


def _trip(store: StateStore, person_id: str, vehicle_id: str, day: str = "2024-03-10", **overrides):
    fields = {
        "person_id": person_id,
        "vehicle_id": vehicle_id,
        "date": day,
        "origin": "Treviso",
        "destination": "Vicenza",
        "distance": 20,
        "is_round_trip": False,
    }
    fields.update(overrides)
    return store.add_trip(**fields)


# ------------------------------------------------------------------
# Creation and identity
# ------------------------------------------------------------------


def test_add_assigns_unique_ids(store: StateStore, marco, fiat) -> None:
    for _ in range(20):
        _trip(store, marco.id, fiat.id)
    ids = [t.id for t in store.snapshot.trips]
    assert len(ids) == len(set(ids)) == 20


def test_colliding_id_factory_still_yields_unique_ids() -> None:
    values = iter(["a", "a", "a", "b"])
    store = StateStore(id_factory=lambda: next(values))
    first = store.add_person(name="A", surname="A", role=PersonRole.EMPLOYEE, email="a@x.it")
    second = store.add_person(name="B", surname="B", role=PersonRole.EMPLOYEE, email="b@x.it")
    assert (first.id, second.id) == ("a", "b")


def test_add_returns_created_entity(store: StateStore, marco) -> None:
    assert store.get_person(marco.id) == marco
    assert store.snapshot.people == (marco,)


def test_add_vehicle_for_unknown_person_rejected(store: StateStore) -> None:
    with pytest.raises(UnknownReferenceError) as exc_info:
        store.add_vehicle(person_id="ghost", make="Fiat", model="Panda", plate="X", reimbursement_rate=0.3)
    assert exc_info.value.reference_id == "ghost"
    assert store.snapshot.vehicles == ()


def test_add_trip_for_unknown_person_rejected(store: StateStore, fiat) -> None:
    with pytest.raises(UnknownReferenceError):
        _trip(store, "ghost", fiat.id)


# ------------------------------------------------------------------
# Immutable snapshots
# ------------------------------------------------------------------


def test_previous_snapshot_unchanged_after_mutation(store: StateStore, marco, fiat) -> None:
    before = store.snapshot
    _trip(store, marco.id, fiat.id)
    store.delete_vehicle(fiat.id)
    assert before.trips == ()
    assert before.vehicles == (fiat,)
    assert store.snapshot is not before


def test_on_change_receives_every_new_snapshot() -> None:
    published: list[AppState] = []
    store = StateStore(on_change=published.append)
    person = store.add_person(name="A", surname="B", role=PersonRole.TEACHER, email="a@b.it")
    store.update_person(person.model_copy(update={"email": "new@b.it"}))
    assert len(published) == 2
    assert published[-1] is store.snapshot
    assert published[0].people[0].email == "a@b.it"


# ------------------------------------------------------------------
# Updates
# ------------------------------------------------------------------


def test_update_replaces_matching_member(store: StateStore, marco) -> None:
    store.update_person(marco.model_copy(update={"surname": "Bianchi"}))
    person = store.get_person(marco.id)
    assert person is not None and person.surname == "Bianchi"


def test_update_unknown_id_is_silent_noop(marco) -> None:
    published: list[AppState] = []
    store = StateStore(on_change=published.append)
    store.update_person(marco)
    assert store.snapshot.people == ()
    assert published == []


def test_update_trip_to_unknown_person_rejected(store: StateStore, marco, fiat) -> None:
    trip = _trip(store, marco.id, fiat.id)
    with pytest.raises(UnknownReferenceError):
        store.update_trip(trip.model_copy(update={"person_id": "ghost"}))
    assert store.snapshot.trips == (trip,)


def test_update_trip_keeps_one_way_distance(store: StateStore, marco, fiat) -> None:
    trip = _trip(store, marco.id, fiat.id, distance=10)
    store.update_trip(trip.model_copy(update={"is_round_trip": True}))
    stored = store.snapshot.trips[0]
    assert stored.distance == 10
    assert stored.effective_distance == 20


# ------------------------------------------------------------------
# Cascading deletes
# ------------------------------------------------------------------


def test_delete_person_cascades_to_vehicles_and_trips(store: StateStore, marco, fiat) -> None:
    giulia = store.add_person(name="Giulia", surname="Bianchi", role=PersonRole.EMPLOYEE, email="g@itfv.it")
    clio = store.add_vehicle(
        person_id=giulia.id, make="Renault", model="Clio", plate="EF456GH", reimbursement_rate=0.38
    )
    _trip(store, marco.id, fiat.id)
    _trip(store, marco.id, fiat.id, is_round_trip=True)
    kept = _trip(store, giulia.id, clio.id)

    store.delete_person(marco.id)

    state = store.snapshot
    assert all(v.person_id != marco.id for v in state.vehicles)
    assert all(t.person_id != marco.id for t in state.trips)
    assert state.trips == (kept,)
    assert state.vehicles == (clio,)


def test_delete_person_removes_other_trips_on_their_vehicles(store: StateStore, marco, fiat) -> None:
    giulia = store.add_person(name="Giulia", surname="Bianchi", role=PersonRole.EMPLOYEE, email="g@itfv.it")
    _trip(store, giulia.id, fiat.id)

    store.delete_person(marco.id)

    assert all(t.vehicle_id != fiat.id for t in store.snapshot.trips)


def test_delete_vehicle_cascades_to_trips(store: StateStore, marco, fiat) -> None:
    panda = store.add_vehicle(person_id=marco.id, make="Fiat", model="Panda", plate="ZZ999ZZ", reimbursement_rate=0.3)
    _trip(store, marco.id, fiat.id)
    other = _trip(store, marco.id, panda.id)

    store.delete_vehicle(fiat.id)

    assert all(t.vehicle_id != fiat.id for t in store.snapshot.trips)
    assert store.snapshot.trips == (other,)
    assert store.get_person(marco.id) == marco


def test_delete_trip_has_no_cascade(store: StateStore, marco, fiat) -> None:
    trip = _trip(store, marco.id, fiat.id)
    store.delete_trip(trip.id)
    assert store.snapshot.trips == ()
    assert store.get_vehicle(fiat.id) == fiat


def test_delete_unknown_ids_publish_nothing() -> None:
    published: list[AppState] = []
    store = StateStore(on_change=published.append)
    store.delete_person("nope")
    store.delete_vehicle("nope")
    store.delete_trip("nope")
    store.delete_saved_route("nope")
    assert published == []


# ------------------------------------------------------------------
# Saved routes and their distances
# ------------------------------------------------------------------


def test_add_saved_route_assigns_missing_distance_ids(store: StateStore) -> None:
    route = store.add_saved_route(
        name="Treviso - Vicenza",
        origin="Treviso",
        destination="Vicenza",
        distances=[{"label": "Strada Normale", "distance": 65.2}, {"label": "Autostrada", "distance": 58.7}],
    )
    assert [d.label for d in route.distances] == ["Strada Normale", "Autostrada"]
    assert all(d.id for d in route.distances)
    assert route.distances[0].id != route.distances[1].id


def test_route_distances_keep_insertion_order(store: StateStore) -> None:
    route = store.add_saved_route(name="A-B", origin="A", destination="B")
    for label, km in (("Zeta", 9.0), ("Alfa", 1.0), ("Media", 5.0)):
        store.add_route_distance(route.id, label=label, distance=km)
    stored = store.get_saved_route(route.id)
    assert stored is not None
    assert [d.label for d in stored.distances] == ["Zeta", "Alfa", "Media"]


def test_update_and_delete_route_distance(store: StateStore) -> None:
    route = store.add_saved_route(name="A-B", origin="A", destination="B")
    option = store.add_route_distance(route.id, label="Normale", distance=10)
    assert option is not None

    store.update_route_distance(route.id, RouteDistance(id=option.id, label="Normale", distance=12))
    updated = store.get_route_distance(route.id, option.id)
    assert updated is not None and updated.distance == 12

    store.delete_route_distance(route.id, option.id)
    assert store.get_route_distance(route.id, option.id) is None


def test_route_distance_ops_on_unknown_route_are_noops(store: StateStore) -> None:
    route = store.add_saved_route(name="A-B", origin="A", destination="B", distances=[{"label": "x", "distance": 1}])
    before = store.snapshot

    assert store.add_route_distance("missing", label="y", distance=2) is None
    store.update_route_distance("missing", RouteDistance(id=route.distances[0].id, label="z", distance=3))
    store.delete_route_distance("missing", route.distances[0].id)

    assert store.snapshot is before


def test_delete_saved_route_removes_its_distances(store: StateStore) -> None:
    route = store.add_saved_route(name="A-B", origin="A", destination="B", distances=[{"label": "x", "distance": 1}])
    distance_id = route.distances[0].id
    store.delete_saved_route(route.id)
    assert store.get_saved_route(route.id) is None
    assert store.get_route_distance(route.id, distance_id) is None


# ------------------------------------------------------------------
# Lookups
# ------------------------------------------------------------------


def test_lookups_return_none_on_miss(store: StateStore) -> None:
    assert store.get_person("x") is None
    assert store.get_vehicle("x") is None
    assert store.get_saved_route("x") is None
    assert store.get_route_distance("x", "y") is None
    assert store.get_vehicles_for_person("x") == ()


def test_vehicles_for_person(store: StateStore, marco, fiat) -> None:
    giulia = store.add_person(name="Giulia", surname="Bianchi", role=PersonRole.EMPLOYEE, email="g@itfv.it")
    store.add_vehicle(person_id=giulia.id, make="Renault", model="Clio", plate="EF456GH", reimbursement_rate=0.38)
    assert store.get_vehicles_for_person(marco.id) == (fiat,)


def test_stats_counts_current_month(store: StateStore, marco, fiat) -> None:
    _trip(store, marco.id, fiat.id, day="2024-03-01")
    _trip(store, marco.id, fiat.id, day="2024-03-31")
    _trip(store, marco.id, fiat.id, day="2024-04-01")
    stats = store.stats(date(2024, 3, 15))
    assert (stats.people, stats.trips, stats.trips_this_month, stats.saved_routes) == (1, 3, 2, 0)


def test_add_saved_route_replaces_repeated_option_ids(store: StateStore) -> None:
    option = RouteDistance(id="d1", label="Normale", distance=10)
    route = store.add_saved_route(
        name="A-B",
        origin="A",
        destination="B",
        distances=[option, option, {"id": "d1", "label": "Autostrada", "distance": 8}],
    )
    ids = [d.id for d in route.distances]
    assert ids[0] == "d1"
    assert len(set(ids)) == 3
    assert [d.label for d in route.distances] == ["Normale", "Normale", "Autostrada"]


def test_update_saved_route_replaces_repeated_option_ids(store: StateStore) -> None:
    route = store.add_saved_route(name="A-B", origin="A", destination="B", distances=[{"label": "x", "distance": 1}])
    duplicate = route.distances[0]
    store.update_saved_route(route.model_copy(update={"distances": (duplicate, duplicate)}))

    stored = store.get_saved_route(route.id)
    assert stored is not None
    assert len({d.id for d in stored.distances}) == 2

    store.delete_route_distance(route.id, duplicate.id)
    stored = store.get_saved_route(route.id)
    assert stored is not None and len(stored.distances) == 1
