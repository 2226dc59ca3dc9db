"""Sample data installed when nothing has been persisted yet."""

from __future__ import annotations

from collections.abc import Callable

from pymileage._ids import new_id
from pymileage.models.person import Person, PersonRole
from pymileage.models.route import RouteDistance, SavedRoute
from pymileage.models.snapshot import AppState
from pymileage.models.vehicle import Vehicle

_HEAD_OFFICE = "Via della Quercia 2/B, Treviso"


def seed_state(*, id_factory: Callable[[], str] = new_id) -> AppState:
    """Build the initial snapshot: three people, two vehicles, two routes, no trips."""
    people = (
        Person(id="1", name="Marco", surname="Rossi", role=PersonRole.TEACHER, email="marco.rossi@itfv.it"),
        Person(id="2", name="Giulia", surname="Bianchi", role=PersonRole.EMPLOYEE, email="giulia.bianchi@itfv.it"),
        Person(
            id="3",
            name="Alessandro",
            surname="Verdi",
            role=PersonRole.ADMINISTRATOR,
            email="alessandro.verdi@itfv.it",
        ),
    )
    vehicles = (
        Vehicle(id="1", person_id="1", make="Fiat", model="500", plate="AB123CD", reimbursement_rate=0.35),
        Vehicle(id="2", person_id="2", make="Renault", model="Clio", plate="EF456GH", reimbursement_rate=0.38),
    )
    saved_routes = (
        SavedRoute(
            id="1",
            name="Sede Treviso - Sede Vicenza",
            origin=_HEAD_OFFICE,
            destination="Via Pola 30, Torre di Quartesolo, Vicenza",
            distances=(
                RouteDistance(id=id_factory(), label="Strada Normale", distance=65.2),
                RouteDistance(id=id_factory(), label="Autostrada", distance=58.7),
            ),
        ),
        SavedRoute(
            id="2",
            name="Sede Treviso - Sede Marcon",
            origin=_HEAD_OFFICE,
            destination="Viale della Stazione 3, Marcon",
            distances=(
                RouteDistance(id=id_factory(), label="Strada Normale", distance=25.7),
                RouteDistance(id=id_factory(), label="Tangenziale", distance=23.4),
            ),
        ),
    )
    return AppState(people=people, vehicles=vehicles, trips=(), saved_routes=saved_routes)
