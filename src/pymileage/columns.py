"""Column descriptors for tabular views.

A table is described by a sequence of :class:`Column` objects, each with
an explicit accessor. Entities are never read through field names supplied
at runtime.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from pymileage.formatting import format_date
from pymileage.models.person import Person
from pymileage.models.snapshot import AppState
from pymileage.models.trip import Trip
from pymileage.models.vehicle import Vehicle

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Column(Generic[T]):
    """A table column: header text plus a function producing the cell."""

    header: str
    accessor: Callable[[T], str]


def render_rows(items: Iterable[T], columns: Sequence[Column[T]]) -> list[list[str]]:
    """Return one row of cell strings per item, in column order."""
    return [[column.accessor(item) for column in columns] for item in items]


def headers(columns: Sequence[Column[T]]) -> list[str]:
    return [column.header for column in columns]


PEOPLE_COLUMNS: tuple[Column[Person], ...] = (
    Column("Nome", lambda p: p.name),
    Column("Cognome", lambda p: p.surname),
    Column("Ruolo", lambda p: p.role.value),
    Column("Email", lambda p: p.email),
)

VEHICLE_COLUMNS: tuple[Column[Vehicle], ...] = (
    Column("Marca", lambda v: v.make),
    Column("Modello", lambda v: v.model),
    Column("Targa", lambda v: v.plate),
    Column("Rimborso (€/km)", lambda v: f"{v.reimbursement_rate:.2f}"),
)


def trip_columns(state: AppState) -> tuple[Column[Trip], ...]:
    """Trip columns; person and vehicle cells are resolved against *state*."""
    people = {p.id: p for p in state.people}
    vehicles = {v.id: v for v in state.vehicles}

    def _person(trip: Trip) -> str:
        person = people.get(trip.person_id)
        return person.full_name if person is not None else "N/D"

    def _vehicle(trip: Trip) -> str:
        vehicle = vehicles.get(trip.vehicle_id)
        return vehicle.label if vehicle is not None else "N/D"

    return (
        Column("Data", lambda t: format_date(t.date)),
        Column("Persona", _person),
        Column("Veicolo", _vehicle),
        Column("Partenza", lambda t: t.origin),
        Column("Destinazione", lambda t: t.destination),
        Column("Distanza (km)", lambda t: f"{t.effective_distance:.1f}"),
        Column("A/R", lambda t: "Sì" if t.is_round_trip else "No"),
    )
