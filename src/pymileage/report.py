"""Monthly reimbursement aggregation.

Pure read-side queries over an :class:`~pymileage.models.snapshot.AppState`.
Nothing here changes the snapshot.
"""

from __future__ import annotations

import calendar
import datetime as dt

from pymileage.models.report import DashboardStats, MonthlyReport
from pymileage.models.snapshot import AppState
from pymileage.models.trip import Trip
from pymileage.models.vehicle import Vehicle


def month_window(month: int, year: int) -> tuple[dt.date, dt.date]:
    """Return the first and last calendar day of a zero-based *month*.

    Raises :class:`ValueError` if *month* is outside ``0..11``.
    """
    if not 0 <= month <= 11:
        raise ValueError(f"month must be between 0 and 11, got {month}")
    last_day = calendar.monthrange(year, month + 1)[1]
    return dt.date(year, month + 1, 1), dt.date(year, month + 1, last_day)


def trip_reimbursement(trip: Trip, vehicle: Vehicle | None) -> float:
    """Amount owed for *trip*; ``0`` when its vehicle no longer exists."""
    if vehicle is None:
        return 0.0
    return trip.effective_distance * vehicle.reimbursement_rate


def generate_monthly_report(state: AppState, person_id: str, month: int, year: int) -> MonthlyReport | None:
    """Aggregate a person's trips for one month.

    Returns ``None`` when the person is unknown or made no trips in the
    month. Trips whose vehicle has disappeared are listed but count as zero
    kilometres and zero currency.

    Parameters
    ----------
    state : AppState
        Snapshot to read from.
    person_id : str
        The person to report on.
    month : int
        Zero-based month (``0`` = January, ``11`` = December).
    year : int
        Four-digit year.
    """
    if not any(p.id == person_id for p in state.people):
        return None

    first, last = month_window(month, year)
    trips = tuple(t for t in state.trips if t.person_id == person_id and first <= t.date <= last)
    if not trips:
        return None

    vehicles = {v.id: v for v in state.vehicles}
    total_distance = 0.0
    total_reimbursement = 0.0
    for trip in trips:
        vehicle = vehicles.get(trip.vehicle_id)
        if vehicle is None:
            continue
        total_distance += trip.effective_distance
        total_reimbursement += trip_reimbursement(trip, vehicle)

    return MonthlyReport(
        month=month,
        year=year,
        person_id=person_id,
        trips=trips,
        total_distance=total_distance,
        total_reimbursement=total_reimbursement,
    )


def compute_stats(state: AppState, today: dt.date) -> DashboardStats:
    """Headline counters; "this month" is the calendar month of *today*."""
    this_month = sum(1 for t in state.trips if (t.date.year, t.date.month) == (today.year, today.month))
    return DashboardStats(
        people=len(state.people),
        trips=len(state.trips),
        trips_this_month=this_month,
        saved_routes=len(state.saved_routes),
    )
