"""Derived report models.

These are computed on demand from a snapshot and never persisted.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pymileage.models._base import MileageBaseModel
from pymileage.models.trip import Trip


class MonthlyReport(MileageBaseModel):
    """Mileage and reimbursement totals of one person for one month.

    Parameters
    ----------
    month : int
        Zero-based month (``0`` = January).
    year : int
        Four-digit year.
    person_id : str
        The person the report belongs to.
    trips : tuple of Trip
        Every trip of the month, including those whose vehicle is gone.
    total_distance : float
        Sum of effective distances in km.
    total_reimbursement : float
        Sum of ``effective distance * vehicle rate``.
    """

    month: int
    year: int
    person_id: str
    trips: tuple[Trip, ...]
    total_distance: float
    total_reimbursement: float


class DashboardStats(BaseModel):
    """Headline counters shown on the landing page."""

    model_config = ConfigDict(frozen=True)

    people: int
    trips: int
    trips_this_month: int
    saved_routes: int
