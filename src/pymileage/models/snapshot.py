"""Application snapshot model."""

from __future__ import annotations

from pymileage.models._base import MileageBaseModel
from pymileage.models.person import Person
from pymileage.models.route import SavedRoute
from pymileage.models.trip import Trip
from pymileage.models.vehicle import Vehicle


class AppState(MileageBaseModel):
    """Every entity collection at one point in time.

    The model is frozen and its collections are tuples, so a snapshot handed
    to a reader stays the same while the store publishes newer ones.
    """

    people: tuple[Person, ...] = ()
    vehicles: tuple[Vehicle, ...] = ()
    trips: tuple[Trip, ...] = ()
    saved_routes: tuple[SavedRoute, ...] = ()
