"""Data models for pymileage entities."""

from pymileage.models._base import MileageBaseModel
from pymileage.models.person import Person, PersonRole
from pymileage.models.report import DashboardStats, MonthlyReport
from pymileage.models.route import RouteDistance, SavedRoute
from pymileage.models.snapshot import AppState
from pymileage.models.trip import Trip
from pymileage.models.vehicle import Vehicle

__all__ = [
    "AppState",
    "DashboardStats",
    "MileageBaseModel",
    "MonthlyReport",
    "Person",
    "PersonRole",
    "RouteDistance",
    "SavedRoute",
    "Trip",
    "Vehicle",
]
