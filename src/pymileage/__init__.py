"""pymileage - Mileage reimbursement bookkeeping for staff travel."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pymileage")
except PackageNotFoundError:
    __version__ = "0+local"
from pymileage.book import MileageBook
from pymileage.config import MileageConfig
from pymileage.exceptions import (
    MileageConfigError,
    MileageError,
    MileageStorageError,
    UnknownReferenceError,
)
from pymileage.formatting import format_date
from pymileage.models import (
    AppState,
    DashboardStats,
    MonthlyReport,
    Person,
    PersonRole,
    RouteDistance,
    SavedRoute,
    Trip,
    Vehicle,
)
from pymileage.persistence import DebouncedSaver, FileSlot, MemorySlot, load_state
from pymileage.report import generate_monthly_report
from pymileage.state import StateStore

__all__ = [
    "__version__",
    "AppState",
    "DashboardStats",
    "DebouncedSaver",
    "FileSlot",
    "MemorySlot",
    "MileageBook",
    "MileageConfig",
    "MileageConfigError",
    "MileageError",
    "MileageStorageError",
    "MonthlyReport",
    "Person",
    "PersonRole",
    "RouteDistance",
    "SavedRoute",
    "StateStore",
    "Trip",
    "UnknownReferenceError",
    "Vehicle",
    "format_date",
    "generate_monthly_report",
    "load_state",
]
