"""Trip model."""

from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import Field, field_validator

from pymileage.models._base import MileageBaseModel


class Trip(MileageBaseModel):
    """A single journey made by a person with one of the vehicles.

    ``distance`` is always the one-way figure. Round trips are doubled only
    when read through :attr:`effective_distance`.
    """

    id: str
    person_id: str
    vehicle_id: str
    date: dt.date
    origin: str
    destination: str
    distance: float = Field(ge=0)
    """One-way distance in km."""
    is_round_trip: bool = False

    @field_validator("date", mode="before")
    @classmethod
    def _strip_time_of_day(cls, value: Any) -> Any:
        # Dates are compared by calendar day; "2024-03-10T08:00:00Z" is 2024-03-10.
        if isinstance(value, dt.datetime):
            return value.date()
        if isinstance(value, str):
            text = value.strip()
            for separator in ("T", " "):
                if separator in text:
                    return text.split(separator, 1)[0]
            return text
        return value

    @property
    def effective_distance(self) -> float:
        """Kilometres actually driven (doubled for round trips)."""
        return self.distance * 2 if self.is_round_trip else self.distance
