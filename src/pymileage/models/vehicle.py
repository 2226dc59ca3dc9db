"""Vehicle model."""

from __future__ import annotations

from pydantic import Field

from pymileage.models._base import MileageBaseModel


class Vehicle(MileageBaseModel):
    """A vehicle owned by exactly one person."""

    id: str
    person_id: str
    """Owner, see :class:`pymileage.models.person.Person`."""
    make: str
    model: str
    plate: str
    reimbursement_rate: float = Field(ge=0)
    """Currency paid per kilometre driven with this vehicle."""

    @property
    def label(self) -> str:
        """Short display label (e.g. ``"Fiat 500 (AB123CD)"``)."""
        return f"{self.make} {self.model} ({self.plate})"
