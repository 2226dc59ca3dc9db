"""Person model."""

from __future__ import annotations

from enum import StrEnum

from pymileage.models._base import MileageBaseModel


class PersonRole(StrEnum):
    """Closed set of staff roles.

    Values are the ones stored in existing documents.
    """

    TEACHER = "docente"
    EMPLOYEE = "dipendente"
    ADMINISTRATOR = "amministratore"


class Person(MileageBaseModel):
    """A member of staff who can claim mileage."""

    id: str
    name: str
    surname: str
    role: PersonRole
    email: str

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.surname}"
