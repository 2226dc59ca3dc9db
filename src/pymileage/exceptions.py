"""Custom exception hierarchy for pymileage."""

from __future__ import annotations


class MileageError(Exception):
    """Base exception for all pymileage errors."""


class MileageConfigError(MileageError):
    """Invalid or missing configuration."""


class MileageStorageError(MileageError):
    """The persistence slot could not be read."""

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)


class UnknownReferenceError(MileageError):
    """An entity names an owner that does not exist in the store.

    Raised when a vehicle or trip is added or updated with a ``person_id``
    that matches no person in the current snapshot.
    """

    def __init__(self, message: str, *, entity: str = "", reference_id: str = "") -> None:
        self.entity = entity
        self.reference_id = reference_id
        super().__init__(message)
