"""Saved route models."""

from __future__ import annotations

from pydantic import Field

from pymileage.models._base import MileageBaseModel


class RouteDistance(MileageBaseModel):
    """One labelled distance option of a saved route (e.g. ``"Autostrada"``)."""

    id: str
    label: str
    distance: float = Field(ge=0)


class SavedRoute(MileageBaseModel):
    """A named origin/destination pair with one or more distance options.

    ``distances`` keeps creation order; it is never re-sorted.
    """

    id: str
    name: str
    origin: str
    destination: str
    distances: tuple[RouteDistance, ...] = ()

    def get_distance(self, distance_id: str) -> RouteDistance | None:
        for option in self.distances:
            if option.id == distance_id:
                return option
        return None
