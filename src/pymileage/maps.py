"""Links to an external maps service for manual distance lookup.

Distances are never computed here: the user opens the link, reads the
kilometres and types them into a trip or saved route.
"""

from __future__ import annotations

from urllib.parse import quote

from pymileage._constants import MAPS_DIRECTIONS_URL


def directions_url(origin: str, destination: str) -> str:
    """Build the directions URL between two addresses.

    Raises :class:`ValueError` if either address is blank.
    """
    if not origin.strip() or not destination.strip():
        raise ValueError("Both origin and destination addresses are required")
    return f"{MAPS_DIRECTIONS_URL}/{quote(origin.strip(), safe='')}/{quote(destination.strip(), safe='')}"
