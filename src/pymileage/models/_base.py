"""Base model for persisted pymileage entities.

Every entity inherits from :class:`MileageBaseModel` which provides:

* ``alias_generator=to_camel`` so the camelCase keys of the persisted
  document map to snake_case fields (``personId`` → ``person_id``).
* ``frozen=True`` so a published snapshot can never be changed in place;
  updates go through ``model_copy`` or a fresh instance.
* ``extra="ignore"`` so keys written by other versions of the document are
  dropped instead of rejected.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class MileageBaseModel(BaseModel):
    """Base for persisted entities."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_document(self) -> dict[str, Any]:
        """Return the JSON-compatible, camelCase form used for persistence."""
        return self.model_dump(mode="json", by_alias=True)
