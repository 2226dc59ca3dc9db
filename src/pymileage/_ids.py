"""Identifier generation."""

from __future__ import annotations

import uuid


def new_id() -> str:
    """Return a fresh opaque identifier (random UUID4 string)."""
    return str(uuid.uuid4())
