"""Library configuration for pymileage."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from pymileage._constants import SAVE_DELAY_SECONDS, STORAGE_KEY
from pymileage.exceptions import MileageConfigError


@dataclasses.dataclass(frozen=True)
class MileageConfig:
    """Storage and persistence configuration.

    Parameters
    ----------
    storage_dir : Path or None
        Directory holding the persisted state file. ``None`` keeps the
        state in memory only (nothing survives the process).
    storage_key : str
        Name of the single key-value slot the whole state is written to.
    save_delay : float
        Quiet window in seconds before a change is written back.
    """

    storage_dir: Path | None = None
    storage_key: str = STORAGE_KEY
    save_delay: float = SAVE_DELAY_SECONDS

    def __post_init__(self) -> None:
        if not self.storage_key.strip():
            raise MileageConfigError("storage_key must be non-empty")
        if self.save_delay < 0:
            raise MileageConfigError(f"save_delay must be >= 0, got {self.save_delay}")

    @classmethod
    def from_env(cls, **overrides: Any) -> MileageConfig:
        """Create configuration from environment variables.

        Reads ``MILEAGE_STORAGE_DIR``, ``MILEAGE_STORAGE_KEY`` and
        ``MILEAGE_SAVE_DELAY``. Explicit keyword arguments override
        environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        storage_dir = env.get("MILEAGE_STORAGE_DIR")
        if storage_dir:
            config_kwargs["storage_dir"] = Path(storage_dir).expanduser()

        storage_key = env.get("MILEAGE_STORAGE_KEY")
        if storage_key is not None:
            config_kwargs["storage_key"] = storage_key

        delay_env = env.get("MILEAGE_SAVE_DELAY")
        if delay_env is not None and "save_delay" not in overrides:
            try:
                config_kwargs["save_delay"] = float(delay_env)
            except ValueError as exc:
                raise MileageConfigError(f"MILEAGE_SAVE_DELAY is not a number: {delay_env!r}") from exc

        if isinstance(overrides.get("storage_dir"), str):
            overrides["storage_dir"] = Path(overrides["storage_dir"]).expanduser()

        config_kwargs.update(overrides)
        return cls(**config_kwargs)
