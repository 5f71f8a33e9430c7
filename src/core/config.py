"""Runtime configuration model for Reissue.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_DATABASE_URL,
    DEFAULT_DURATION_UNIT,
    DEFAULT_SOURCE_DIR,
    SUPPORTED_DURATION_UNITS,
)
from core.errors import ReissueConfigError


@dataclass(frozen=True)
class ReissueConfig:
    """Validated runtime configuration.

    Attributes:
        source_dir: Directory holding the four raw CSV sources.
        database_url: SQLAlchemy URL of the normalized store.
        duration_unit: Unit of raw track durations, minutes or seconds.
    """

    source_dir: Path
    database_url: str
    duration_unit: str

    @classmethod
    def from_env(cls) -> "ReissueConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            ReissueConfigError: If environment values are invalid.
        """
        source_dir_value = os.getenv("REISSUE_SOURCE_DIR", str(DEFAULT_SOURCE_DIR))
        database_url = os.getenv("REISSUE_DATABASE_URL", DEFAULT_DATABASE_URL).strip()
        duration_unit = parse_duration_unit(
            os.getenv("REISSUE_DURATION_UNIT", DEFAULT_DURATION_UNIT)
        )
        if not database_url:
            raise ReissueConfigError(
                "Invalid REISSUE_DATABASE_URL value: expected a SQLAlchemy URL, got an "
                "empty string. Unset it to use the default SQLite store."
            )
        return cls(
            source_dir=Path(source_dir_value).expanduser().resolve(),
            database_url=database_url,
            duration_unit=duration_unit,
        )


def parse_duration_unit(raw_value: str) -> str:
    """Parse a raw duration unit value.

    Args:
        raw_value: Raw unit string from environment, CLI, or run file.

    Returns:
        Normalized unit name.

    Raises:
        ReissueConfigError: If the unit is not supported.
    """
    unit = raw_value.strip().lower()
    if unit not in SUPPORTED_DURATION_UNITS:
        raise ReissueConfigError(
            f"Invalid duration unit '{raw_value}': expected one of "
            f"{', '.join(SUPPORTED_DURATION_UNITS)}. "
            "Set REISSUE_DURATION_UNIT to a supported value."
        )
    return unit
