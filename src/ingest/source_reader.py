"""Raw CSV source readers.

This module loads the four raw entity sources into loosely typed rows.
Cell values stay as strings; blank handling belongs to validation.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from core.constants import (
    ALBUM_ENTITY,
    ARTIST_ENTITY,
    GENRE_ENTITY,
    SOURCE_COLUMNS,
    SOURCE_ENCODING,
    TRACK_ENTITY,
)
from core.errors import ReissueSourceError
from core.logging_config import get_logger
from core.types import RawCatalog, RawRow, SourceLocations

_LOGGER = get_logger(__name__)


def read_raw_catalog(locations: SourceLocations) -> RawCatalog:
    """Read all four raw sources.

    Every source is parsed before anything is returned, so a bad file
    fails the run before the store is touched.

    Args:
        locations: Paths of the genre, artist, album, and track CSVs.

    Returns:
        Raw rows per entity in file order.

    Raises:
        ReissueSourceError: If any source is missing or malformed.
    """
    catalog = RawCatalog(
        genres=tuple(read_source_rows(locations.genres, GENRE_ENTITY)),
        artists=tuple(read_source_rows(locations.artists, ARTIST_ENTITY)),
        albums=tuple(read_source_rows(locations.albums, ALBUM_ENTITY)),
        tracks=tuple(read_source_rows(locations.tracks, TRACK_ENTITY)),
    )
    _LOGGER.info(
        "sources_read",
        genres=len(catalog.genres),
        artists=len(catalog.artists),
        albums=len(catalog.albums),
        tracks=len(catalog.tracks),
    )
    return catalog


def read_source_rows(source_path: Path, entity: str) -> list[RawRow]:
    """Read one raw CSV source.

    Args:
        source_path: CSV file path with a header row.
        entity: Entity table name selecting the expected columns.

    Returns:
        Rows restricted to the entity's columns.

    Raises:
        ReissueSourceError: If the file is missing, unparsable, or lacks columns.
    """
    frame = _read_frame(Path(source_path).expanduser(), entity)
    columns = SOURCE_COLUMNS[entity]
    rows: list[RawRow] = []
    for record in frame[list(columns)].to_dict(orient="records"):
        rows.append({column: _cell_text(record[column]) for column in columns})
    return rows


def _read_frame(source_path: Path, entity: str) -> pd.DataFrame:
    """Parse a CSV file into a string-typed frame.

    Args:
        source_path: CSV file path.
        entity: Entity table name for error context.

    Returns:
        Parsed frame with stripped column names.

    Raises:
        ReissueSourceError: If the file cannot be parsed.
    """
    if not source_path.is_file():
        raise ReissueSourceError(
            f"Failed to read {entity} source at {source_path}: file does not exist. "
            "Provide an existing CSV file."
        )
    try:
        frame = pd.read_csv(
            source_path,
            dtype=str,
            keep_default_na=False,
            encoding=SOURCE_ENCODING,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError, OSError) as error:
        raise ReissueSourceError(
            f"Failed to parse {entity} source at {source_path}: {error}. "
            "Fix the CSV and retry the run."
        ) from error
    frame.columns = [str(column).strip() for column in frame.columns]
    missing_columns = [column for column in SOURCE_COLUMNS[entity] if column not in frame.columns]
    if missing_columns:
        raise ReissueSourceError(
            f"Invalid {entity} source at {source_path}: missing columns "
            f"{', '.join(missing_columns)}. Add them to the CSV header."
        )
    return frame


def _cell_text(value: object) -> str | None:
    """Return a cell as text, mapping missing cells to None."""
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return None
    return str(value)
